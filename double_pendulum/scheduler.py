"""Repeating tick on a background thread."""

from __future__ import annotations

import inspect
import logging
import threading
import weakref
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Ticker:
    """Calls ``callback`` every ``interval`` seconds until cancelled.

    Each ticker runs a single daemon thread and can be started once. A
    callback always finishes before the next one begins. A bound-method
    callback is held weakly: once its owner is garbage collected the ticker
    stops on its own.
    """

    def __init__(self, interval: float, callback: Callable[[], None], name: str = "pendulum-ticker") -> None:
        self.interval = float(interval)
        self.name = name
        if inspect.ismethod(callback):
            self._callback_ref = weakref.WeakMethod(callback)
        else:
            self._callback_ref = lambda: callback
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return self._thread is not None and not self._stop.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("ticker already started")
        t = threading.Thread(target=self._loop, name=self.name)
        t.daemon = True
        self._thread = t
        t.start()

    def cancel(self) -> None:
        self._stop.set()
        t = self._thread
        if t is not None and t is not threading.current_thread():
            t.join()

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            if not self._fire():
                self._stop.set()

    def _fire(self) -> bool:
        # the callback reference must not outlive this call
        callback = self._callback_ref()
        if callback is None:
            logger.info("owner of %s is gone, stopping", self.name)
            return False
        try:
            callback()
        except Exception:
            logger.exception("tick failed, stopping %s", self.name)
            return False
        return True
