from __future__ import annotations

import logging
import math

import streamlit as st

from double_pendulum.config import DEFAULT_CONFIG
from double_pendulum.physics import total_energy
from double_pendulum.render import FrameBuffer, pendulum_figure, phase_figure
from double_pendulum.sim_session import InvalidParameterError, SimulationController, read_parameters

logger = logging.getLogger(__name__)

SLIDERS = {
    # key: (label, min, max, default)
    "mass1": ("Masse 1", 1, 30, int(DEFAULT_CONFIG.initial_mass1)),
    "mass2": ("Masse 2", 1, 30, int(DEFAULT_CONFIG.initial_mass2)),
    "phi1": ("φ₁ (°)", -180, 180, int(DEFAULT_CONFIG.initial_phi1_deg)),
    "phi2": ("φ₂ (°)", -180, 180, int(DEFAULT_CONFIG.initial_phi2_deg)),
}


def _ensure_session() -> SimulationController:
    if "sim" not in st.session_state:
        buffer = FrameBuffer()
        sim = SimulationController(buffer, DEFAULT_CONFIG)
        st.session_state.frames = buffer
        st.session_state.sim = sim
        st.session_state.energy_ref = None
        st.session_state.form_error = None
        sim.preview()
    return st.session_state.sim


def _on_slider_change(key: str) -> None:
    sim: SimulationController = st.session_state.sim
    value = st.session_state[key]
    if key.startswith("phi"):
        value = math.radians(value)
    sim.preview(**{key: value})


def _on_submit() -> None:
    sim: SimulationController = st.session_state.sim
    try:
        params = read_parameters(
            st.session_state.mass1,
            st.session_state.mass2,
            st.session_state.phi1,
            st.session_state.phi2,
        )
    except InvalidParameterError as exc:
        logger.warning("rejected parameters: %s", exc)
        st.session_state.form_error = str(exc)
        return
    st.session_state.form_error = None
    sim.submit(params)
    st.session_state.energy_ref = total_energy(sim.state)


def _controls() -> None:
    for key, (label, lo, hi, default) in SLIDERS.items():
        st.sidebar.slider(label, min_value=lo, max_value=hi, value=default, step=1, key=key,
                          on_change=_on_slider_change, args=(key,))
    st.sidebar.button("Start", type="primary", on_click=_on_submit)
    if st.session_state.form_error:
        st.sidebar.error(st.session_state.form_error)


@st.fragment(run_every=DEFAULT_CONFIG.refresh_interval)
def _live_view() -> None:
    sim: SimulationController = st.session_state.sim
    frame = st.session_state.frames.latest(DEFAULT_CONFIG.max_plot_points)

    col_a, col_b = st.columns([7, 5])
    with col_a:
        st.plotly_chart(pendulum_figure(frame.geometry), use_container_width=False,
                        config={"staticPlot": True, "displayModeBar": False})
    with col_b:
        st.plotly_chart(phase_figure(frame.trace), use_container_width=False,
                        config={"staticPlot": True, "displayModeBar": False})

    state = sim.state
    e0 = st.session_state.energy_ref
    c1, c2, c3 = st.columns(3)
    c1.metric("Ticks", sim.ticks)
    c2.metric("t (s)", f"{sim.ticks * DEFAULT_CONFIG.time_step:.2f}")
    if e0 is not None and e0 != 0.0:
        drift = abs(total_energy(state) - e0) / abs(e0)
        c3.metric("ΔE/E", f"{drift * 100.0:.3f}%")
    else:
        c3.metric("ΔE/E", "–")

    with st.expander("Details (State)", expanded=False):
        st.write({
            "running": sim.running,
            "phi1": state.phi1,
            "phi2": state.phi2,
            "omega1": state.omega1,
            "omega2": state.omega2,
            "mass1": state.mass1,
            "mass2": state.mass2,
            "plotted_points": len(frame.trace),
        })


def main() -> None:
    st.set_page_config(page_title="Doppelpendel", layout="wide")
    _ensure_session()

    st.title("Doppelpendel")
    st.caption("Semi-impliziter Euler, Phasenraum φ₁ gegen φ₂")

    _controls()
    _live_view()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
