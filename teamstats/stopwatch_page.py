"""Stopwatch page hosting one :class:`MatchTimer` per browser session."""

from __future__ import annotations

from html import escape

import streamlit as st

from teamstats.match_timer import MatchTimer, TimerView

_TIMER_KEY = "stopwatch__timer"

# Screen refresh while running; the timer itself still ticks every 10 ms.
DISPLAY_REFRESH_S = 0.1


def get_timer() -> MatchTimer:
    timer = st.session_state.get(_TIMER_KEY)
    if not isinstance(timer, MatchTimer):
        timer = MatchTimer()
        st.session_state[_TIMER_KEY] = timer
    return timer


def teardown_timer() -> None:
    """Release the timer when the user leaves the page (state is not kept)."""
    timer = st.session_state.pop(_TIMER_KEY, None)
    if isinstance(timer, MatchTimer):
        timer.close()


def _draw(view: TimerView, timer: MatchTimer) -> None:
    if view.displayed_label:
        st.markdown(
            f"<div style='text-align:center;font-size:1.25rem;font-weight:600'>"
            f"{escape(view.displayed_label)}</div>",
            unsafe_allow_html=True,
        )

    st.markdown(
        f"<div style='text-align:center;font-family:monospace;font-size:4rem'>"
        f"{escape(view.formatted_time)}</div>",
        unsafe_allow_html=True,
    )

    c_run, c_reset, c_period = st.columns(3)
    run_label = "⏸ Stop" if view.running else "▶ Start"
    if c_run.button(
        run_label,
        key="stopwatch__toggle",
        type="primary" if not view.running else "secondary",
        use_container_width=True,
    ):
        timer.toggle_running()
        st.rerun()

    if c_reset.button(
        "↺ Reset",
        key="stopwatch__reset",
        disabled=view.reset_disabled,
        use_container_width=True,
    ):
        timer.reset()
        st.rerun()

    if c_period.button(
        "⚑ Select period",
        key="stopwatch__period",
        disabled=view.select_period_disabled,
        use_container_width=True,
    ):
        timer.request_label_selection()
        st.rerun()

    if view.selecting_label and view.running:
        cols = st.columns(len(view.available_labels))
        for col, label in zip(cols, view.available_labels):
            if col.button(label, key=f"stopwatch__label_{label}", use_container_width=True):
                timer.select_label(label)
                st.rerun()


def show_stopwatch_page() -> None:
    st.title("⏱ Stopwatch")

    timer = get_timer()
    run_every = DISPLAY_REFRESH_S if timer.state.running else None

    @st.fragment(run_every=run_every)
    def _timer_panel() -> None:
        with st.container(border=True):
            timer.render(lambda view: _draw(view, timer))

    _timer_panel()


__all__ = ["get_timer", "show_stopwatch_page", "teardown_timer"]
