# -*- coding: utf-8 -*-
# file: teamstats/app.py
from __future__ import annotations
from pathlib import Path
import sys

import streamlit as st

# ``streamlit run teamstats/app.py`` puts only ``teamstats/`` on sys.path; the
# package imports below need the project root.
_PROJECT_ROOT = str(Path(__file__).resolve().parents[1])
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from teamstats.config import APP_TAGLINE, APP_TITLE, APP_VERSION  # noqa: E402
from teamstats.dashboard_page import show_dashboard_page  # noqa: E402
from teamstats.login import login, logout  # noqa: E402
from teamstats.logs import get_logger  # noqa: E402
from teamstats.matches_page import show_matches_page  # noqa: E402
from teamstats.player_stats_page import show_player_stats_page  # noqa: E402
from teamstats.stopwatch_page import show_stopwatch_page, teardown_timer  # noqa: E402
from teamstats.ui import build_sidebar, render_flash  # noqa: E402

log = get_logger(__name__)


# --------- Nav
NAV_KEYS = [
    "Dashboard",
    "Matches",
    "Player Stats",
    "Stopwatch",
]
NAV_LABELS = {
    "Dashboard": "Dashboard",
    "Matches": "Matches",
    "Player Stats": "Player stats",
    "Stopwatch": "Stopwatch",
}
NAV_ICONS = {
    "Dashboard": "🏠",
    "Matches": "📅",
    "Player Stats": "📊",
    "Stopwatch": "⏱",
}
LEGACY_REMAP = {
    "home": "Dashboard",
    "matches": "Matches",
    "player-stats": "Player Stats",
    "stopwatch": "Stopwatch",
}
PAGE_FUNCS = {
    "Dashboard": show_dashboard_page,
    "Matches": show_matches_page,
    "Player Stats": show_player_stats_page,
    "Stopwatch": show_stopwatch_page,
}


def _initial_page() -> str:
    p = st.query_params.get("p", None)
    p = LEGACY_REMAP.get(p, p)
    return p if p in NAV_KEYS else NAV_KEYS[0]


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, page_icon="⚽", layout="wide", initial_sidebar_state="expanded")

    login(APP_TITLE)

    if "current_page" not in st.session_state:
        st.session_state["current_page"] = _initial_page()

    current = st.session_state.get("current_page", NAV_KEYS[0])

    build_sidebar(
        current=current,
        nav_keys=NAV_KEYS,
        nav_labels=NAV_LABELS,
        nav_icons=NAV_ICONS,
        app_title=APP_TITLE,
        app_tagline=APP_TAGLINE,
        app_version=APP_VERSION,
        logout=logout,
    )

    # the stopwatch lives only while its page is shown
    if current != "Stopwatch":
        teardown_timer()

    render_flash()
    page_func = PAGE_FUNCS.get(current, lambda: st.error("Page not found."))
    page_func()


if __name__ == "__main__":
    main()
