# path: teamstats/ui/sidebar.py
from __future__ import annotations

from html import escape
from typing import Callable, Dict, Iterable, List

import streamlit as st


# ----------------------------- Public API --------------------------------- #

def build_sidebar(
    *,
    current: str,
    nav_keys: Iterable[str],
    nav_labels: Dict[str, str],
    nav_icons: Dict[str, str],
    app_title: str,
    app_tagline: str,
    app_version: str,
    logout: Callable[[], None],
) -> None:
    """Render the sidebar: title card, page navigation, sign-out and version footer."""
    nav_options: List[str] = list(nav_keys)
    nav_display = {
        k: f"{nav_icons.get(k, '')} {nav_labels.get(k, k)}".strip() for k in nav_options
    }

    with st.sidebar:
        st.markdown(_build_header_html(app_title, app_tagline), unsafe_allow_html=True)

        if nav_options:
            _build_nav(current, nav_options, nav_display)

        auth = st.session_state.get("auth", {})
        if auth.get("authenticated"):
            user = auth.get("user") or ""
            st.caption(f"Signed in as **{escape(str(user))}**")
            st.button(
                "Sign out",
                on_click=logout,
                type="secondary",
                key="sidebar-signout",
                use_container_width=True,
            )

        st.markdown(_build_footer_html(app_title, app_version), unsafe_allow_html=True)


__all__ = ["build_sidebar"]


# --------------------------- Internal helpers ------------------------------ #

def _build_header_html(title: str, tagline: str) -> str:
    tagline_html = f"<p class='sb-tagline'>{escape(tagline)}</p>" if tagline else ""
    return (
        f"""
        <div class='sb-header-card' role='banner'>
          <h1 class='sb-title'>{escape(title or "")}</h1>
          {tagline_html}
        </div>
        """.strip()
    )


def _build_nav(current: str, options: List[str], display_map: Dict[str, str]) -> None:
    key = "sidebar_nav"

    # the radio follows current_page, which go() may have changed since the last run
    selected = current if current in options else options[0]
    if st.session_state.get(key) != selected:
        st.session_state[key] = selected

    def _handle_change() -> None:
        target = st.session_state.get(key)
        if not target or target not in options:
            return
        st.session_state["current_page"] = target
        st.query_params["p"] = target

    st.radio(
        "Navigate",
        options=options,
        format_func=lambda k: display_map.get(k, k),
        key=key,
        label_visibility="collapsed",
        on_change=_handle_change,
    )


def _build_footer_html(title: str, version: str) -> str:
    return (
        f"""
        <footer class='sb-footer-line' aria-label='Application version'>
          <span class='sb-footer-title'>{escape(title or "")}</span>
          <span class='sb-version'>v{escape(version or "")}</span>
        </footer>
        """.strip()
    )
