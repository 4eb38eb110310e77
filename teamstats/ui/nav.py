"""Page switching from inside a page (dashboard shortcuts)."""

import streamlit as st


def go(page: str) -> None:
    """Make ``page`` the current page and rerun; the sidebar follows on the next run.

    Must not be used as a widget callback (``st.rerun`` is a no-op there).
    """
    st.session_state["current_page"] = page
    st.query_params["p"] = page
    st.rerun()


__all__ = ["go"]
