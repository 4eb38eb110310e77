from __future__ import annotations

from typing import Callable

import streamlit as st


def confirm_delete(
    message: str,
    on_confirm: Callable[[], None],
    *,
    key: str,
    confirm_text: str = "Delete",
    cancel_text: str = "Cancel",
    title: str = "Are you absolutely sure?",
) -> None:
    """Open a confirmation dialog; ``on_confirm`` runs only when the user confirms."""

    def _body() -> None:
        st.write(message)
        col_ok, col_cancel = st.columns(2)
        if col_ok.button(confirm_text, key=f"{key}__ok", type="primary", use_container_width=True):
            on_confirm()
            st.rerun()
        if col_cancel.button(cancel_text, key=f"{key}__cancel", use_container_width=True):
            st.rerun()

    st.dialog(title)(_body)()


__all__ = ["confirm_delete"]
