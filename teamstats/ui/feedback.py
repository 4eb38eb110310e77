"""Success/error toasts that survive a ``st.rerun``."""

from __future__ import annotations

from typing import List, Tuple

import streamlit as st

_FLASH_KEY = "_flash_messages"


def _queue(kind: str, message: str) -> None:
    st.session_state.setdefault(_FLASH_KEY, []).append((kind, message))


def show_success(message: str) -> None:
    """Queue a success toast; it is rendered on the next :func:`render_flash`."""
    _queue("success", message)


def show_error(message: str) -> None:
    _queue("error", message)


def render_flash() -> None:
    messages: List[Tuple[str, str]] = st.session_state.pop(_FLASH_KEY, [])
    for kind, message in messages:
        st.toast(message, icon="✅" if kind == "success" else "❌")
        if kind == "error":
            st.error(message)


__all__ = ["render_flash", "show_error", "show_success"]
