"""Supabase client helpers for Team Stats pages."""

from __future__ import annotations

from typing import Any

import streamlit as st

from teamstats.utils.supa import (
    SupabaseConfigError,
    SupabaseConnectionError,
    get_client as _get_cached_client,
)

__all__ = ["get_client", "format_api_error"]


def get_client():
    """Return the shared Supabase client, stopping the page when it cannot be built."""
    try:
        return _get_cached_client()
    except (SupabaseConfigError, SupabaseConnectionError) as exc:
        if hasattr(st, "error") and callable(getattr(st, "error")):
            st.error(str(exc))
            if hasattr(st, "stop"):
                st.stop()
        raise


def format_api_error(context: str, exc: Any) -> str:
    """Flatten a PostgREST ``APIError`` into ``context: message | details | hint``."""
    message = getattr(exc, "message", None) or str(exc)
    hint = getattr(exc, "hint", "")
    details = getattr(exc, "details", "")
    parts = [f"{context}: {message}"]
    if details:
        parts.append(str(details))
    if hint:
        parts.append(str(hint))
    return " | ".join(parts)
