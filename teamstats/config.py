"""Settings lookup: Streamlit secrets first, environment variables second."""

from __future__ import annotations

import os
from typing import Optional

try:
    import streamlit as st
except Exception:  # pragma: no cover - allow headless usage (tests / CLI)
    st = None

APP_TITLE = "14 Leon"
APP_TAGLINE = "Match & player stats"
APP_VERSION = "1.0.0"

LATEST_MATCHES_LIMIT = 5
PLAYER_NAMES_TTL = 60 * 5
HTTP_TIMEOUT = 10.0
HTTP_CONNECT_TIMEOUT = 5.0


def get_setting(section: str, key: str, env: str) -> Optional[str]:
    """
    Prefer Streamlit secrets:
      st.secrets[section][key]

    Fallback to env:
      env
    """
    value = None
    if st is not None:
        try:
            value = st.secrets[section][key]
        except Exception:
            value = None
    value = value or os.getenv(env)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def supabase_settings() -> tuple[Optional[str], Optional[str]]:
    return (
        get_setting("supabase", "url", "SUPABASE_URL"),
        get_setting("supabase", "anon_key", "SUPABASE_ANON_KEY"),
    )


def single_user_credentials() -> tuple[Optional[str], Optional[str]]:
    return (
        get_setting("auth", "user_id", "APP_SINGLE_USER_ID"),
        get_setting("auth", "password", "APP_SINGLE_PASSWORD"),
    )


__all__ = [
    "APP_TITLE",
    "APP_TAGLINE",
    "APP_VERSION",
    "HTTP_CONNECT_TIMEOUT",
    "HTTP_TIMEOUT",
    "LATEST_MATCHES_LIMIT",
    "PLAYER_NAMES_TTL",
    "get_setting",
    "single_user_credentials",
    "supabase_settings",
]
