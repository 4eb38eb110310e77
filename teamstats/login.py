"""Streamlit authentication gate for the single team account.

There is exactly one user. Its ID and password come from
``[auth].user_id`` / ``[auth].password`` in ``.streamlit/secrets.toml`` or the
``APP_SINGLE_USER_ID`` / ``APP_SINGLE_PASSWORD`` environment variables. The
logged-in flag lives in ``st.session_state["auth"]`` for the browser session.
"""

from __future__ import annotations

import hmac
from typing import Dict

import streamlit as st

from teamstats.config import single_user_credentials
from teamstats.logs import get_logger
from teamstats.ui.feedback import show_success

log = get_logger(__name__)

_AUTH_STATE_KEY = "auth"
_LAST_ID_KEY = "login__last_id"
_FORM_KEY = "login_form"

CONFIG_ERROR_MSG = "Configuration error: ID or password is not set."


class CredentialsNotConfigured(RuntimeError):
    """Raised when the single-user ID or password is missing from secrets and env."""


def _ensure_auth_state() -> Dict[str, object]:
    auth = st.session_state.setdefault(_AUTH_STATE_KEY, {})
    auth.setdefault("authenticated", False)
    auth.setdefault("user", None)
    return auth


def is_logged_in() -> bool:
    return bool(st.session_state.get(_AUTH_STATE_KEY, {}).get("authenticated"))


def check_credentials(user_id: str, password: str) -> bool:
    """Compare the submitted pair with the configured single-user credentials."""
    expected_id, expected_password = single_user_credentials()
    if not expected_id or not expected_password:
        raise CredentialsNotConfigured(
            "APP_SINGLE_USER_ID or APP_SINGLE_PASSWORD not set in secrets or environment."
        )
    id_ok = hmac.compare_digest(str(user_id).encode("utf-8"), expected_id.encode("utf-8"))
    password_ok = hmac.compare_digest(str(password).encode("utf-8"), expected_password.encode("utf-8"))
    return id_ok and password_ok


def logout() -> None:
    """Forget the logged-in user; the next run shows the login form."""
    auth = _ensure_auth_state()
    if auth.get("authenticated"):
        log.info("User %s signed out", auth.get("user"))
    auth["authenticated"] = False
    auth["user"] = None


def login(title: str = "Sign in") -> None:
    """Render the login form and stop the script unless the user is signed in."""

    auth_state = _ensure_auth_state()
    if auth_state.get("authenticated"):
        return

    with st.form(_FORM_KEY, clear_on_submit=False):
        st.markdown(f"### {title}")
        user_id = st.text_input(
            "ID",
            value=st.session_state.get(_LAST_ID_KEY, ""),
            placeholder="Enter your ID",
        )
        password = st.text_input(
            "Password",
            type="password",
            placeholder="Enter your password",
        )
        submitted = st.form_submit_button("Sign in", type="primary", use_container_width=True)

    if submitted:
        user_id = user_id.strip()
        # keep the ID, drop the password on failure
        st.session_state[_LAST_ID_KEY] = user_id
        if not user_id:
            st.warning("ID is required.")
            st.stop()
        if not password:
            st.warning("Password is required.")
            st.stop()
        try:
            ok = check_credentials(user_id, password)
        except CredentialsNotConfigured as exc:
            log.error("%s", exc)
            st.error(CONFIG_ERROR_MSG)
            st.stop()

        if not ok:
            log.warning("Failed sign-in attempt for ID %r", user_id)
            st.error("Wrong ID or password.")
            st.stop()

        auth_state["authenticated"] = True
        auth_state["user"] = user_id
        log.info("User %s signed in", user_id)
        show_success("Signed in successfully!")
        st.rerun()

    st.stop()


__all__ = ["CredentialsNotConfigured", "check_credentials", "is_logged_in", "login", "logout"]
