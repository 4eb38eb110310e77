from __future__ import annotations
from typing import Any, Dict, Optional
from functools import lru_cache

import httpx

try:
    import streamlit as st
except Exception:  # pragma: no cover - allow headless usage (tests / CLI)
    st = None

from supabase import Client, ClientOptions, SupabaseException, create_client

from teamstats.config import HTTP_CONNECT_TIMEOUT, HTTP_TIMEOUT, supabase_settings
from teamstats.logs import get_logger

log = get_logger(__name__)


class SupabaseConfigError(RuntimeError):
    """Raised when Supabase credentials are missing from secrets or env."""


class SupabaseConnectionError(RuntimeError):
    """Raised when the client cannot reach Supabase within the timeout window."""


_MISSING_CONFIG_MSG = (
    "Supabase secrets missing. Add `[supabase].url` and `[supabase].anon_key` to "
    "`.streamlit/secrets.toml` or set SUPABASE_URL and SUPABASE_ANON_KEY environment "
    "variables."
)


def _read_supabase_config() -> Dict[str, str]:
    url, key = supabase_settings()
    if not url or not key:
        raise SupabaseConfigError(_MISSING_CONFIG_MSG)
    return {"url": url, "anon_key": key}


def _build_client_options() -> ClientOptions:
    """Return Supabase client options with tighter HTTP timeouts."""

    timeout = httpx.Timeout(HTTP_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT)
    return ClientOptions(
        httpx_client=httpx.Client(timeout=timeout),
        postgrest_client_timeout=timeout,
    )


def _close_options_client(options: ClientOptions) -> None:
    client = getattr(options, "httpx_client", None)
    if client is not None:
        client.close()


def _create_supabase_client() -> Client:
    cfg = _read_supabase_config()
    options = _build_client_options()
    try:
        return create_client(cfg["url"], cfg["anon_key"], options=options)
    except SupabaseException as exc:
        _close_options_client(options)
        raise SupabaseConfigError(str(exc) or _MISSING_CONFIG_MSG) from exc
    except httpx.HTTPStatusError as exc:
        _close_options_client(options)
        status = exc.response.status_code if exc.response is not None else "unknown"
        body = None
        if exc.response is not None:
            try:
                body = exc.response.text
            except Exception:  # pragma: no cover
                body = None
        preview = body.strip().replace("\n", " ")[:200] if body else str(exc)
        log.error("Supabase client HTTP error: %s -> %s", status, preview)
        raise SupabaseConfigError(
            "Supabase responded with HTTP "
            f"{status}. Verify the Supabase URL/anon key in your Streamlit secrets or environment."
        ) from exc
    except httpx.HTTPError as exc:
        _close_options_client(options)
        log.error("Supabase client connection failed: %s", exc)
        raise SupabaseConnectionError(
            "Unable to reach Supabase right now. Check your internet connection and try again."
        ) from exc


if st is not None:

    @st.cache_resource  # type: ignore[misc]
    def get_client() -> Client:
        """Return a cached Supabase client bound to anon key."""
        return _create_supabase_client()

else:

    @lru_cache(maxsize=1)
    def get_client() -> Client:
        """Fallback cached client when Streamlit is unavailable."""
        return _create_supabase_client()


def first_row(rows: Any) -> Optional[Dict[str, Any]]:
    """
    PostgREST Python client returns `.data` as list-like.
    Return the first dict or None.
    """
    if rows is None:
        return None
    data = getattr(rows, "data", rows)
    if isinstance(data, list) and data:
        first = data[0]
        return first if isinstance(first, dict) else None
    return None

__all__ = [
    "get_client",
    "first_row",
    "SupabaseConfigError",
    "SupabaseConnectionError",
]
