"""Service layer for match results.

All Supabase calls for the ``matches`` table live here so the Streamlit pages
only deal with forms and tables.  Payloads are validated through
:mod:`teamstats.payloads` before they reach the backend.
"""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from postgrest.exceptions import APIError

from teamstats.config import LATEST_MATCHES_LIMIT
from teamstats.db_tables import MATCHES
from teamstats.logs import get_logger
from teamstats.payloads import build_match_payload
from teamstats.supabase_client import format_api_error, get_client

__all__ = [
    "list_matches",
    "list_latest_matches",
    "create_match",
    "update_match",
    "delete_match",
]

log = get_logger(__name__)


def _client():
    client = get_client()
    if client is None:  # pragma: no cover
        raise RuntimeError("Supabase client not configured")
    return client


def _fail(context: str, exc: APIError) -> RuntimeError:
    message = format_api_error(context, exc)
    log.error(message)
    return RuntimeError(message)


def list_matches() -> List[Dict[str, Any]]:
    """Return every match, most recent first."""

    try:
        response = (
            _client().table(MATCHES).select("*").order("match_date", desc=True).execute()
        )
    except APIError as exc:
        raise _fail("list_matches", exc) from exc
    return response.data or []


def list_latest_matches(limit: int = LATEST_MATCHES_LIMIT) -> List[Dict[str, Any]]:
    try:
        response = (
            _client()
            .table(MATCHES)
            .select("*")
            .order("match_date", desc=True)
            .limit(limit)
            .execute()
        )
    except APIError as exc:
        raise _fail("list_latest_matches", exc) from exc
    return response.data or []


def create_match(values: Mapping[str, Any]) -> Dict[str, Any]:
    payload = build_match_payload(values)
    try:
        response = _client().table(MATCHES).insert(payload).execute()
    except APIError as exc:
        raise _fail("create_match", exc) from exc

    rows = response.data or []
    if not rows:
        raise RuntimeError("Supabase did not return the created match")
    log.info("Created match %s vs %s", payload["home_team_id"], payload["away_team_id"])
    return rows[0]


def update_match(match_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    if not match_id:
        raise ValueError("match_id is required")

    payload = build_match_payload(values)
    try:
        response = _client().table(MATCHES).update(payload).eq("id", match_id).execute()
    except APIError as exc:
        raise _fail("update_match", exc) from exc

    rows = response.data or []
    if not rows:
        raise RuntimeError("Match not found for update")
    log.info("Updated match %s", match_id)
    return rows[0]


def delete_match(match_id: str) -> None:
    if not match_id:
        raise ValueError("match_id is required")
    try:
        _client().table(MATCHES).delete().eq("id", match_id).execute()
    except APIError as exc:
        raise _fail("delete_match", exc) from exc
    log.info("Deleted match %s", match_id)
