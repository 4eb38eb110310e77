"""Service layer for per-match player statistics and their season totals."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from postgrest.exceptions import APIError

from teamstats.db_tables import PLAYER_STATS, PLAYER_TOTAL_STATS
from teamstats.logs import get_logger
from teamstats.payloads import build_player_stat_payload
from teamstats.supabase_client import format_api_error, get_client

__all__ = [
    "TOTAL_COLUMNS",
    "list_player_stats",
    "list_player_names",
    "list_player_totals",
    "normalize_totals",
    "create_player_stat",
    "update_player_stat",
    "delete_player_stat",
]

log = get_logger(__name__)

# Dashboard column order: assists first, then goals by type, then cards.
TOTAL_COLUMNS = (
    "total_assists",
    "total_right_foot_goals",
    "total_left_foot_goals",
    "total_header_goals",
    "total_penalties",
    "total_yellow_cards",
    "total_red_cards",
)


def _client():
    client = get_client()
    if client is None:  # pragma: no cover
        raise RuntimeError("Supabase client not configured")
    return client


def _fail(context: str, exc: APIError) -> RuntimeError:
    message = format_api_error(context, exc)
    log.error(message)
    return RuntimeError(message)


def list_player_stats() -> List[Dict[str, Any]]:
    """Return every stat entry, newest first."""

    try:
        response = (
            _client().table(PLAYER_STATS).select("*").order("created_at", desc=True).execute()
        )
    except APIError as exc:
        raise _fail("list_player_stats", exc) from exc
    return response.data or []


def list_player_names() -> List[str]:
    """Distinct player names already recorded, for input suggestions."""

    try:
        response = _client().table(PLAYER_STATS).select("player_name").execute()
    except APIError as exc:
        raise _fail("list_player_names", exc) from exc

    seen = set()
    names: List[str] = []
    for row in response.data or []:
        name = str(row.get("player_name") or "").strip()
        if name and name not in seen:
            seen.add(name)
            names.append(name)
    return sorted(names, key=str.casefold)


def _to_int(value: Any) -> int:
    try:
        return int(float(value or 0))
    except (TypeError, ValueError):
        return 0


def normalize_totals(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Coerce the view's aggregate columns to ints (missing/NULL -> 0)."""

    out: List[Dict[str, Any]] = []
    for row in rows:
        item: Dict[str, Any] = {"player_name": row.get("player_name")}
        for column in TOTAL_COLUMNS:
            item[column] = _to_int(row.get(column))
        out.append(item)
    return out


def list_player_totals() -> List[Dict[str, Any]]:
    """Read the pre-aggregated ``player_total_stats`` view."""

    try:
        response = _client().table(PLAYER_TOTAL_STATS).select("*").execute()
    except APIError as exc:
        raise _fail("list_player_totals", exc) from exc
    return normalize_totals(response.data or [])


def create_player_stat(values: Mapping[str, Any]) -> Dict[str, Any]:
    payload = build_player_stat_payload(values)
    try:
        response = _client().table(PLAYER_STATS).insert(payload).execute()
    except APIError as exc:
        raise _fail("create_player_stat", exc) from exc

    rows = response.data or []
    if not rows:
        raise RuntimeError("Supabase did not return the created stat entry")
    log.info("Created stat entry for %s", payload["player_name"])
    return rows[0]


def update_player_stat(stat_id: str, values: Mapping[str, Any]) -> Dict[str, Any]:
    if not stat_id:
        raise ValueError("stat_id is required")

    payload = build_player_stat_payload(values)
    try:
        response = _client().table(PLAYER_STATS).update(payload).eq("id", stat_id).execute()
    except APIError as exc:
        raise _fail("update_player_stat", exc) from exc

    rows = response.data or []
    if not rows:
        raise RuntimeError("Stat entry not found for update")
    log.info("Updated stat entry %s", stat_id)
    return rows[0]


def delete_player_stat(stat_id: str) -> None:
    if not stat_id:
        raise ValueError("stat_id is required")
    try:
        _client().table(PLAYER_STATS).delete().eq("id", stat_id).execute()
    except APIError as exc:
        raise _fail("delete_player_stat", exc) from exc
    log.info("Deleted stat entry %s", stat_id)
