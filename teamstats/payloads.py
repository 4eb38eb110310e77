"""Helpers for validating form input and building Supabase payloads."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

from teamstats.time_utils import utc_iso

MATCH_FIELDS = (
    "match_date",
    "home_team_id",
    "away_team_id",
    "competition",
    "home_goals",
    "away_goals",
    "notes",
)

STAT_COUNTERS = (
    "right_foot_goals",
    "left_foot_goals",
    "header_goals",
    "penalties",
    "assists",
    "yellow_cards",
    "red_cards",
)

PLAYER_STAT_FIELDS = ("player_name", "match_details", *STAT_COUNTERS, "notes")

SAME_TEAMS_MSG = "The away team must be different from the home team."


def _text(value: Any) -> str:
    return str(value or "").strip()


def _optional_text(value: Any) -> Optional[str]:
    return _text(value) or None


def _count(value: Any, label: str) -> int:
    """Coerce a counter input to a non-negative int."""

    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a whole number.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a whole number.") from None
    if not number.is_integer():
        raise ValueError(f"{label} must be a whole number.")
    if number < 0:
        raise ValueError(f"{label} cannot be negative.")
    return int(number)


def _label(field: str) -> str:
    return field.replace("_", " ").capitalize()


def _match_date_iso(value: Any) -> str:
    if isinstance(value, datetime):
        return utc_iso(value) or ""
    if isinstance(value, date):
        return utc_iso(datetime(value.year, value.month, value.day)) or ""
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValueError("Match date is required.")


def build_match_payload(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate match form values and return the row to insert or update."""

    home = _text(values.get("home_team_id"))
    away = _text(values.get("away_team_id"))
    if not home:
        raise ValueError("Home team is required.")
    if not away:
        raise ValueError("Away team is required.")
    if home.lower() == away.lower():
        raise ValueError(SAME_TEAMS_MSG)

    return {
        "match_date": _match_date_iso(values.get("match_date")),
        "home_team_id": home,
        "away_team_id": away,
        "competition": _optional_text(values.get("competition")),
        "home_goals": _count(values.get("home_goals"), "Home goals"),
        "away_goals": _count(values.get("away_goals"), "Away goals"),
        "notes": _optional_text(values.get("notes")),
    }


def build_player_stat_payload(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate player stat form values and return the row to insert or update."""

    player_name = _text(values.get("player_name"))
    if not player_name:
        raise ValueError("Player name is required.")

    payload: Dict[str, Any] = {
        "player_name": player_name,
        "match_details": _optional_text(values.get("match_details")),
    }
    for field in STAT_COUNTERS:
        payload[field] = _count(values.get(field), _label(field))
    payload["notes"] = _optional_text(values.get("notes"))
    return payload


def empty_match_form(keep: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Default match form values; ``keep`` carries team names over for quick entry."""

    keep = keep or {}
    return {
        "match_date": None,
        "home_team_id": _text(keep.get("home_team_id")),
        "away_team_id": _text(keep.get("away_team_id")),
        "competition": "",
        "home_goals": 0,
        "away_goals": 0,
        "notes": "",
    }


def empty_player_stat_form(keep_name: str = "") -> Dict[str, Any]:
    form: Dict[str, Any] = {"player_name": _text(keep_name), "match_details": ""}
    form.update({field: 0 for field in STAT_COUNTERS})
    form["notes"] = ""
    return form


__all__ = [
    "MATCH_FIELDS",
    "PLAYER_STAT_FIELDS",
    "SAME_TEAMS_MSG",
    "STAT_COUNTERS",
    "build_match_payload",
    "build_player_stat_payload",
    "empty_match_form",
    "empty_player_stat_form",
]
