"""Player stats page: one entry per player per match."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import streamlit as st

from teamstats.config import PLAYER_NAMES_TTL
from teamstats.logs import get_logger
from teamstats.payloads import PLAYER_STAT_FIELDS, STAT_COUNTERS, empty_player_stat_form
from teamstats.services import player_stats as stat_service
from teamstats.ui import confirm_delete, show_error, show_success

log = get_logger(__name__)

_EDIT_KEY = "stats__editing_id"
_PENDING_KEY = "stats__pending_form"
_PICK_KEY = "stats__pick_name"

COUNTER_LABELS = {
    "right_foot_goals": "Right foot goals",
    "left_foot_goals": "Left foot goals",
    "header_goals": "Header goals",
    "penalties": "Penalties",
    "assists": "Assists",
    "yellow_cards": "Yellow cards",
    "red_cards": "Red cards",
}

# Table column order, same as the dashboard totals.
TABLE_COUNTERS = (
    ("assists", "Assists"),
    ("right_foot_goals", "Goals R"),
    ("left_foot_goals", "Goals L"),
    ("header_goals", "Goals H"),
    ("penalties", "Pens"),
    ("yellow_cards", "Yellow"),
    ("red_cards", "Red"),
)


def _field_key(field: str) -> str:
    return f"stats__{field}"


@st.cache_data(ttl=60, show_spinner=False)
def _load_stats() -> List[Dict[str, Any]]:
    return stat_service.list_player_stats()


@st.cache_data(ttl=PLAYER_NAMES_TTL, show_spinner=False)
def _load_player_names() -> List[str]:
    return stat_service.list_player_names()


def _invalidate() -> None:
    # stats list, name suggestions and dashboard totals
    st.cache_data.clear()


def _queue_form(values: Dict[str, Any]) -> None:
    st.session_state[_PENDING_KEY] = values


def _apply_pending_form() -> None:
    values = st.session_state.pop(_PENDING_KEY, None)
    if values is None and _field_key("player_name") not in st.session_state:
        values = empty_player_stat_form()
    if values is None:
        return
    for field in PLAYER_STAT_FIELDS:
        st.session_state[_field_key(field)] = values.get(field)


def _row_to_form(row: Dict[str, Any]) -> Dict[str, Any]:
    form = empty_player_stat_form(row.get("player_name") or "")
    form["match_details"] = row.get("match_details") or ""
    for field in STAT_COUNTERS:
        form[field] = int(row.get(field) or 0)
    form["notes"] = row.get("notes") or ""
    return form


def _start_edit(row: Dict[str, Any]) -> None:
    st.session_state[_EDIT_KEY] = str(row.get("id"))
    _queue_form(_row_to_form(row))


def _cancel_edit() -> None:
    st.session_state.pop(_EDIT_KEY, None)
    _queue_form(empty_player_stat_form())


def _pick_name() -> None:
    picked = st.session_state.get(_PICK_KEY)
    if picked:
        st.session_state[_field_key("player_name")] = picked


def _delete(stat_id: str) -> None:
    try:
        stat_service.delete_player_stat(stat_id)
    except (RuntimeError, ValueError) as exc:
        show_error(f"Error deleting the stat entry: {exc}")
        return
    _invalidate()
    show_success("Player stat deleted successfully!")
    if st.session_state.get(_EDIT_KEY) == stat_id:
        _cancel_edit()


def _submit(editing_id: Optional[str]) -> None:
    values = {field: st.session_state.get(_field_key(field)) for field in PLAYER_STAT_FIELDS}
    try:
        if editing_id:
            stat_service.update_player_stat(editing_id, values)
        else:
            stat_service.create_player_stat(values)
    except ValueError as exc:
        st.error(str(exc))
        return
    except RuntimeError as exc:
        action = "updating" if editing_id else "adding"
        st.error(f"Error {action} the stat entry: {exc}")
        return

    _invalidate()
    if editing_id:
        show_success("Player stat updated successfully!")
        st.session_state.pop(_EDIT_KEY, None)
        _queue_form(empty_player_stat_form())
    else:
        show_success("Player stat added successfully!")
        _queue_form(empty_player_stat_form(values.get("player_name") or ""))
    st.rerun()


def render_stat_form(editing_id: Optional[str], known_names: List[str]) -> None:
    st.subheader("Edit stat" if editing_id else "Add stat")

    if known_names:
        st.selectbox(
            "Known players",
            options=known_names,
            index=None,
            placeholder="Pick a player to fill the name",
            key=_PICK_KEY,
            on_change=_pick_name,
        )

    with st.form(key="stats__form", border=True):
        st.text_input("Player", key=_field_key("player_name"), placeholder="Player name")
        st.text_input(
            "Match", key=_field_key("match_details"), placeholder="e.g. vs Team B (League)"
        )
        cols = st.columns(4)
        for i, field in enumerate(STAT_COUNTERS):
            cols[i % 4].number_input(
                COUNTER_LABELS[field], min_value=0, step=1, key=_field_key(field)
            )
        st.text_area("Notes", key=_field_key("notes"), placeholder="Notes about this entry")
        submitted = st.form_submit_button(
            "Save changes" if editing_id else "Add stat", type="primary"
        )

    if editing_id:
        st.button("Cancel edit", key="stats__cancel_edit", on_click=_cancel_edit)

    if submitted:
        _submit(editing_id)


def render_stat_list(rows: List[Dict[str, Any]]) -> None:
    st.subheader("All player stats")
    if not rows:
        st.info("No stats found. Add a stat entry above.")
        return

    widths = [2, 2] + [1] * len(TABLE_COUNTERS) + [2, 1, 1]
    header = st.columns(widths)
    titles = ["Player", "Match", *[t for _, t in TABLE_COUNTERS], "Notes", "", ""]
    for col, title in zip(header, titles):
        col.markdown(f"**{title}**")

    for row in rows:
        stat_id = str(row.get("id"))
        cols = st.columns(widths)
        cols[0].write(row.get("player_name") or "")
        cols[1].write(row.get("match_details") or "-")
        for offset, (field, _) in enumerate(TABLE_COUNTERS, start=2):
            cols[offset].write(int(row.get(field) or 0))
        notes_at = 2 + len(TABLE_COUNTERS)
        cols[notes_at].write(row.get("notes") or "-")
        cols[notes_at + 1].button(
            "✏️", key=f"stats__edit_{stat_id}", help="Edit", on_click=_start_edit, args=(row,)
        )
        if cols[notes_at + 2].button("🗑️", key=f"stats__del_{stat_id}", help="Delete"):
            confirm_delete(
                "This action cannot be undone. The selected stat entry will be permanently deleted.",
                lambda sid=stat_id: _delete(sid),
                key=f"stats__confirm_{stat_id}",
            )


def show_player_stats_page() -> None:
    st.title("📊 Player Stats")
    _apply_pending_form()

    try:
        rows = _load_stats()
    except RuntimeError as exc:
        st.error(f"Error loading player stats: {exc}")
        return

    try:
        known_names = _load_player_names()
    except RuntimeError as exc:
        # the page still works without suggestions
        log.warning("Player name suggestions unavailable: %s", exc)
        known_names = []

    editing_id = st.session_state.get(_EDIT_KEY)
    if editing_id and not any(str(r.get("id")) == str(editing_id) for r in rows):
        editing_id = None
        st.session_state.pop(_EDIT_KEY, None)

    render_stat_form(editing_id, known_names)
    st.divider()
    render_stat_list(rows)


__all__ = ["show_player_stats_page"]
