"""Matches page: add, edit and delete match results.

Guidelines:
- all Supabase access goes through ``teamstats.services.matches``
- form values live in session state so edit mode can pre-fill them
- every successful write clears cached reads (this page and the dashboard)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import streamlit as st

from teamstats.payloads import MATCH_FIELDS, empty_match_form
from teamstats.services import matches as match_service
from teamstats.time_utils import format_match_date, to_date
from teamstats.ui import confirm_delete, show_error, show_success

_EDIT_KEY = "matches__editing_id"
_PENDING_KEY = "matches__pending_form"


def _field_key(field: str) -> str:
    return f"matches__{field}"


@st.cache_data(ttl=60, show_spinner=False)
def _load_matches() -> List[Dict[str, Any]]:
    return match_service.list_matches()


def _invalidate() -> None:
    st.cache_data.clear()


def _queue_form(values: Dict[str, Any]) -> None:
    """Widgets can't be changed after they render; apply on the next run."""
    st.session_state[_PENDING_KEY] = values


def _apply_pending_form() -> None:
    values = st.session_state.pop(_PENDING_KEY, None)
    if values is None and _field_key("home_goals") not in st.session_state:
        values = empty_match_form()
    if values is None:
        return
    for field in MATCH_FIELDS:
        st.session_state[_field_key(field)] = values.get(field)


def _row_to_form(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "match_date": to_date(row.get("match_date")),
        "home_team_id": row.get("home_team_id") or "",
        "away_team_id": row.get("away_team_id") or "",
        "competition": row.get("competition") or "",
        "home_goals": int(row.get("home_goals") or 0),
        "away_goals": int(row.get("away_goals") or 0),
        "notes": row.get("notes") or "",
    }


def _start_edit(row: Dict[str, Any]) -> None:
    st.session_state[_EDIT_KEY] = str(row.get("id"))
    _queue_form(_row_to_form(row))


def _cancel_edit() -> None:
    st.session_state.pop(_EDIT_KEY, None)
    _queue_form(empty_match_form())


def _delete(match_id: str) -> None:
    try:
        match_service.delete_match(match_id)
    except (RuntimeError, ValueError) as exc:
        show_error(f"Error deleting the match: {exc}")
        return
    _invalidate()
    show_success("Match deleted successfully!")
    if st.session_state.get(_EDIT_KEY) == match_id:
        _cancel_edit()


def _collect_form() -> Dict[str, Any]:
    return {field: st.session_state.get(_field_key(field)) for field in MATCH_FIELDS}


def _submit(editing_id: Optional[str]) -> None:
    values = _collect_form()
    try:
        if editing_id:
            match_service.update_match(editing_id, values)
        else:
            match_service.create_match(values)
    except ValueError as exc:
        st.error(str(exc))
        return
    except RuntimeError as exc:
        action = "updating" if editing_id else "adding"
        st.error(f"Error {action} the match: {exc}")
        return

    _invalidate()
    if editing_id:
        show_success("Match updated successfully!")
        st.session_state.pop(_EDIT_KEY, None)
        _queue_form(empty_match_form())
    else:
        show_success("Match added successfully!")
        # keep team names for quick entry of the next result
        _queue_form(empty_match_form(keep=values))
    st.rerun()


def render_match_form(editing_id: Optional[str]) -> None:
    st.subheader("Edit match" if editing_id else "Add new match")
    with st.form(key="matches__form", border=True):
        st.date_input("Match date", key=_field_key("match_date"), format="DD/MM/YYYY")
        st.text_input("Home team", key=_field_key("home_team_id"), placeholder="Home team name")
        st.text_input("Away team", key=_field_key("away_team_id"), placeholder="Away team name")
        st.text_input("Competition", key=_field_key("competition"), placeholder="e.g. League, Cup")
        c1, c2 = st.columns(2)
        c1.number_input("Home goals", min_value=0, step=1, key=_field_key("home_goals"))
        c2.number_input("Away goals", min_value=0, step=1, key=_field_key("away_goals"))
        st.text_area("Notes", key=_field_key("notes"), placeholder="Notes about the match")
        submitted = st.form_submit_button(
            "Save changes" if editing_id else "Add match", type="primary"
        )

    if editing_id:
        st.button("Cancel edit", key="matches__cancel_edit", on_click=_cancel_edit)

    if submitted:
        _submit(editing_id)


def render_match_list(rows: List[Dict[str, Any]]) -> None:
    st.subheader("All matches")
    if not rows:
        st.info("No matches found. Add a match above.")
        return

    widths = [2, 2, 2, 1, 2, 3, 1, 1]
    header = st.columns(widths)
    for col, title in zip(
        header, ["Date", "Home team", "Away team", "Result", "Competition", "Notes", "", ""]
    ):
        col.markdown(f"**{title}**")

    for row in rows:
        match_id = str(row.get("id"))
        cols = st.columns(widths)
        cols[0].write(format_match_date(row.get("match_date")))
        cols[1].write(row.get("home_team_id") or "")
        cols[2].write(row.get("away_team_id") or "")
        cols[3].write(f"{row.get('home_goals', 0)} - {row.get('away_goals', 0)}")
        cols[4].write(row.get("competition") or "-")
        cols[5].write(row.get("notes") or "-")
        cols[6].button("✏️", key=f"matches__edit_{match_id}", help="Edit", on_click=_start_edit, args=(row,))
        if cols[7].button("🗑️", key=f"matches__del_{match_id}", help="Delete"):
            confirm_delete(
                "This action cannot be undone. The selected match will be permanently deleted.",
                lambda mid=match_id: _delete(mid),
                key=f"matches__confirm_{match_id}",
            )


def show_matches_page() -> None:
    st.title("📅 Matches")
    _apply_pending_form()

    try:
        rows = _load_matches()
    except RuntimeError as exc:
        st.error(f"Error loading matches: {exc}")
        return

    editing_id = st.session_state.get(_EDIT_KEY)
    if editing_id and not any(str(r.get("id")) == str(editing_id) for r in rows):
        editing_id = None
        st.session_state.pop(_EDIT_KEY, None)

    render_match_form(editing_id)
    st.divider()
    render_match_list(rows)


__all__ = ["show_matches_page"]
