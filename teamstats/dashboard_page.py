"""Dashboard: latest results and season totals per player."""

from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.express as px
import streamlit as st

from teamstats.config import LATEST_MATCHES_LIMIT
from teamstats.services import matches as match_service
from teamstats.services import player_stats as stat_service
from teamstats.time_utils import format_match_date
from teamstats.ui import go

TOTALS_HEADERS = {
    "player_name": "Player",
    "total_assists": "Assists",
    "total_right_foot_goals": "Goals R",
    "total_left_foot_goals": "Goals L",
    "total_header_goals": "Goals H",
    "total_penalties": "Pens",
    "total_yellow_cards": "Yellow",
    "total_red_cards": "Red",
}

GOAL_TYPES = {
    "total_right_foot_goals": "Right foot",
    "total_left_foot_goals": "Left foot",
    "total_header_goals": "Header",
    "total_penalties": "Penalty",
}

# ---------- data ----------

@st.cache_data(ttl=60, show_spinner=False)
def _load_latest_matches() -> List[Dict[str, Any]]:
    return match_service.list_latest_matches(LATEST_MATCHES_LIMIT)


@st.cache_data(ttl=60, show_spinner=False)
def _load_totals() -> List[Dict[str, Any]]:
    return stat_service.list_player_totals()


def latest_matches_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    records = [
        {
            "Date": format_match_date(r.get("match_date")),
            "Match": f"{r.get('home_team_id', '')} vs {r.get('away_team_id', '')}",
            "Result": f"{r.get('home_goals', 0)} - {r.get('away_goals', 0)}",
            "Competition": r.get("competition") or "-",
        }
        for r in rows
    ]
    return pd.DataFrame(records, columns=["Date", "Match", "Result", "Competition"])


def totals_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=list(TOTALS_HEADERS))
    for column in list(TOTALS_HEADERS)[1:]:
        df[column] = pd.to_numeric(df[column], errors="coerce").fillna(0).astype(int)
    return df.rename(columns=TOTALS_HEADERS)


def goals_chart(rows: List[Dict[str, Any]]):
    """Stacked bar of goals by type per player, or ``None`` when nobody scored."""
    df = pd.DataFrame(rows, columns=["player_name", *GOAL_TYPES])
    if df.empty:
        return None
    long = df.melt(id_vars="player_name", var_name="type", value_name="goals")
    long["goals"] = pd.to_numeric(long["goals"], errors="coerce").fillna(0).astype(int)
    if long["goals"].sum() == 0:
        return None
    long["type"] = long["type"].map(GOAL_TYPES)
    fig = px.bar(
        long,
        x="player_name",
        y="goals",
        color="type",
        labels={"player_name": "Player", "goals": "Goals", "type": "Type"},
    )
    fig.update_layout(barmode="stack", margin=dict(l=10, r=10, t=30, b=10), height=360)
    return fig


# ---------- page ----------

def show_dashboard_page() -> None:
    st.title("🏠 Dashboard")

    with st.container(border=True):
        head, action = st.columns([4, 1])
        head.subheader("Latest matches")
        if action.button("Manage matches", key="dash__go_matches", use_container_width=True):
            go("Matches")
        try:
            matches = _load_latest_matches()
        except RuntimeError as exc:
            st.error(f"Error loading matches: {exc}")
        else:
            if matches:
                st.dataframe(latest_matches_frame(matches), hide_index=True, use_container_width=True)
            else:
                st.info("No recent matches found.")

    with st.container(border=True):
        head, action = st.columns([4, 1])
        head.subheader("Player stats summary")
        if action.button("Manage stats", key="dash__go_stats", use_container_width=True):
            go("Player Stats")
        try:
            totals = _load_totals()
        except RuntimeError as exc:
            st.error(f"Error loading player stats: {exc}")
        else:
            if totals:
                st.dataframe(totals_frame(totals), hide_index=True, use_container_width=True)
                fig = goals_chart(totals)
                if fig is not None:
                    st.plotly_chart(fig, use_container_width=True)
            else:
                st.info("No player stats found.")


__all__ = ["goals_chart", "latest_matches_frame", "show_dashboard_page", "totals_frame"]
