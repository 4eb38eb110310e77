import pytest

from teamstats.services import player_stats as stat_service


@pytest.fixture
def client(monkeypatch, fake_client):
    monkeypatch.setattr(stat_service, "get_client", lambda: fake_client)
    return fake_client


def _form(name="Aino", **counters):
    values = {"player_name": name, "match_details": "vs FC Rivals", "notes": ""}
    values.update(counters)
    return values


def test_create_player_stat_defaults_counters_to_zero(client):
    row = stat_service.create_player_stat(_form(right_foot_goals=2))

    assert row["player_name"] == "Aino"
    assert row["right_foot_goals"] == 2
    assert row["assists"] == 0
    assert row["red_cards"] == 0


def test_create_player_stat_requires_name(client):
    with pytest.raises(ValueError, match="Player name is required"):
        stat_service.create_player_stat(_form(name="   "))
    assert client.calls == []


def test_list_player_names_is_distinct_and_sorted(client):
    for name in ["mikko", "Aino", "Liisa", "Aino", " "]:
        client.db.setdefault("player_stats", []).append({"id": name, "player_name": name})

    assert stat_service.list_player_names() == ["Aino", "Liisa", "mikko"]
    table, op, _, _ = client.calls[-1]
    assert (table, op) == ("player_stats", "select")


def test_list_player_totals_coerces_missing_values(client):
    client.db["player_total_stats"] = [
        {"player_name": "Aino", "total_assists": "3", "total_right_foot_goals": None},
        {"player_name": "Liisa", "total_header_goals": 2.0, "total_red_cards": "x"},
    ]

    totals = stat_service.list_player_totals()

    assert totals[0]["total_assists"] == 3
    assert totals[0]["total_right_foot_goals"] == 0
    assert totals[1]["total_header_goals"] == 2
    assert totals[1]["total_red_cards"] == 0
    assert list(totals[0]) == ["player_name", *stat_service.TOTAL_COLUMNS]


def test_update_and_delete_player_stat(client):
    created = stat_service.create_player_stat(_form(assists=1))
    updated = stat_service.update_player_stat(created["id"], _form(assists=2))
    assert updated["assists"] == 2

    stat_service.delete_player_stat(created["id"])
    assert stat_service.list_player_stats() == []


def test_negative_counter_rejected(client):
    with pytest.raises(ValueError, match="cannot be negative"):
        stat_service.create_player_stat(_form(yellow_cards=-1))


def test_api_errors_become_runtime_errors(monkeypatch, failing_client):
    monkeypatch.setattr(stat_service, "get_client", lambda: failing_client)

    with pytest.raises(RuntimeError, match="list_player_totals: permission denied"):
        stat_service.list_player_totals()
