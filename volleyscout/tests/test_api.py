"""
Tests for FastAPI endpoints — Integration tests for the VolleyScout API.
"""

import pytest
from fastapi.testclient import TestClient

from volleyscout.api import routes_matches
from volleyscout.api.app import app
from volleyscout.storage.repository import InMemoryRepository, JsonFileRepository

BASE = "/api/v1"


@pytest.fixture
def client():
    routes_matches.set_repository(InMemoryRepository())
    yield TestClient(app)
    routes_matches.set_repository(None)


@pytest.fixture
def match_id(client):
    r = client.post(f"{BASE}/matches/", json={
        "homeName": "Eagles",
        "awayName": "Hawks",
        "matchLabel": "final",
        "homeLineup": ["1", "2", "3", "4", "5", "6"],
        "awayLineup": ["11", "12", "13", "14", "15", "16"],
    })
    assert r.status_code == 201
    return r.json()["id"]


def _rally(client, mid, **body):
    return client.post(f"{BASE}/matches/{mid}/rally", json=body)


class TestHealthEndpoints:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "healthy"

    def test_root(self, client):
        r = client.get("/")
        assert r.json()["app"] == "VolleyScout"

    def test_request_id_header(self, client):
        assert "X-Request-ID" in client.get("/health").headers

    def test_match_id_header(self, client, match_id):
        r = client.get(f"{BASE}/matches/{match_id}")
        assert r.headers["X-Match-ID"] == match_id
        assert "X-Match-ID" not in client.get("/health").headers


class TestMatchRoutes:
    def test_create_match(self, client, match_id):
        data = client.get(f"{BASE}/matches/{match_id}").json()
        assert data["config"]["homeName"] == "Eagles"
        assert data["state"]["servingSide"] == "home"
        assert data["scoreDisplay"] == "Set 1 (0-0) 0-0"

    def test_create_with_duplicate_lineup(self, client):
        r = client.post(f"{BASE}/matches/", json={"homeLineup": ["1", "1", "3", "4", "5", "6"]})
        assert r.status_code == 400
        assert r.json()["detail"]["error"] == "DuplicateNumber"

    def test_match_not_found(self, client):
        assert client.get(f"{BASE}/matches/nope").status_code == 404

    def test_side_out(self, client, match_id):
        r = _rally(client, match_id, side="away", position=4, action="attack", result="point")
        assert r.status_code == 200
        body = r.json()
        assert body["event"]["playerNumber"] == "14"
        state = body["match"]["state"]
        assert state["awayScore"] == 1
        assert state["servingSide"] == "away"
        assert state["awayLineup"]["1"] == "12"

    def test_substitution_rules(self, client, match_id):
        r = client.post(f"{BASE}/matches/{match_id}/substitute",
                        json={"side": "home", "position": 3, "number": "5"})
        assert r.status_code == 400
        r = client.post(f"{BASE}/matches/{match_id}/substitute",
                        json={"side": "home", "position": 3, "number": "11"})
        assert r.status_code == 200
        assert r.json()["match"]["state"]["homeLineup"]["3"] == "11"

    def test_undo_redo(self, client, match_id):
        assert client.post(f"{BASE}/matches/{match_id}/undo").status_code == 409
        _rally(client, match_id, side="home", position=1, action="serve", result="point")
        r = client.post(f"{BASE}/matches/{match_id}/undo")
        assert r.json()["state"]["homeScore"] == 0
        assert r.json()["canRedo"] is True
        r = client.post(f"{BASE}/matches/{match_id}/redo")
        assert r.json()["state"]["homeScore"] == 1

    def test_new_set(self, client, match_id):
        _rally(client, match_id, side="home", position=4, action="attack", result="point")
        preview = client.get(f"{BASE}/matches/{match_id}/new-set").json()
        assert preview["homeSetWins"] == 1
        r = client.post(f"{BASE}/matches/{match_id}/new-set")
        assert r.json()["state"]["setNumber"] == 2

    def test_rotate(self, client, match_id):
        r = client.post(f"{BASE}/matches/{match_id}/rotate", params={"side": "home"})
        assert r.json()["state"]["homeLineup"]["1"] == "2"

    def test_default_start(self, client, match_id):
        r = client.get(f"{BASE}/matches/{match_id}/default-start",
                       params={"action": "serve", "side": "away"})
        assert r.json() == {"x": 20.0, "y": 2.0}


class TestStatsRoutes:
    def test_stats_and_rankings(self, client, match_id):
        for _ in range(2):
            _rally(client, match_id, side="home", position=4, action="attack", result="point")
        _rally(client, match_id, side="home", position=4, action="attack", result="error")

        stats = client.get(f"{BASE}/stats/match/{match_id}").json()
        assert stats["home"]["attackTotal"] == 3
        assert stats["home"]["attackRatePct"] == 67

        ranking = client.get(f"{BASE}/stats/match/{match_id}/rankings/home").json()
        assert ranking[0]["number"] == "4"
        assert ranking[0]["isTop1"] is True

        report = client.get(f"{BASE}/stats/match/{match_id}/player/home/4").json()
        assert report["summary"]["attackKills"] == 2

    def test_shot_chart(self, client, match_id):
        _rally(client, match_id, side="home", position=4, action="attack", result="point",
               start={"x": 20, "y": 65}, end={"x": 40, "y": 20})
        r = client.get(f"{BASE}/stats/match/{match_id}/shot-chart/home/4")
        assert r.status_code == 200
        assert len(r.json()["data"]) == 2

    def test_export(self, client, match_id):
        _rally(client, match_id, side="home", position=6, action="dig")
        r = client.get(f"{BASE}/stats/match/{match_id}/export")
        assert r.status_code == 200
        assert r.headers["content-type"].startswith("text/csv")
        assert r.content.startswith(b"\xef\xbb\xbf")
        assert "final_export.csv" in r.headers["content-disposition"]


class TestSaveRoutes:
    def test_save_list_load_delete(self, client, match_id):
        _rally(client, match_id, side="home", position=4, action="attack", result="point")
        r = client.post(f"{BASE}/saves/{match_id}", params={"key": "mid"})
        assert r.status_code == 201
        _rally(client, match_id, side="home", position=4, action="attack", result="point")

        assert [s["key"] for s in client.get(f"{BASE}/saves/").json()] == ["mid"]

        r = client.post(f"{BASE}/saves/mid/load/{match_id}")
        assert r.status_code == 200
        assert r.json()["state"]["homeScore"] == 1
        assert r.json()["canUndo"] is False

        assert client.delete(f"{BASE}/saves/mid").status_code == 204
        assert client.get(f"{BASE}/saves/").json() == []

    def test_load_missing(self, client, match_id):
        assert client.post(f"{BASE}/saves/nope/load/{match_id}").status_code == 404

    def test_blank_key(self, client, match_id):
        r = client.post(f"{BASE}/saves/{match_id}", params={"key": " "})
        assert r.status_code == 400

    def test_separator_key_on_file_store(self, client, tmp_path):
        routes_matches.set_repository(JsonFileRepository(tmp_path))
        mid = client.post(f"{BASE}/matches/", json={}).json()["id"]

        r = client.post(f"{BASE}/saves/a%5Cb/load/{mid}")
        assert r.status_code == 400
        assert r.json()["detail"]["error"] == "InvalidSaveKey"
        assert client.delete(f"{BASE}/saves/a%5Cb").status_code == 400
        assert client.post(f"{BASE}/saves/{mid}", params={"key": "a\\b"}).status_code == 400

    def test_autosave_key_on_create(self, client):
        mid = client.post(f"{BASE}/matches/", json={"autosaveKey": "auto"}).json()["id"]
        _rally(client, mid, side="home", position=4, action="attack", result="point")
        assert [s["key"] for s in client.get(f"{BASE}/saves/").json()] == ["auto"]

        client.post(f"{BASE}/matches/{mid}/undo")
        client.post(f"{BASE}/matches/{mid}/rally", json={"side": "away", "position": 2, "action": "dig"})
        r = client.post(f"{BASE}/saves/auto/load/{mid}")
        assert r.json()["state"]["homeScore"] == 0
        assert len(r.json()["state"]["events"]) == 1
