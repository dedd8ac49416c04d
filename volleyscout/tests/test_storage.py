"""
Tests for snapshot encoding and the match repositories.
"""

import json
from datetime import datetime

import pytest

from conftest import rally
from volleyscout.engine.errors import InvalidSaveKey, MalformedSnapshot, SaveNotFound
from volleyscout.engine.history import HistoryController
from volleyscout.models.court import Coordinate, Position, TeamSide
from volleyscout.models.events import ActionType, ResultType
from volleyscout.storage.repository import InMemoryRepository, JsonFileRepository
from volleyscout.storage.snapshot_codec import (
    build_snapshot,
    default_save_key,
    dump_snapshot,
    load_snapshot,
)


@pytest.fixture
def played(engine, state):
    """Set 2 in progress, with coordinates and a substitution in the log."""
    s, _ = engine.apply_rally(state, rally(
        TeamSide.HOME, Position.ONE, ActionType.SERVE, ResultType.POINT,
        start=Coordinate(x=80, y=98), end=Coordinate(x=30.25, y=20),
    ))
    s = engine.start_new_set(s)
    s, _ = engine.substitute(s, TeamSide.AWAY, Position.TWO, "21")
    s, _ = engine.apply_rally(s, rally(TeamSide.AWAY, Position.FOUR, result=ResultType.POINT))
    return s


class TestSnapshotCodec:
    def test_round_trip(self, config, played):
        snapshot = build_snapshot(config, played, saved_at=1700000000000)
        loaded = load_snapshot(dump_snapshot(snapshot))
        assert loaded == snapshot
        assert loaded.state == played
        assert loaded.config == config

    def test_restored_history_has_single_entry(self, config, played):
        loaded = load_snapshot(dump_snapshot(build_snapshot(config, played)))
        history = HistoryController(loaded.state)
        assert len(history) == 1
        assert not history.can_undo

    def test_wire_names_are_camel_case(self, config, played):
        data = json.loads(dump_snapshot(build_snapshot(config, played)))
        assert data["formatVersion"] == 1
        assert "savedAtEpochMillis" in data
        assert data["state"]["homeLineup"]["1"] == "1"

    @pytest.mark.parametrize("text", ["", "not json", "{}", '{"formatVersion": 1}'])
    def test_malformed(self, text):
        with pytest.raises(MalformedSnapshot):
            load_snapshot(text)

    def test_version_mismatch(self, config, played):
        data = json.loads(dump_snapshot(build_snapshot(config, played)))
        data["formatVersion"] = 99
        with pytest.raises(MalformedSnapshot):
            load_snapshot(json.dumps(data))

    @pytest.mark.parametrize("lineup", [
        {"1": "7", "2": "7", "3": "3", "4": "4", "5": "5", "6": "6"},
        {"1": "1", "2": "2", "3": "3", "4": "4", "5": "5", "6": " "},
    ])
    def test_invalid_saved_lineup(self, config, played, lineup):
        data = json.loads(dump_snapshot(build_snapshot(config, played)))
        data["state"]["homeLineup"] = lineup
        with pytest.raises(MalformedSnapshot):
            load_snapshot(json.dumps(data))

    def test_default_save_key(self, config):
        assert default_save_key(config, datetime(2024, 3, 7, 9, 5)) == "final_03070905"


class TestInMemoryRepository:
    def test_save_list_load_delete(self, config, played):
        repo = InMemoryRepository()
        repo.save("a", build_snapshot(config, played, saved_at=1))
        repo.save("b", build_snapshot(config, played, saved_at=2))

        assert [i.key for i in repo.list()] == ["b", "a"]
        assert repo.load("a").state == played

        repo.delete("a")
        assert [i.key for i in repo.list()] == ["b"]
        with pytest.raises(SaveNotFound):
            repo.load("a")

    def test_blank_key_rejected(self, config, played):
        with pytest.raises(InvalidSaveKey):
            InMemoryRepository().save("  ", build_snapshot(config, played))


class TestJsonFileRepository:
    def test_files_use_prefix(self, tmp_path, config, played):
        repo = JsonFileRepository(tmp_path)
        repo.save("final", build_snapshot(config, played))
        assert (tmp_path / "volleyscout_save_final.json").exists()
        assert repo.load("final").state == played

    def test_list_skips_other_files(self, tmp_path, config, played):
        repo = JsonFileRepository(tmp_path)
        repo.save("one", build_snapshot(config, played, saved_at=10))
        (tmp_path / "notes.json").write_text("{}", encoding="utf-8")
        assert [i.key for i in repo.list()] == ["one"]

    def test_unreadable_save_is_listed_without_time(self, tmp_path):
        (tmp_path / "volleyscout_save_broken.json").write_text("garbage", encoding="utf-8")
        items = JsonFileRepository(tmp_path).list()
        assert items[0].key == "broken"
        assert items[0].saved_at is None

    def test_load_malformed(self, tmp_path):
        (tmp_path / "volleyscout_save_broken.json").write_text("garbage", encoding="utf-8")
        with pytest.raises(MalformedSnapshot):
            JsonFileRepository(tmp_path).load("broken")

    def test_missing_save(self, tmp_path):
        repo = JsonFileRepository(tmp_path)
        with pytest.raises(SaveNotFound):
            repo.load("nope")
        with pytest.raises(SaveNotFound):
            repo.delete("nope")

    def test_missing_directory_lists_nothing(self, tmp_path):
        assert JsonFileRepository(tmp_path / "absent").list() == []

    def test_path_separators_rejected(self, tmp_path, config, played):
        with pytest.raises(InvalidSaveKey):
            JsonFileRepository(tmp_path).save("../escape", build_snapshot(config, played))
