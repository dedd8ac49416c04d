"""
Match Session — One live match: engine, undo/redo history and saves.

Usage:
    session = MatchSession(TeamConfig(home_name="Eagles", away_name="Hawks"))
    session.record_rally(RallyInput(...))
    session.undo()
    session.save("final")
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from volleyscout.config import settings
from volleyscout.engine.errors import InvalidSaveKey, StorageUnavailable
from volleyscout.engine.history import HistoryController
from volleyscout.engine.match_engine import MatchEngine
from volleyscout.engine.stats_calculator import StatsCalculator
from volleyscout.export.csv_export import export_events_csv
from volleyscout.models.court import Lineup, Position, TeamSide
from volleyscout.models.events import RallyEvent, RallyInput
from volleyscout.models.match import MatchState, TeamConfig
from volleyscout.models.snapshot import SavedGameInfo
from volleyscout.models.stats import TeamComparison
from volleyscout.storage.repository import InMemoryRepository, MatchRepository
from volleyscout.storage.snapshot_codec import build_snapshot, default_save_key

logger = logging.getLogger(__name__)


class MatchSession:
    """
    Live match manager.

    Every transition is computed by the engine first and committed to the
    history only when it succeeded; saving happens after the commit and a
    failed save leaves the committed state in place.
    """

    def __init__(
        self,
        config: Optional[TeamConfig] = None,
        home_lineup: Optional[Lineup] = None,
        away_lineup: Optional[Lineup] = None,
        serving_side: TeamSide = TeamSide.HOME,
        repository: Optional[MatchRepository] = None,
        autosave_key: Optional[str] = None,
    ):
        self.id: str = str(uuid.uuid4())
        self.engine = MatchEngine(config)
        self.repository = repository or InMemoryRepository()
        self.stats_calculator = StatsCalculator()
        self.history = HistoryController(
            self.engine.new_match(home_lineup, away_lineup, serving_side),
            max_entries=settings.HISTORY_LIMIT,
        )
        self.autosave_key = autosave_key

    @property
    def config(self) -> TeamConfig:
        return self.engine.config

    @property
    def state(self) -> MatchState:
        return self.history.current

    # ── Transitions ──────────────────────────────────────────────────────────

    def _autosave(self) -> None:
        if not self.autosave_key:
            return
        try:
            self.save(self.autosave_key)
        except (StorageUnavailable, InvalidSaveKey) as e:
            logger.warning("Autosave to %s failed, match state kept: %s", self.autosave_key, e)

    def _commit(self, new_state: MatchState) -> MatchState:
        self.history.apply(new_state)
        self._autosave()
        return new_state

    def record_rally(self, rally: RallyInput) -> RallyEvent:
        new_state, event = self.engine.apply_rally(self.state, rally)
        self._commit(new_state)
        return event

    def rotate(self, side: TeamSide) -> MatchState:
        return self._commit(self.engine.rotate_lineup(self.state, side))

    def substitute(self, side: TeamSide, position: Position, incoming_number: str) -> RallyEvent:
        new_state, event = self.engine.substitute(self.state, side, position, incoming_number)
        self._commit(new_state)
        return event

    def new_set(self) -> MatchState:
        return self._commit(self.engine.start_new_set(self.state))

    def undo(self) -> MatchState:
        state = self.history.undo()
        self._autosave()
        return state

    def redo(self) -> MatchState:
        state = self.history.redo()
        self._autosave()
        return state

    # ── Persistence ──────────────────────────────────────────────────────────

    def save(self, key: Optional[str] = None) -> str:
        key = key or default_save_key(self.config)
        self.repository.save(key, build_snapshot(self.config, self.state))
        return key

    def load(self, key: str) -> MatchState:
        """Replace config, state and history with a saved match."""
        snapshot = self.repository.load(key)
        self.engine = MatchEngine(snapshot.config)
        logger.info("Loaded save %s (set %d)", key, snapshot.state.set_number)
        return self.history.reset(snapshot.state)

    def list_saves(self) -> list[SavedGameInfo]:
        return self.repository.list()

    def delete_save(self, key: str) -> None:
        self.repository.delete(key)

    # ── Read-only views ──────────────────────────────────────────────────────

    def stats(self) -> TeamComparison:
        return self.stats_calculator.compare_teams(self.state, self.config)

    def export_csv(self) -> str:
        return export_events_csv(self.state.all_events, self.config)
