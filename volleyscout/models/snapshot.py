"""
Snapshot data models — Versioned persisted match and save listings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from volleyscout.models.court import FrozenModel
from volleyscout.models.events import now_millis
from volleyscout.models.match import MatchState, TeamConfig


class MatchSnapshot(FrozenModel):
    """Persisted match: team config, full state and save time."""
    format_version: int
    config: TeamConfig
    state: MatchState
    saved_at_epoch_millis: int = Field(default_factory=now_millis)


class SavedGameInfo(FrozenModel):
    """Entry of a save listing."""
    key: str
    label: str
    saved_at: Optional[int] = None
