"""
Match data models — Team configuration and the derived match state.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from volleyscout.config import settings
from volleyscout.models.court import FrozenModel, Lineup, TeamSide
from volleyscout.models.events import RallyEvent


class TeamConfig(FrozenModel):
    """Team labels for one match."""
    home_name: str = Field(default_factory=lambda: settings.DEFAULT_HOME_NAME)
    away_name: str = Field(default_factory=lambda: settings.DEFAULT_AWAY_NAME)
    match_label: str = ""

    def label_for(self, side: TeamSide) -> str:
        return self.home_name if side == TeamSide.HOME else self.away_name


class MatchState(FrozenModel):
    """
    Current snapshot of a match.

    Only the engine builds new states; older sets' events sit in
    archived_events and are never replayed.
    """
    set_number: int = Field(default=1, ge=1)
    home_set_wins: int = Field(default=0, ge=0)
    away_set_wins: int = Field(default=0, ge=0)
    home_lineup: Lineup = Field(default_factory=Lineup.default)
    away_lineup: Lineup = Field(default_factory=Lineup.default)
    home_score: int = Field(default=0, ge=0)
    away_score: int = Field(default=0, ge=0)
    serving_side: TeamSide = TeamSide.HOME
    events: list[RallyEvent] = Field(default_factory=list)
    archived_events: list[RallyEvent] = Field(default_factory=list)

    def lineup_for(self, side: TeamSide) -> Lineup:
        return self.home_lineup if side == TeamSide.HOME else self.away_lineup

    def leader(self) -> Optional[TeamSide]:
        """Side ahead on points in the current set, None when level."""
        if self.home_score > self.away_score:
            return TeamSide.HOME
        if self.away_score > self.home_score:
            return TeamSide.AWAY
        return None

    @property
    def all_events(self) -> list[RallyEvent]:
        return [*self.archived_events, *self.events]

    @property
    def score_display(self) -> str:
        return (
            f"Set {self.set_number} "
            f"({self.home_set_wins}-{self.away_set_wins}) "
            f"{self.home_score}-{self.away_score}"
        )
