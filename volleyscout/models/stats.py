"""
Stats data models — Team and player summaries, rankings and reports.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from volleyscout.models.court import TeamSide, VolleyModel
from volleyscout.models.events import ShotPath


class StatSummary(VolleyModel):
    """Counting and ratio summary over a (filtered) event log."""

    # ── Attack ───────────────────────────────────────────
    attack_total: int = 0
    attack_kills: int = 0
    attack_rate: float = Field(default=0.0, description="kills / attempts, 0 when no attempts")

    # ── Block / serve / defence ──────────────────────────
    blocks: int = 0
    serve_aces: int = 0
    serve_errors: int = 0
    digs: int = 0

    total_points: int = 0

    @computed_field
    @property
    def attack_rate_pct(self) -> int:
        # half-up, so 12.5% shows as 13%
        return int(self.attack_rate * 100 + 0.5)


class PlayerRanking(VolleyModel):
    """A player's points total and highlight flags."""
    number: str
    side: TeamSide
    total_points: int = 0
    is_top1: bool = False
    is_top2: bool = False


class TeamComparison(VolleyModel):
    """Side-by-side team summaries for the stats overview."""
    home_name: str
    away_name: str
    home: StatSummary
    away: StatSummary
    home_score: int = 0
    away_score: int = 0
    home_set_wins: int = 0
    away_set_wins: int = 0
    set_number: int = 1


class PlayerReport(VolleyModel):
    """One player's summary plus their drawable shot paths."""
    number: str
    side: TeamSide
    team_name: str
    summary: StatSummary
    shot_paths: list[ShotPath] = Field(default_factory=list)
