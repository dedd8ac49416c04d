"""
Stats Calculator — Team and player statistics from the rally log.

Computes:
- Attack attempts, kills and success rate
- Block points, serve aces and serve errors, digs
- Points per player with top-scorer ranking
- Shot path reports per player
"""

from __future__ import annotations

from typing import Optional

from volleyscout.engine.shot_classifier import ShotClassifier
from volleyscout.models.court import TeamSide
from volleyscout.models.events import ActionType, RallyEvent, ResultType
from volleyscout.models.match import MatchState, TeamConfig
from volleyscout.models.stats import (
    PlayerRanking,
    PlayerReport,
    StatSummary,
    TeamComparison,
)


def _number_key(number: str) -> tuple:
    return (0, int(number), "") if number.isdecimal() else (1, 0, number)


class StatsCalculator:
    """Reduces a rally log into counting and ratio summaries."""

    def __init__(self, classifier: Optional[ShotClassifier] = None):
        self.classifier = classifier or ShotClassifier()

    # ── Filtering ────────────────────────────────────────────────────────────

    def filter_events(
        self,
        events: list[RallyEvent],
        side: Optional[TeamSide] = None,
        player_number: Optional[str] = None,
    ) -> list[RallyEvent]:
        out = events
        if side is not None:
            out = [e for e in out if e.side == side]
        if player_number is not None:
            out = [e for e in out if e.player_number == player_number]
        return out

    # ── Aggregation ──────────────────────────────────────────────────────────

    def aggregate(
        self,
        events: list[RallyEvent],
        side: Optional[TeamSide] = None,
        player_number: Optional[str] = None,
    ) -> StatSummary:
        stats = StatSummary()
        for e in self.filter_events(events, side, player_number):
            self._process_event(stats, e)
        self._finalize(stats)
        return stats

    def _process_event(self, stats: StatSummary, e: RallyEvent) -> None:
        if e.action == ActionType.ATTACK:
            stats.attack_total += 1
            if e.result == ResultType.POINT:
                stats.attack_kills += 1
        elif e.action == ActionType.BLOCK:
            if e.result == ResultType.POINT:
                stats.blocks += 1
        elif e.action == ActionType.SERVE:
            if e.result == ResultType.POINT:
                stats.serve_aces += 1
            elif e.result == ResultType.ERROR:
                stats.serve_errors += 1
        elif e.action == ActionType.DIG:
            stats.digs += 1

    def _finalize(self, stats: StatSummary) -> None:
        if stats.attack_total > 0:
            stats.attack_rate = stats.attack_kills / stats.attack_total
        stats.total_points = stats.attack_kills + stats.blocks + stats.serve_aces

    # ── Players ──────────────────────────────────────────────────────────────

    def roster(self, events: list[RallyEvent], side: TeamSide) -> list[str]:
        """Jersey numbers that acted for a side, in numeric order."""
        numbers = {
            e.player_number for e in events
            if e.side == side and e.action != ActionType.SUBSTITUTION
        }
        return sorted(numbers, key=_number_key)

    def rank_players(self, events: list[RallyEvent], side: TeamSide) -> list[PlayerRanking]:
        """Players by total points, highest first; ties keep roster order."""
        team_events = self.filter_events(events, side)
        ranking = [
            PlayerRanking(
                number=number,
                side=side,
                total_points=self.aggregate(team_events, player_number=number).total_points,
            )
            for number in self.roster(team_events, side)
        ]
        ranking.sort(key=lambda r: r.total_points, reverse=True)

        if len(ranking) > 0 and ranking[0].total_points > 0:
            ranking[0].is_top1 = True
        if len(ranking) > 1 and ranking[1].total_points > 0:
            ranking[1].is_top2 = True
        return ranking

    def player_report(
        self,
        events: list[RallyEvent],
        side: TeamSide,
        number: str,
        config: Optional[TeamConfig] = None,
    ) -> PlayerReport:
        config = config or TeamConfig()
        player_events = self.filter_events(events, side, number)
        return PlayerReport(
            number=number,
            side=side,
            team_name=config.label_for(side),
            summary=self.aggregate(player_events),
            shot_paths=self.classifier.paths(player_events),
        )

    # ── Teams ────────────────────────────────────────────────────────────────

    def compare_teams(self, state: MatchState, config: Optional[TeamConfig] = None) -> TeamComparison:
        """Home vs away summaries over the current set's log."""
        config = config or TeamConfig()
        return TeamComparison(
            home_name=config.home_name,
            away_name=config.away_name,
            home=self.aggregate(state.events, side=TeamSide.HOME),
            away=self.aggregate(state.events, side=TeamSide.AWAY),
            home_score=state.home_score,
            away_score=state.away_score,
            home_set_wins=state.home_set_wins,
            away_set_wins=state.away_set_wins,
            set_number=state.set_number,
        )
