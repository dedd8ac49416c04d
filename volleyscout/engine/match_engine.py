"""
Match State Engine — Pure reducer from rally events to match state.

Implements indoor volleyball rally scoring:
- Point / error attribution (an error scores for the other side)
- Serve possession transfer on side-out
- Mandatory rotation of the side winning back the serve
- Manual rotations and substitutions with lineup validation
- Set transitions with set-win counting

Every transition returns a new MatchState; the input state is never touched,
and a rejected transition raises before anything is built.
"""

from __future__ import annotations

import logging
from typing import Optional

from volleyscout.engine.errors import DuplicateNumber, EmptyNumber, InvalidRally
from volleyscout.engine.rotation import rotate
from volleyscout.models.court import Lineup, Position, TeamSide
from volleyscout.models.events import (
    ActionQuality,
    ActionType,
    RallyEvent,
    RallyInput,
    ResultType,
    now_millis,
)
from volleyscout.models.match import MatchState, TeamConfig

logger = logging.getLogger(__name__)


def _lineup_field(side: TeamSide) -> str:
    return "home_lineup" if side == TeamSide.HOME else "away_lineup"


class MatchEngine:
    """
    Volleyball match state machine.

    Usage:
        engine = MatchEngine(TeamConfig(home_name="Eagles", away_name="Hawks"))
        state = engine.new_match(home_lineup, away_lineup, TeamSide.HOME)
        state, event = engine.apply_rally(state, RallyInput(...))
        print(state.score_display)
    """

    def __init__(self, config: Optional[TeamConfig] = None):
        self.config = config or TeamConfig()

    # ── Match lifecycle ──────────────────────────────────────────────────────

    def new_match(
        self,
        home_lineup: Optional[Lineup] = None,
        away_lineup: Optional[Lineup] = None,
        serving_side: TeamSide = TeamSide.HOME,
    ) -> MatchState:
        """Initial state of set 1."""
        home_lineup = home_lineup or Lineup.default()
        away_lineup = away_lineup or Lineup.default()
        for side, lineup in ((TeamSide.HOME, home_lineup), (TeamSide.AWAY, away_lineup)):
            self.validate_lineup(side, lineup)
        return MatchState(
            home_lineup=home_lineup,
            away_lineup=away_lineup,
            serving_side=serving_side,
        )

    def start_new_set(self, state: MatchState) -> MatchState:
        """
        Close the current set and open the next one.

        The side ahead on points is credited with the set; a level score
        credits nobody. Lineups and server carry over.
        """
        home_wins, away_wins = self.projected_set_wins(state)
        logger.info(
            "Set %d closed at %d-%d, sets %d-%d",
            state.set_number, state.home_score, state.away_score, home_wins, away_wins,
        )
        return state.model_copy(update={
            "set_number": state.set_number + 1,
            "home_set_wins": home_wins,
            "away_set_wins": away_wins,
            "home_score": 0,
            "away_score": 0,
            "events": [],
            "archived_events": [*state.archived_events, *state.events],
        })

    def projected_set_wins(self, state: MatchState) -> tuple[int, int]:
        """Set-win counts start_new_set would produce."""
        leader = state.leader()
        home = state.home_set_wins + (1 if leader == TeamSide.HOME else 0)
        away = state.away_set_wins + (1 if leader == TeamSide.AWAY else 0)
        return home, away

    # ── Rallies ──────────────────────────────────────────────────────────────

    def apply_rally(self, state: MatchState, rally: RallyInput) -> tuple[MatchState, RallyEvent]:
        """
        Apply one recorded action.
        This is the main entry point — handles score, serve and rotation.
        """
        if rally.action == ActionType.SUBSTITUTION:
            raise InvalidRally("substitutions go through substitute()")

        player_number = state.lineup_for(rally.side).number_at(rally.position)

        home_score = state.home_score
        away_score = state.away_score
        serving_side = state.serving_side
        update: dict = {}

        if rally.result.is_terminal:
            point_winner = rally.side if rally.result == ResultType.POINT else rally.side.other
            if point_winner == TeamSide.HOME:
                home_score += 1
            else:
                away_score += 1

            # Side-out: the receiving side wins the serve and rotates once
            if point_winner != state.serving_side:
                serving_side = point_winner
                update[_lineup_field(point_winner)] = rotate(state.lineup_for(point_winner))
                logger.debug("Side-out to %s", point_winner.value)

        event = RallyEvent(
            timestamp=rally.timestamp if rally.timestamp is not None else now_millis(),
            set_number=state.set_number,
            home_score=home_score,
            away_score=away_score,
            serving_side=serving_side,
            side=rally.side,
            position=rally.position,
            player_number=player_number,
            action=rally.action,
            quality=rally.quality,
            result=rally.result,
            start=rally.start,
            end=rally.end,
            note=self.config.label_for(rally.side),
        )

        update.update({
            "home_score": home_score,
            "away_score": away_score,
            "serving_side": serving_side,
            "events": [*state.events, event],
        })
        return state.model_copy(update=update), event

    # ── Lineup edits ─────────────────────────────────────────────────────────

    def validate_lineup(self, side: TeamSide, lineup: Lineup) -> None:
        """Six distinct, non-blank jersey numbers."""
        if lineup.has_blank():
            raise EmptyNumber(f"{self.config.label_for(side)} lineup has an empty slot")
        duplicates = lineup.duplicates()
        if duplicates:
            raise DuplicateNumber(
                f"{self.config.label_for(side)} lineup repeats "
                + ", ".join(f"#{n}" for n in duplicates)
            )

    def apply_lineup_edit(
        self,
        state: MatchState,
        side: TeamSide,
        new_lineup: Lineup,
        reason: Optional[RallyEvent] = None,
    ) -> MatchState:
        """Swap a side's lineup, logging the reason event when there is one."""
        self.validate_lineup(side, new_lineup)
        update: dict = {_lineup_field(side): new_lineup}
        if reason is not None:
            update["events"] = [*state.events, reason]
        return state.model_copy(update=update)

    def rotate_lineup(self, state: MatchState, side: TeamSide) -> MatchState:
        """Manual rotation; no event, no score or serve change."""
        return self.apply_lineup_edit(state, side, rotate(state.lineup_for(side)))

    def substitute(
        self,
        state: MatchState,
        side: TeamSide,
        position: Position,
        incoming_number: str,
        timestamp: Optional[int] = None,
    ) -> tuple[MatchState, RallyEvent]:
        """Replace the player in one slot. The number must be new to that side's lineup."""
        number = (incoming_number or "").strip()
        if not number:
            raise EmptyNumber("jersey number is required")

        lineup = state.lineup_for(side)
        if number in lineup.numbers():
            raise DuplicateNumber(f"#{number} is already on court for {self.config.label_for(side)}")

        outgoing = lineup.number_at(position)
        event = RallyEvent(
            timestamp=timestamp if timestamp is not None else now_millis(),
            set_number=state.set_number,
            home_score=state.home_score,
            away_score=state.away_score,
            serving_side=state.serving_side,
            side=side,
            position=position,
            player_number=outgoing,
            incoming_number=number,
            action=ActionType.SUBSTITUTION,
            quality=ActionQuality.NORMAL,
            result=ResultType.NORMAL,
            note=self.config.label_for(side),
        )
        logger.info("Substitution %s P%d: #%s -> #%s", side.value, int(position), outgoing, number)
        new_state = self.apply_lineup_edit(state, side, lineup.with_number(position, number), event)
        return new_state, event
