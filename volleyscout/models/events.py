"""
Event data models — Rally inputs, recorded rally events and shot paths.
A RallyEvent is the atomic, immutable entry of the match log.
"""

from __future__ import annotations

import time
import uuid
from enum import Enum
from typing import Optional

from pydantic import Field

from volleyscout.models.court import Coordinate, FrozenModel, Position, TeamSide


def now_millis() -> int:
    return int(time.time() * 1000)


# ── Enums ────────────────────────────────────────────────────────────────────

class ActionType(str, Enum):
    SERVE = "serve"
    RECEIVE = "receive"
    SET = "set"
    ATTACK = "attack"
    BLOCK = "block"
    DIG = "dig"
    SUBSTITUTION = "substitution"


class ActionQuality(str, Enum):
    """Ordered best to worst. Descriptive only, never affects scoring."""
    PERFECT = "perfect"   # #
    GOOD = "good"         # +
    NORMAL = "normal"     # !
    POOR = "poor"         # -


class ResultType(str, Enum):
    POINT = "point"
    ERROR = "error"
    NORMAL = "normal"     # rally continues

    @property
    def is_terminal(self) -> bool:
        return self is not ResultType.NORMAL


class ShotCategory(str, Enum):
    KILL = "kill"
    ACE = "ace"
    ERROR = "error"
    NEUTRAL = "neutral"


# ── Event Models ─────────────────────────────────────────────────────────────

class RallyInput(FrozenModel):
    """A candidate action as picked in the recording UI."""
    side: TeamSide
    position: Position
    action: ActionType
    quality: ActionQuality = ActionQuality.NORMAL
    result: ResultType = ResultType.NORMAL
    start: Optional[Coordinate] = None
    end: Optional[Coordinate] = None
    timestamp: Optional[int] = None


class RallyEvent(FrozenModel):
    """One recorded action, with the score and server as they stand after it."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = Field(default_factory=now_millis)
    set_number: int = Field(ge=1)

    # ── Score after the event ────────────────────────────
    home_score: int = Field(ge=0)
    away_score: int = Field(ge=0)
    serving_side: TeamSide

    # ── Actor ────────────────────────────────────────────
    side: TeamSide
    position: Position
    player_number: str
    incoming_number: Optional[str] = Field(
        default=None, description="Jersey brought on, substitutions only"
    )

    # ── Action ───────────────────────────────────────────
    action: ActionType
    quality: ActionQuality = ActionQuality.NORMAL
    result: ResultType = ResultType.NORMAL
    start: Optional[Coordinate] = None
    end: Optional[Coordinate] = None

    note: str = Field(default="", description="Acting side's team label")

    @property
    def has_path(self) -> bool:
        return self.start is not None and self.end is not None


class ShotPath(FrozenModel):
    """A drawable start→end path with its chart category."""
    event_id: str
    action: ActionType
    category: ShotCategory
    color: str
    start: Coordinate
    end: Coordinate
    landed_in: bool
