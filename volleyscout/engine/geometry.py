"""
Court Geometry — Percentage coordinates on the court rendering.

Handles:
- Raw pointer position → normalized [0, 100]² coordinate
- In/out classification against the playable rectangle
- Default action start points per side
- Fixed marker slots of the six rotation positions
"""

from __future__ import annotations

from volleyscout.models.court import (
    FRONT_ROW,
    ContainerBounds,
    Coordinate,
    Position,
    TeamSide,
)
from volleyscout.models.events import ActionType


# ── Court rectangle (percent of rendering) ───────────────────────────────────

# The 9x18 m court occupies x 10-90, y 5-95; the rest is free zone.
COURT_MIN_X = 10.0
COURT_MAX_X = 90.0
COURT_MIN_Y = 5.0
COURT_MAX_Y = 95.0
NET_Y = 50.0
ATTACK_LINE_AWAY_Y = 100.0 / 3
ATTACK_LINE_HOME_Y = 200.0 / 3

# Home side plays the bottom half; away coordinates are mirrored through the centre.
DEFAULT_START = {
    ActionType.SERVE: (80.0, 98.0),
    ActionType.ATTACK: (20.0, 65.0),
    ActionType.SET: (65.0, 55.0),
    ActionType.RECEIVE: (50.0, 85.0),
    ActionType.DIG: (50.0, 85.0),
}
FALLBACK_START = (50.0, 75.0)

# Home markers by position; left column 4/5, middle 3/6, right 2/1.
HOME_MARKER_X = {
    Position.FOUR: 20.0, Position.FIVE: 20.0,
    Position.THREE: 50.0, Position.SIX: 50.0,
    Position.TWO: 80.0, Position.ONE: 80.0,
}
HOME_FRONT_Y = 65.0
HOME_BACK_Y = 85.0


def _clamp(value: float) -> float:
    return max(0.0, min(100.0, value))


def normalize(raw_x: float, raw_y: float, bounds: ContainerBounds) -> Coordinate:
    """Scale a raw pixel position into the court's percentage frame, clamped."""
    x = (raw_x - bounds.left) / bounds.width * 100 if bounds.width > 0 else 0.0
    y = (raw_y - bounds.top) / bounds.height * 100 if bounds.height > 0 else 0.0
    return Coordinate(x=_clamp(x), y=_clamp(y))


def is_inside_court(c: Coordinate) -> bool:
    """Lines are in."""
    return COURT_MIN_X <= c.x <= COURT_MAX_X and COURT_MIN_Y <= c.y <= COURT_MAX_Y


def landing_label(c: Coordinate) -> str:
    return "IN" if is_inside_court(c) else "OUT"


def mirror(c: Coordinate) -> Coordinate:
    return Coordinate(x=100.0 - c.x, y=100.0 - c.y)


def default_start_coordinate(action: ActionType, side: TeamSide) -> Coordinate:
    """Typical start point of an action, symmetric across the net for the away side."""
    x, y = DEFAULT_START.get(action, FALLBACK_START)
    coord = Coordinate(x=x, y=y)
    return mirror(coord) if side == TeamSide.AWAY else coord


def lineup_marker_coordinate(position: Position, side: TeamSide) -> Coordinate:
    """Where a player in the given slot is drawn on the court diagram."""
    position = Position(position)
    y = HOME_FRONT_Y if position in FRONT_ROW else HOME_BACK_Y
    coord = Coordinate(x=HOME_MARKER_X[position], y=y)
    return mirror(coord) if side == TeamSide.AWAY else coord
