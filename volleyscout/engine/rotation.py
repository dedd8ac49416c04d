"""
Rotation Rule — Cyclic reassignment of a side's six positions.

Each occupant moves one slot ahead in serve order: the player in 2 becomes
the server in 1, and the server in 1 moves back to 6.
"""

from __future__ import annotations

from volleyscout.models.court import Lineup, Position

# target position → position its new occupant comes from
ROTATION_SOURCE = {
    Position.ONE: Position.TWO,
    Position.TWO: Position.THREE,
    Position.THREE: Position.FOUR,
    Position.FOUR: Position.FIVE,
    Position.FIVE: Position.SIX,
    Position.SIX: Position.ONE,
}


def rotate(lineup: Lineup) -> Lineup:
    """Rotate one step. Applying it six times returns the same lineup."""
    return Lineup({
        target.value: lineup.number_at(source)
        for target, source in ROTATION_SOURCE.items()
    })
