"""
Court data models — Positions, sides, coordinates and lineups.
Coordinates are percentages of a fixed court rendering, (0, 0) top-left.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator
from pydantic.alias_generators import to_camel


class VolleyModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenModel(VolleyModel):
    """Value record, never mutated once built."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ── Enums ────────────────────────────────────────────────────────────────────

class Position(IntEnum):
    """Rotation slot. 1 is the server slot, numbering runs counter-clockwise."""
    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6


FRONT_ROW = (Position.FOUR, Position.THREE, Position.TWO)


class TeamSide(str, Enum):
    HOME = "home"
    AWAY = "away"

    @property
    def other(self) -> TeamSide:
        return TeamSide.AWAY if self is TeamSide.HOME else TeamSide.HOME


# ── Geometry ─────────────────────────────────────────────────────────────────

class Coordinate(FrozenModel):
    """Court-relative point, both axes in [0, 100]."""
    x: float = Field(ge=0.0, le=100.0)
    y: float = Field(ge=0.0, le=100.0)


class ContainerBounds(FrozenModel):
    """On-screen rectangle of the court rendering, in raw pixels."""
    left: float = 0.0
    top: float = 0.0
    width: float
    height: float


# ── Lineup ───────────────────────────────────────────────────────────────────

class Lineup(RootModel[dict[int, str]]):
    """Jersey number per rotation slot; always exactly slots 1..6."""
    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _strip_numbers(cls, data):
        if isinstance(data, dict):
            return {k: v.strip() if isinstance(v, str) else v for k, v in data.items()}
        return data

    @model_validator(mode="after")
    def _check_slots(self) -> Lineup:
        if set(self.root) != {p.value for p in Position}:
            raise ValueError(f"lineup must fill positions 1-6, got {sorted(self.root)}")
        return self

    @classmethod
    def from_numbers(cls, numbers: list[str]) -> Lineup:
        """Build from six numbers listed in position order 1..6."""
        return cls({i + 1: str(n) for i, n in enumerate(numbers)})

    @classmethod
    def default(cls) -> Lineup:
        return cls({p.value: str(p.value) for p in Position})

    def number_at(self, position: int) -> str:
        return self.root[int(position)]

    def with_number(self, position: int, number: str) -> Lineup:
        players = dict(self.root)
        players[int(position)] = number
        return Lineup(players)

    def numbers(self) -> list[str]:
        return [self.root[p.value] for p in Position]

    def has_blank(self) -> bool:
        return not all(self.root.values())

    def duplicates(self) -> list[str]:
        """Numbers held by more than one slot, sorted."""
        numbers = self.numbers()
        return sorted({n for n in numbers if numbers.count(n) > 1})
