"""
Shot Classifier — Categorises recorded attack and serve paths for charts and export.
"""

from __future__ import annotations

from typing import Optional

from volleyscout.engine.geometry import is_inside_court
from volleyscout.models.events import (
    ActionType,
    RallyEvent,
    ResultType,
    ShotCategory,
    ShotPath,
)


class ShotClassifier:
    """Maps a rally event with a start/end path to kill, ace, error or neutral."""

    PATH_ACTIONS = (ActionType.ATTACK, ActionType.SERVE)

    COLORS = {
        ShotCategory.KILL: "#10B981",
        ShotCategory.ACE: "#3B82F6",
        ShotCategory.ERROR: "#EF4444",
        ShotCategory.NEUTRAL: "#9CA3AF",
    }

    def classify(self, event: RallyEvent) -> Optional[ShotCategory]:
        if not event.has_path or event.action not in self.PATH_ACTIONS:
            return None
        if event.result == ResultType.ERROR:
            return ShotCategory.ERROR
        if event.result == ResultType.POINT:
            return ShotCategory.ACE if event.action == ActionType.SERVE else ShotCategory.KILL
        return ShotCategory.NEUTRAL

    def paths(self, events: list[RallyEvent]) -> list[ShotPath]:
        """Drawable paths in log order."""
        out = []
        for e in events:
            category = self.classify(e)
            if category is None:
                continue
            out.append(ShotPath(
                event_id=e.id,
                action=e.action,
                category=category,
                color=self.COLORS[category],
                start=e.start,
                end=e.end,
                landed_in=is_inside_court(e.end),
            ))
        return out
