"""
History Controller — Undo/redo over applied match states.

States are immutable, so the history simply keeps every applied state and a
cursor. Redo is only possible right after an undo; any new state applied at
an earlier cursor drops the redo branch.
"""

from __future__ import annotations

import logging
from typing import Optional

from volleyscout.engine.errors import NothingToRedo, NothingToUndo
from volleyscout.models.match import MatchState

logger = logging.getLogger(__name__)


class HistoryController:
    """
    Cursor over the sequence of applied MatchStates.

    Usage:
        history = HistoryController(initial_state)
        history.apply(next_state)
        previous = history.undo()
        again = history.redo()
    """

    def __init__(self, initial_state: MatchState, max_entries: Optional[int] = None):
        self._states: list[MatchState] = [initial_state]
        self._cursor: int = 0
        self._max_entries = max_entries or None

    # ── Transitions ──────────────────────────────────────────────────────────

    def apply(self, new_state: MatchState) -> MatchState:
        """Record a new current state, discarding anything redoable."""
        dropped = len(self._states) - self._cursor - 1
        if dropped:
            logger.debug("Discarding %d redo entries", dropped)
        del self._states[self._cursor + 1:]
        self._states.append(new_state)
        self._cursor += 1

        if self._max_entries and len(self._states) > self._max_entries:
            overflow = len(self._states) - self._max_entries
            del self._states[:overflow]
            self._cursor -= overflow
        return new_state

    def undo(self) -> MatchState:
        if not self.can_undo:
            raise NothingToUndo("nothing to undo")
        self._cursor -= 1
        return self.current

    def redo(self) -> MatchState:
        if not self.can_redo:
            raise NothingToRedo("nothing to redo")
        self._cursor += 1
        return self.current

    def reset(self, state: MatchState) -> MatchState:
        """Replace the whole history with a single entry."""
        self._states = [state]
        self._cursor = 0
        return state

    # ── Queries ──────────────────────────────────────────────────────────────

    @property
    def current(self) -> MatchState:
        return self._states[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._states) - 1

    def __len__(self) -> int:
        return len(self._states)
