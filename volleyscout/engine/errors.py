"""
Engine errors — every rejected operation raises before touching state.
"""


class VolleyScoutError(Exception):
    pass


# ── Lineup edits ─────────────────────────────────────────────────────────────

class LineupEditError(VolleyScoutError):
    pass


class EmptyNumber(LineupEditError):
    pass


class DuplicateNumber(LineupEditError):
    pass


class InvalidRally(VolleyScoutError):
    pass


# ── History ──────────────────────────────────────────────────────────────────

class HistoryError(VolleyScoutError):
    pass


class NothingToUndo(HistoryError):
    pass


class NothingToRedo(HistoryError):
    pass


# ── Persistence ──────────────────────────────────────────────────────────────

class MalformedSnapshot(VolleyScoutError):
    pass


class StorageUnavailable(VolleyScoutError):
    pass


class SaveNotFound(VolleyScoutError):
    pass


class InvalidSaveKey(VolleyScoutError):
    pass
