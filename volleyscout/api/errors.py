"""
Error mapping — Engine errors to HTTP status codes.
"""

from __future__ import annotations
from fastapi import HTTPException

from volleyscout.engine.errors import (
    HistoryError,
    InvalidSaveKey,
    LineupEditError,
    InvalidRally,
    MalformedSnapshot,
    SaveNotFound,
    StorageUnavailable,
    VolleyScoutError,
)

STATUS_CODES = [
    (LineupEditError, 400),
    (InvalidRally, 400),
    (InvalidSaveKey, 400),
    (SaveNotFound, 404),
    (HistoryError, 409),
    (MalformedSnapshot, 422),
    (StorageUnavailable, 503),
]


def to_http(e: VolleyScoutError) -> HTTPException:
    for kind, status in STATUS_CODES:
        if isinstance(e, kind):
            return HTTPException(status_code=status, detail={"error": type(e).__name__, "message": str(e)})
    return HTTPException(status_code=400, detail={"error": type(e).__name__, "message": str(e)})
