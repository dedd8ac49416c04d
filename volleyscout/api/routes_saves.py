"""
Save routes — Named match saves: list, save, load into a live match, delete.
"""

from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, Query

from volleyscout.api.errors import to_http
from volleyscout.api.routes_matches import MatchView, get_repository, get_session, view
from volleyscout.engine.errors import VolleyScoutError
from volleyscout.models.snapshot import SavedGameInfo

router = APIRouter()


@router.get("/", response_model=list[SavedGameInfo])
async def list_saves():
    """Saved matches, newest first."""
    try:
        return get_repository().list()
    except VolleyScoutError as e:
        raise to_http(e)


@router.post("/{match_id}", status_code=201)
async def save_match(match_id: str, key: Optional[str] = Query(None)):
    """Save a live match; without a key the '<label>_<MMDD><HHMM>' default is used."""
    session = get_session(match_id)
    try:
        saved_key = session.save(key)
    except VolleyScoutError as e:
        raise to_http(e)
    return {"key": saved_key, "matchId": match_id}


@router.post("/{key}/load/{match_id}", response_model=MatchView)
async def load_save(key: str, match_id: str):
    """Replace a live match with a save; its undo history starts over."""
    session = get_session(match_id)
    try:
        session.load(key)
    except VolleyScoutError as e:
        raise to_http(e)
    return view(session)


@router.delete("/{key}", status_code=204)
async def delete_save(key: str):
    try:
        get_repository().delete(key)
    except VolleyScoutError as e:
        raise to_http(e)
