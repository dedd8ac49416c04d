"""
Match routes — Live match state, rallies, lineup edits and undo/redo.
"""

from __future__ import annotations
from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import Field

from volleyscout.api.errors import to_http
from volleyscout.engine.errors import VolleyScoutError
from volleyscout.engine.geometry import default_start_coordinate
from volleyscout.engine.session import MatchSession
from volleyscout.models.court import Coordinate, Lineup, Position, TeamSide, VolleyModel
from volleyscout.models.events import ActionType, RallyEvent, RallyInput
from volleyscout.models.match import MatchState, TeamConfig
from volleyscout.storage.repository import JsonFileRepository, MatchRepository

router = APIRouter()

# ── In-memory sessions (one per live match) ──────────────────────────────────
_sessions: dict[str, MatchSession] = {}

# Shared save store, created on first use so SAVE_DIR can be overridden
_repository: Optional[MatchRepository] = None


def get_repository() -> MatchRepository:
    global _repository
    if _repository is None:
        _repository = JsonFileRepository()
    return _repository


def set_repository(repository: Optional[MatchRepository]) -> None:
    global _repository
    _repository = repository


class CreateMatchRequest(VolleyModel):
    home_name: Optional[str] = None
    away_name: Optional[str] = None
    match_label: str = ""
    home_lineup: Optional[list[str]] = Field(default=None, min_length=6, max_length=6)
    away_lineup: Optional[list[str]] = Field(default=None, min_length=6, max_length=6)
    serving_side: TeamSide = TeamSide.HOME
    autosave_key: Optional[str] = None


class SubstitutionRequest(VolleyModel):
    side: TeamSide
    position: Position
    number: str


class MatchView(VolleyModel):
    id: str
    config: TeamConfig
    state: MatchState
    score_display: str
    can_undo: bool
    can_redo: bool


class RallyResponse(VolleyModel):
    event: RallyEvent
    match: MatchView


def get_session(match_id: str) -> MatchSession:
    session = _sessions.get(match_id)
    if not session:
        raise HTTPException(status_code=404, detail="Match not found")
    return session


def view(session: MatchSession) -> MatchView:
    return MatchView(
        id=session.id,
        config=session.config,
        state=session.state,
        score_display=session.state.score_display,
        can_undo=session.history.can_undo,
        can_redo=session.history.can_redo,
    )


@router.post("/", response_model=MatchView, status_code=201)
async def create_match(req: CreateMatchRequest):
    """Create a match at set 1 with the given lineups and first server."""
    names = {k: v for k, v in (("home_name", req.home_name), ("away_name", req.away_name)) if v}
    config = TeamConfig(match_label=req.match_label, **names)
    try:
        home = Lineup.from_numbers(req.home_lineup) if req.home_lineup else None
        away = Lineup.from_numbers(req.away_lineup) if req.away_lineup else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try:
        session = MatchSession(
            config, home, away, req.serving_side,
            repository=get_repository(),
            autosave_key=req.autosave_key,
        )
    except VolleyScoutError as e:
        raise to_http(e)
    _sessions[session.id] = session
    return view(session)


@router.get("/{match_id}", response_model=MatchView)
async def get_match(match_id: str):
    return view(get_session(match_id))


@router.post("/{match_id}/rally", response_model=RallyResponse)
async def record_rally(match_id: str, rally: RallyInput):
    """Record one action; terminal results update score, serve and rotation."""
    session = get_session(match_id)
    try:
        event = session.record_rally(rally)
    except VolleyScoutError as e:
        raise to_http(e)
    return RallyResponse(event=event, match=view(session))


@router.post("/{match_id}/rotate", response_model=MatchView)
async def rotate_lineup(match_id: str, side: TeamSide):
    """Manual rotation of one side's lineup."""
    session = get_session(match_id)
    session.rotate(side)
    return view(session)


@router.post("/{match_id}/substitute", response_model=RallyResponse)
async def substitute(match_id: str, req: SubstitutionRequest):
    session = get_session(match_id)
    try:
        event = session.substitute(req.side, req.position, req.number)
    except VolleyScoutError as e:
        raise to_http(e)
    return RallyResponse(event=event, match=view(session))


@router.get("/{match_id}/new-set")
async def preview_new_set(match_id: str):
    """Set score that closing the current set would produce."""
    session = get_session(match_id)
    home, away = session.engine.projected_set_wins(session.state)
    return {
        "currentSet": session.state.set_number,
        "nextSet": session.state.set_number + 1,
        "homeSetWins": home,
        "awaySetWins": away,
    }


@router.post("/{match_id}/new-set", response_model=MatchView)
async def start_new_set(match_id: str):
    session = get_session(match_id)
    session.new_set()
    return view(session)


@router.post("/{match_id}/undo", response_model=MatchView)
async def undo(match_id: str):
    session = get_session(match_id)
    try:
        session.undo()
    except VolleyScoutError as e:
        raise to_http(e)
    return view(session)


@router.post("/{match_id}/redo", response_model=MatchView)
async def redo(match_id: str):
    session = get_session(match_id)
    try:
        session.redo()
    except VolleyScoutError as e:
        raise to_http(e)
    return view(session)


@router.get("/{match_id}/history")
async def get_history(match_id: str):
    session = get_session(match_id)
    return {
        "length": len(session.history),
        "cursor": session.history.cursor,
        "canUndo": session.history.can_undo,
        "canRedo": session.history.can_redo,
    }


@router.get("/{match_id}/default-start", response_model=Coordinate)
async def get_default_start(match_id: str, action: ActionType, side: TeamSide):
    """Suggested start point of an action before the user drags it."""
    get_session(match_id)
    return default_start_coordinate(action, side)


@router.delete("/{match_id}", status_code=204)
async def delete_match(match_id: str):
    if match_id not in _sessions:
        raise HTTPException(status_code=404, detail="Match not found")
    del _sessions[match_id]
