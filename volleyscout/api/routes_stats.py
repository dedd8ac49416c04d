"""
Stats routes — Team comparison, player reports, rankings, shot charts and CSV export.
"""

from __future__ import annotations
from urllib.parse import quote

from fastapi import APIRouter, Response

from volleyscout.api.routes_matches import get_session
from volleyscout.charts.shot_chart import build_shot_chart
from volleyscout.export.csv_export import export_filename
from volleyscout.models.court import TeamSide
from volleyscout.models.stats import PlayerRanking, PlayerReport, TeamComparison

router = APIRouter()


@router.get("/match/{match_id}", response_model=TeamComparison)
async def get_match_stats(match_id: str):
    """Home vs away summaries for the current set."""
    return get_session(match_id).stats()


@router.get("/match/{match_id}/rankings/{side}", response_model=list[PlayerRanking])
async def get_rankings(match_id: str, side: TeamSide):
    """Players of one side by points; the top two scorers are flagged."""
    session = get_session(match_id)
    return session.stats_calculator.rank_players(session.state.events, side)


@router.get("/match/{match_id}/player/{side}/{number}", response_model=PlayerReport)
async def get_player_report(match_id: str, side: TeamSide, number: str):
    session = get_session(match_id)
    return session.stats_calculator.player_report(session.state.events, side, number, session.config)


@router.get("/match/{match_id}/shot-chart/{side}/{number}")
async def get_shot_chart(match_id: str, side: TeamSide, number: str):
    """Plotly figure JSON of one player's paths over their side's lineup."""
    session = get_session(match_id)
    report = session.stats_calculator.player_report(session.state.events, side, number, session.config)
    fig = build_shot_chart(
        report.shot_paths,
        lineup=session.state.lineup_for(side),
        side=side,
        title=f"{report.team_name} #{number}",
    )
    return Response(content=fig.to_json(), media_type="application/json")


@router.get("/match/{match_id}/export")
async def export_csv(match_id: str):
    """Whole-match event log as a BOM-prefixed CSV download."""
    session = get_session(match_id)
    filename = export_filename(session.config)
    return Response(
        content=session.export_csv().encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
