"""
Shot chart — Plotly court diagram with classified attack/serve paths.
"""

from __future__ import annotations

from typing import Optional

import plotly.graph_objects as go

from volleyscout.engine.geometry import (
    ATTACK_LINE_AWAY_Y,
    ATTACK_LINE_HOME_Y,
    COURT_MAX_X,
    COURT_MAX_Y,
    COURT_MIN_X,
    COURT_MIN_Y,
    NET_Y,
    landing_label,
    lineup_marker_coordinate,
)
from volleyscout.models.court import Lineup, Position, TeamSide
from volleyscout.models.events import ShotCategory, ShotPath

CATEGORY_NAMES = {
    ShotCategory.KILL: "Attack kill",
    ShotCategory.ACE: "Serve ace",
    ShotCategory.ERROR: "Error",
    ShotCategory.NEUTRAL: "In play",
}


def _court_shapes() -> list[dict]:
    line = {"color": "black"}
    return [
        {"type": "rect", "x0": COURT_MIN_X, "x1": COURT_MAX_X,
         "y0": COURT_MIN_Y, "y1": COURT_MAX_Y, "line": {"color": "black", "width": 2}},
        {"type": "line", "x0": COURT_MIN_X, "x1": COURT_MAX_X,
         "y0": NET_Y, "y1": NET_Y, "line": {"color": "black", "width": 4}},
        {"type": "line", "x0": COURT_MIN_X, "x1": COURT_MAX_X,
         "y0": ATTACK_LINE_AWAY_Y, "y1": ATTACK_LINE_AWAY_Y, "line": line, "opacity": 0.2},
        {"type": "line", "x0": COURT_MIN_X, "x1": COURT_MAX_X,
         "y0": ATTACK_LINE_HOME_Y, "y1": ATTACK_LINE_HOME_Y, "line": line, "opacity": 0.2},
    ]


def build_shot_chart(
    paths: list[ShotPath],
    lineup: Optional[Lineup] = None,
    side: TeamSide = TeamSide.HOME,
    title: str = "",
) -> go.Figure:
    """One line+arrow per path; y grows downward like the on-screen court."""
    fig = go.Figure()

    shown: set[ShotCategory] = set()
    for p in paths:
        fig.add_trace(go.Scatter(
            x=[p.start.x, p.end.x],
            y=[p.start.y, p.end.y],
            mode="lines+markers",
            line={"color": p.color, "width": 2},
            marker={"symbol": ["circle", "arrow"], "angleref": "previous", "size": [6, 12],
                    "color": p.color},
            name=CATEGORY_NAMES[p.category],
            legendgroup=p.category.value,
            showlegend=p.category not in shown,
            hovertext=f"{p.action.value} → {landing_label(p.end)}",
        ))
        shown.add(p.category)

    if lineup is not None:
        coords = [lineup_marker_coordinate(pos, side) for pos in Position]
        fig.add_trace(go.Scatter(
            x=[c.x for c in coords],
            y=[c.y for c in coords],
            mode="markers+text",
            text=lineup.numbers(),
            textposition="middle center",
            marker={"size": 28, "color": "#2563EB" if side == TeamSide.HOME else "#DC2626"},
            name="Lineup",
        ))

    fig.update_layout(
        title=title,
        shapes=_court_shapes(),
        xaxis={"range": [0, 100], "visible": False},
        yaxis={"range": [100, 0], "visible": False, "scaleanchor": "x", "scaleratio": 2},
        plot_bgcolor="white",
        showlegend=bool(paths),
    )
    return fig
