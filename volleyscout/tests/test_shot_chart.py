"""
Tests for the plotly shot chart.
"""

from volleyscout.charts.shot_chart import build_shot_chart
from volleyscout.models.court import Coordinate, Lineup, TeamSide
from volleyscout.models.events import ActionType, ShotCategory, ShotPath


def _path(category, color, end=(50, 80)):
    return ShotPath(
        event_id="e", action=ActionType.ATTACK, category=category, color=color,
        start=Coordinate(x=20, y=35), end=Coordinate(x=end[0], y=end[1]), landed_in=True,
    )


class TestShotChart:
    def test_one_trace_per_path(self):
        fig = build_shot_chart([
            _path(ShotCategory.KILL, "#10B981"),
            _path(ShotCategory.KILL, "#10B981", end=(70, 90)),
            _path(ShotCategory.ERROR, "#EF4444"),
        ])
        assert len(fig.data) == 3
        assert [t.showlegend for t in fig.data] == [True, False, True]
        assert fig.data[0].line.color == "#10B981"

    def test_lineup_markers(self):
        lineup = Lineup.from_numbers(["1", "2", "3", "4", "5", "6"])
        fig = build_shot_chart([], lineup=lineup, side=TeamSide.AWAY)
        markers = fig.data[-1]
        assert markers.name == "Lineup"
        assert list(markers.text) == ["1", "2", "3", "4", "5", "6"]
        # away slot 1 is drawn top-left
        assert (markers.x[0], markers.y[0]) == (20.0, 15.0)

    def test_court_is_drawn_with_y_down(self):
        fig = build_shot_chart([])
        assert len(fig.layout.shapes) == 4
        assert tuple(fig.layout.yaxis.range) == (100, 0)
