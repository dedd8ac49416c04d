"""Shared test fixtures."""

import pytest

from volleyscout.engine.match_engine import MatchEngine
from volleyscout.models.court import Lineup, TeamSide
from volleyscout.models.events import ActionType, RallyInput, ResultType
from volleyscout.models.match import TeamConfig


@pytest.fixture
def config():
    return TeamConfig(home_name="Eagles", away_name="Hawks", match_label="final")


@pytest.fixture
def home_lineup():
    return Lineup.from_numbers(["1", "2", "3", "4", "5", "6"])


@pytest.fixture
def away_lineup():
    return Lineup.from_numbers(["11", "12", "13", "14", "15", "16"])


@pytest.fixture
def engine(config):
    return MatchEngine(config)


@pytest.fixture
def state(engine, home_lineup, away_lineup):
    """Fresh set-1 state, home serving."""
    return engine.new_match(home_lineup, away_lineup, TeamSide.HOME)


def rally(side, position, action=ActionType.ATTACK, result=ResultType.NORMAL, **kwargs):
    return RallyInput(side=side, position=position, action=action, result=result, **kwargs)
