"""
Snapshot codec — Versioned JSON encoding of a saved match.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import ValidationError

from volleyscout.config import settings
from volleyscout.engine.errors import MalformedSnapshot
from volleyscout.models.match import MatchState, TeamConfig
from volleyscout.models.snapshot import MatchSnapshot


def build_snapshot(
    config: TeamConfig,
    state: MatchState,
    saved_at: Optional[int] = None,
) -> MatchSnapshot:
    data = {
        "format_version": settings.SNAPSHOT_FORMAT_VERSION,
        "config": config,
        "state": state,
    }
    if saved_at is not None:
        data["saved_at_epoch_millis"] = saved_at
    return MatchSnapshot(**data)


def dump_snapshot(snapshot: MatchSnapshot) -> str:
    return snapshot.model_dump_json(by_alias=True, indent=2)


def load_snapshot(text: Union[str, bytes]) -> MatchSnapshot:
    """Parse and validate a saved match; shape, version or lineup mismatch is MalformedSnapshot."""
    try:
        snapshot = MatchSnapshot.model_validate_json(text)
    except ValidationError as e:
        raise MalformedSnapshot(f"invalid snapshot: {e.error_count()} error(s)") from e

    if snapshot.format_version != settings.SNAPSHOT_FORMAT_VERSION:
        raise MalformedSnapshot(
            f"unsupported snapshot format {snapshot.format_version}, "
            f"expected {settings.SNAPSHOT_FORMAT_VERSION}"
        )

    for name, lineup in (("home", snapshot.state.home_lineup), ("away", snapshot.state.away_lineup)):
        if lineup.has_blank():
            raise MalformedSnapshot(f"{name} lineup has an empty slot")
        if lineup.duplicates():
            raise MalformedSnapshot(f"{name} lineup repeats " + ", ".join(lineup.duplicates()))
    return snapshot


def default_save_key(config: TeamConfig, now: Optional[datetime] = None) -> str:
    """'<match label>_<MMDD><HHMM>', the suggested name in the save dialog."""
    now = now or datetime.now()
    return f"{config.match_label or 'match'}_{now:%m%d%H%M}"
