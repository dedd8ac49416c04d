"""
CSV export — One row per rally event, spreadsheet friendly.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from volleyscout.models.events import ActionQuality, ActionType, RallyEvent, ResultType
from volleyscout.models.match import TeamConfig

logger = logging.getLogger(__name__)

BOM = "\ufeff"

COLUMNS = [
    "時間", "局數", "我方得分", "對方得分", "發球方", "隊伍", "位置", "背號",
    "動作", "品質", "結果", "起點X", "起點Y", "終點X", "終點Y",
]

ACTION_LABELS = {
    ActionType.SERVE: "發球",
    ActionType.RECEIVE: "接發",
    ActionType.SET: "舉球",
    ActionType.ATTACK: "攻擊",
    ActionType.BLOCK: "攔網",
    ActionType.DIG: "防守",
    ActionType.SUBSTITUTION: "換人",
}

RESULT_LABELS = {
    ResultType.POINT: "得分",
    ResultType.ERROR: "失誤",
    ResultType.NORMAL: "一般",
}

QUALITY_SYMBOLS = {
    ActionQuality.PERFECT: "#",
    ActionQuality.GOOD: "+",
    ActionQuality.NORMAL: "!",
    ActionQuality.POOR: "-",
}


def _fmt(value: Optional[float]) -> str:
    return f"{value:.2f}" if value is not None else ""


def _row(e: RallyEvent, config: TeamConfig) -> list:
    return [
        datetime.fromtimestamp(e.timestamp / 1000).strftime("%H:%M:%S"),
        e.set_number,
        e.home_score,
        e.away_score,
        config.label_for(e.serving_side),
        config.label_for(e.side),
        int(e.position),
        e.player_number,
        ACTION_LABELS[e.action],
        QUALITY_SYMBOLS[e.quality],
        RESULT_LABELS[e.result],
        _fmt(e.start.x if e.start else None),
        _fmt(e.start.y if e.start else None),
        _fmt(e.end.x if e.end else None),
        _fmt(e.end.y if e.end else None),
    ]


def events_to_frame(events: list[RallyEvent], config: Optional[TeamConfig] = None) -> pd.DataFrame:
    """Tabular view of the log, rows in log order, every cell as text."""
    config = config or TeamConfig()
    rows = [_row(e, config) for e in events]
    return pd.DataFrame(rows, columns=COLUMNS, dtype=str)


def export_events_csv(events: list[RallyEvent], config: Optional[TeamConfig] = None) -> str:
    """CSV text with a leading byte-order mark."""
    frame = events_to_frame(events, config)
    return BOM + frame.to_csv(index=False, lineterminator="\n")


def export_filename(config: TeamConfig) -> str:
    return f"{config.match_label or 'match'}_export.csv"


def export_to_file(
    path: Union[str, Path],
    events: list[RallyEvent],
    config: Optional[TeamConfig] = None,
) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_events_csv(events, config), encoding="utf-8")
    logger.info("Exported %d events to %s", len(events), path)
    return path
