from __future__ import annotations

import csv
import logging
import os
import threading
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .averages import GameTotals

logger = logging.getLogger(__name__)

_WRITE_LOCK = threading.Lock()
_ENABLED = {"1", "true", "TRUE", "yes", "YES"}


def maybe_log_game(totals: "GameTotals", path: Optional[str] = None) -> None:
    """Append one CSV line of per-game totals if enabled.

    Enable by setting env var GAME_LOG_ENABLE=1. Optional GAME_LOG_PATH overrides path.
    Default path: artifacts/game_logs.csv (created if missing).
    """
    try:
        if os.environ.get("GAME_LOG_ENABLE", "0") not in _ENABLED:
            return
        path = path or os.environ.get("GAME_LOG_PATH")
        if not path:
            root = Path(__file__).resolve().parents[3]
            path = str(root / "artifacts" / "game_logs.csv")
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        row = {"ts": datetime.now(timezone.utc).isoformat(timespec="seconds"), **asdict(totals)}
        with _WRITE_LOCK, p.open("a", newline="", encoding="utf-8") as f:
            header_written = p.stat().st_size > 0
            w = csv.DictWriter(f, fieldnames=list(row))
            if not header_written:
                w.writeheader()
            w.writerow(row)
    except OSError as exc:
        # telemetry is best-effort and never breaks a simulation run
        logger.warning("could not write game telemetry: %s", exc)
