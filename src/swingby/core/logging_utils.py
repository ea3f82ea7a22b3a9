"""Buffered CSV logging of simulation runs."""
from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

DEFAULT_RUNS_DIR = Path("data") / "runs"
LAST_RUN_MARKER = "last_run.txt"


class RunLogger:
    """Buffered logger that stores one run's samples and events as CSV files.

    Parameters
    ----------
    root_dir:
        Directory in which a folder per run is created.
    run_id:
        Optional custom run identifier. Defaults to ``YYYYmmdd_HHMMSS_run``;
        a numeric suffix is appended if the folder already exists.
    timeseries_flush_threshold:
        Buffered time series rows before an automatic flush to disk.
    events_flush_threshold:
        Buffered event rows before an automatic flush to disk.
    """

    TIMESERIES_HEADER = [
        "t",
        "x",
        "y",
        "vx",
        "vy",
        "r",
        "v",
        "v_esc",
        "energy",
        "substeps",
    ]
    EVENTS_HEADER = ["t", "type", "r", "v", "details"]

    def __init__(
        self,
        root_dir: str | Path = DEFAULT_RUNS_DIR,
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 20,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        base = run_id or f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_run"
        candidate_id = base
        suffix = 1
        while (self.root_dir / candidate_id).exists():
            candidate_id = f"{base}_{suffix:02d}"
            suffix += 1

        self.run_id = candidate_id
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)

        self.timeseries_path = self.run_dir / "timeseries.csv"
        self.events_path = self.run_dir / "events.csv"
        self.meta_path = self.run_dir / "meta.json"

        self._ts_file = self.timeseries_path.open("w", newline="")
        self._ts_file.write(",".join(self.TIMESERIES_HEADER) + "\n")
        self._ev_file = self.events_path.open("w", newline="")
        self._ev_file.write(",".join(self.EVENTS_HEADER) + "\n")

        self._ts_buffer: list[str] = []
        self._ev_buffer: list[str] = []
        self._ts_threshold = max(1, timeseries_flush_threshold)
        self._ev_threshold = max(1, events_flush_threshold)
        self.closed = False

        (self.root_dir / LAST_RUN_MARKER).write_text(self.run_id, encoding="utf-8")

    # ------------------------------------------------------------------
    def write_meta(self, meta: dict) -> None:
        """Write run metadata to ``meta.json``."""

        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    # ------------------------------------------------------------------
    def log_ts(self, values: Sequence[float]) -> None:
        if len(values) != len(self.TIMESERIES_HEADER):
            raise ValueError(
                f"expected {len(self.TIMESERIES_HEADER)} time series values, got {len(values)}"
            )
        self._ts_buffer.append(",".join(self._format_value(v) for v in values))
        if len(self._ts_buffer) >= self._ts_threshold:
            self._flush_timeseries()

    # ------------------------------------------------------------------
    def log_event(self, t: float, event_type: str, r: float, v: float, **details: object) -> None:
        row = [t, event_type, r, v, json.dumps(details, sort_keys=True) if details else ""]
        self._ev_buffer.append(",".join(self._format_event_value(value) for value in row))
        if len(self._ev_buffer) >= self._ev_threshold:
            self._flush_events()

    # ------------------------------------------------------------------
    def close(self) -> None:
        """Flush pending buffers and close the file handles. Safe to call twice."""

        if self.closed:
            return
        self._flush_timeseries()
        self._flush_events()
        self._ts_file.close()
        self._ev_file.close()
        self.closed = True

    # ------------------------------------------------------------------
    def _flush_timeseries(self) -> None:
        if self._ts_buffer:
            self._ts_file.write("\n".join(self._ts_buffer) + "\n")
            self._ts_file.flush()
            self._ts_buffer.clear()

    def _flush_events(self) -> None:
        if self._ev_buffer:
            self._ev_file.write("\n".join(self._ev_buffer) + "\n")
            self._ev_file.flush()
            self._ev_buffer.clear()

    @staticmethod
    def _format_value(value: float) -> str:
        return f"{value:.10g}"

    @staticmethod
    def _format_event_value(value: object) -> str:
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        text = str(value)
        if "," in text or '"' in text:
            # CSV quoting for the JSON details column
            return '"' + text.replace('"', '""') + '"'
        return text

    # ------------------------------------------------------------------
    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["DEFAULT_RUNS_DIR", "LAST_RUN_MARKER", "RunLogger"]
