"""Analyze a recorded gravity-assist run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from swingby.core.logging_utils import DEFAULT_RUNS_DIR, LAST_RUN_MARKER

TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
TERMINAL_EVENTS = ("crash", "captured", "escape")
SECONDS_PER_DAY = 86_400.0


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {
                "t": float(row["t"]),
                "type": row["type"],
                "r": float(row["r"]),
                "v": float(row["v"]),
                "details": {},
            }
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = {"raw": details_raw}
            events.append(event)
    return events


def resolve_run_dir(run_arg: str | None, runs_dir: Path = DEFAULT_RUNS_DIR) -> Path:
    """Find the run folder for *run_arg*, or the last logged run when omitted."""

    if run_arg:
        run_path = Path(run_arg)
        if not run_path.is_dir():
            run_path = runs_dir / run_arg
        return run_path
    marker = runs_dir / LAST_RUN_MARKER
    if not marker.exists():
        raise FileNotFoundError(f"no run given and {marker} is missing")
    return runs_dir / marker.read_text(encoding="utf-8").strip()


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def final_event(events: List[dict]) -> dict | None:
    for event in reversed(events):
        if event["type"] in TERMINAL_EVENTS:
            return event
    return None


def summarize(ts: Dict[str, np.ndarray], events: List[dict]) -> dict:
    speed = ts.get("v", np.array([]))
    radius = ts.get("r", np.array([]))
    summary: dict = {
        "ticks": int(speed.size),
        "duration": float(ts["t"][-1]) if speed.size else 0.0,
        "peak_speed": float(speed.max()) if speed.size else 0.0,
        "final_speed": float(speed[-1]) if speed.size else 0.0,
        "speed_gain": float(speed[-1] - speed[0]) if speed.size else 0.0,
        "closest_approach": float(radius.min()) if radius.size else float("nan"),
        "periapsis_passes": sum(1 for event in events if event["type"] == "periapsis"),
        "outcome": "unfinished",
        "grade": None,
    }
    terminal = final_event(events)
    if terminal is not None:
        summary["outcome"] = terminal["type"]
        summary["grade"] = terminal["details"].get("grade")
        summary["out_of_bounds"] = terminal["details"].get("out_of_bounds")
    return summary


def plot_trajectory(fig_dir: Path, ts: Dict[str, np.ndarray], meta: dict) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["x"] / 1e6, ts["y"] / 1e6, color="#f8f9fa", lw=1.2, label="Probe")
    half_w = float(meta.get("region_width", 0.0)) / 2e6
    half_h = float(meta.get("region_height", 0.0)) / 2e6
    if half_w > 0 and half_h > 0:
        ax.add_patch(
            plt.Rectangle((-half_w, -half_h), 2 * half_w, 2 * half_h, fill=False, ls="--", color="#868e96")
        )
    start = meta.get("primary_start")
    if start:
        ax.scatter([start["x"] / 1e6], [start["y"] / 1e6], color="#ffa94d", s=50, label="Jupiter (start)")
    ax.set_facecolor("#0b1020")
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x [Gm]")
    ax.set_ylabel("y [Gm]")
    ax.set_title("Trajectory")
    ax.legend(loc="upper right")
    fig.tight_layout()
    fig.savefig(fig_dir / "trajectory.png", dpi=150)
    plt.close(fig)


def plot_speed(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> None:
    t_days = ts["t"] / SECONDS_PER_DAY
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(t_days, ts["v"], color="#51cf66", label="Speed")
    if "v_esc" in ts:
        v_esc = np.where(np.isfinite(ts["v_esc"]), ts["v_esc"], np.nan)
        ax.plot(t_days, v_esc, color="#ff6b6b", ls="--", label="Escape velocity")
    for event in events:
        if event["type"] == "periapsis":
            ax.axvline(event["t"] / SECONDS_PER_DAY, color="#ffd43b", ls=":", alpha=0.6)
    ax.set_xlabel("t [days]")
    ax.set_ylabel("Speed [km/s]")
    ax.set_title("Speed over time")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "speed.png", dpi=150)
    plt.close(fig)


def plot_distance(fig_dir: Path, ts: Dict[str, np.ndarray], meta: dict) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.semilogy(ts["t"] / SECONDS_PER_DAY, ts["r"], color="#4dabf7")
    radius = meta.get("primary_radius")
    if radius:
        ax.axhline(float(radius), color="#ffa94d", ls="--", label="Jupiter radius")
        ax.legend()
    ax.set_xlabel("t [days]")
    ax.set_ylabel("Distance to Jupiter [km]")
    ax.set_title("Distance over time")
    ax.grid(True, which="both", alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "distance.png", dpi=150)
    plt.close(fig)


def print_summary(run_dir: Path, meta: dict, summary: dict) -> None:
    print(f"Run: {run_dir.name} (profile: {meta.get('profile', '?')})")
    grade = summary["grade"]
    print(f" Outcome: {summary['outcome']}" + (f" (grade {grade})" if grade else ""))
    if summary.get("out_of_bounds"):
        print(" Probe left the visible region")
    print(f" Simulated time: {summary['duration'] / SECONDS_PER_DAY:.1f} days over {summary['ticks']} samples")
    print(f" Final speed: {summary['final_speed']:.2f} km/s (gain {summary['speed_gain']:+.2f} km/s)")
    print(f" Peak speed: {summary['peak_speed']:.2f} km/s")
    print(f" Closest approach: {summary['closest_approach']:,.0f} km")
    print(f" Periapsis passes: {summary['periapsis_passes']}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Analyze a logged run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a run folder (default: last run)")
    parser.add_argument("--runs-dir", type=Path, default=DEFAULT_RUNS_DIR, help="Root folder of logged runs")
    args = parser.parse_args(argv)

    try:
        run_path = resolve_run_dir(args.run_dir, args.runs_dir)
    except FileNotFoundError as exc:
        parser.error(str(exc))
    if not run_path.is_dir():
        parser.error(f"run folder not found: {run_path}")

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("run folder is missing meta/timeseries/events files")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)
    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or ts["t"].size == 0:
        parser.error("timeseries.csv is empty, nothing to analyze")

    fig_dir = ensure_fig_dir(run_path)
    plot_trajectory(fig_dir, ts, meta)
    plot_speed(fig_dir, ts, events)
    plot_distance(fig_dir, ts, meta)

    print_summary(run_path, meta, summarize(ts, events))
    print(f" Figures saved to {fig_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
