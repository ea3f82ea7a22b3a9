"""Parameter sweep over launch points and angles along one region edge."""
from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.colors import ListedColormap

from swingby.core.config import DEFAULT_PROFILE, PROFILES, PhysicsCfg, get_profile
from swingby.core.outcome import OutcomeKind
from swingby.core.session import RunState, Session
from swingby.core.vector import Vector2

FIGURES_DIR = Path("figures")

# Outcome codes stored in the result grid
UNFINISHED, CRASH, CAPTURED, ESCAPE = -1, 0, 1, 2
OUTCOME_CODES = {
    OutcomeKind.CRASH: CRASH,
    OutcomeKind.CAPTURED: CAPTURED,
    OutcomeKind.ESCAPE: ESCAPE,
}

# Inward normal of each edge
INWARD = {
    "left": Vector2(1.0, 0.0),
    "right": Vector2(-1.0, 0.0),
    "top": Vector2(0.0, -1.0),
    "bottom": Vector2(0.0, 1.0),
}


@dataclass(frozen=True)
class SweepResult:
    edge: str
    offsets: np.ndarray  # km along the edge
    angles: np.ndarray  # degrees from the inward normal
    final_speed: np.ndarray
    outcome: np.ndarray
    grades: np.ndarray


def launch_for(cfg: PhysicsCfg, edge: str, offset: float, angle_deg: float) -> tuple[Vector2, Vector2]:
    """Boundary point at *offset* along *edge* and a direction *angle_deg* off the inward normal."""

    if edge in ("left", "right"):
        x = -cfg.half_width if edge == "left" else cfg.half_width
        point = Vector2(x, offset)
    else:
        y = cfg.half_height if edge == "top" else -cfg.half_height
        point = Vector2(offset, y)
    normal = INWARD[edge]
    a = math.radians(angle_deg)
    direction = Vector2(
        normal.x * math.cos(a) - normal.y * math.sin(a),
        normal.x * math.sin(a) + normal.y * math.cos(a),
    )
    return point, direction


def simulate_shot(cfg: PhysicsCfg, point: Vector2, direction: Vector2, max_ticks: int) -> Session:
    session = Session(cfg)
    session.set_launch(point, direction)
    session.start()
    session.run_to_end(max_ticks)
    return session


def run_sweep(
    cfg: PhysicsCfg,
    *,
    edge: str = "left",
    positions: int = 15,
    angles: int = 15,
    max_angle: float = 75.0,
    max_ticks: int = 1_800,
) -> SweepResult:
    extent = cfg.half_height if edge in ("left", "right") else cfg.half_width
    offsets = np.linspace(-extent, extent, positions)
    angle_values = np.linspace(-max_angle, max_angle, angles)
    final_speed = np.zeros((angle_values.size, offsets.size), dtype=float)
    outcome = np.full((angle_values.size, offsets.size), UNFINISHED, dtype=int)
    grades = np.full((angle_values.size, offsets.size), "", dtype=object)

    total = angle_values.size * offsets.size
    print(f"\n--- Sweeping {total} launches along the {edge} edge ({cfg.name} profile) ---")
    done = 0
    for i, angle in enumerate(angle_values):
        for j, offset in enumerate(offsets):
            point, direction = launch_for(cfg, edge, float(offset), float(angle))
            session = simulate_shot(cfg, point, direction, max_ticks)
            final_speed[i, j] = session.probe.speed
            if session.state is RunState.ENDED and session.outcome is not None:
                outcome[i, j] = OUTCOME_CODES[session.outcome.kind]
                grades[i, j] = session.outcome.grade
            done += 1
        print(f"  {i + 1}/{angle_values.size} angles done ({100 * done / total:.1f}%)")

    return SweepResult(edge, offsets, angle_values, final_speed, outcome, grades)


def best_shot(result: SweepResult) -> tuple[float, float, float, str] | None:
    """(offset km, angle deg, final speed, grade) of the fastest escape, if any."""

    escaped = result.outcome == ESCAPE
    if not escaped.any():
        return None
    speeds = np.where(escaped, result.final_speed, -np.inf)
    i, j = np.unravel_index(int(np.argmax(speeds)), speeds.shape)
    return (
        float(result.offsets[j]),
        float(result.angles[i]),
        float(result.final_speed[i, j]),
        str(result.grades[i, j]),
    )


def plot_sweep(result: SweepResult, out_dir: Path = FIGURES_DIR) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    extent = [
        result.offsets.min() / 1e6,
        result.offsets.max() / 1e6,
        result.angles.min(),
        result.angles.max(),
    ]
    fig, (ax_speed, ax_kind) = plt.subplots(1, 2, figsize=(13, 5))

    im = ax_speed.imshow(
        np.ma.masked_where(result.outcome != ESCAPE, result.final_speed),
        origin="lower",
        extent=extent,
        aspect="auto",
        cmap="viridis",
    )
    fig.colorbar(im, ax=ax_speed, label="Final speed [km/s]")
    ax_speed.set_title("Final speed of escaping shots")

    cmap = ListedColormap(["#495057", "#f03e3e", "#ffd43b", "#2f9e44"])
    im_kind = ax_kind.imshow(result.outcome, origin="lower", extent=extent, aspect="auto", cmap=cmap, vmin=-1.5, vmax=2.5)
    cbar = fig.colorbar(im_kind, ax=ax_kind, ticks=[UNFINISHED, CRASH, CAPTURED, ESCAPE])
    cbar.ax.set_yticklabels(["Unfinished", "Crash", "Captured", "Escape"])
    ax_kind.set_title("Outcome")

    for ax in (ax_speed, ax_kind):
        ax.set_xlabel(f"Launch offset along {result.edge} edge [Gm]")
        ax.set_ylabel("Launch angle from inward normal [deg]")
    fig.tight_layout()
    out = out_dir / f"sweep_{result.edge}.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Sweep launch points and angles and map the outcomes.")
    parser.add_argument("--profile", choices=sorted(PROFILES), default=DEFAULT_PROFILE)
    parser.add_argument("--edge", choices=sorted(INWARD), default="left")
    parser.add_argument("--positions", type=int, default=15, help="Launch points along the edge")
    parser.add_argument("--angles", type=int, default=15, help="Launch angles")
    parser.add_argument("--max-angle", type=float, default=75.0, help="Largest angle off the inward normal [deg]")
    parser.add_argument("--max-ticks", type=int, default=1_800, help="Tick cap per shot")
    parser.add_argument("--out-dir", type=Path, default=FIGURES_DIR)
    args = parser.parse_args(argv)

    cfg = get_profile(args.profile)
    result = run_sweep(
        cfg,
        edge=args.edge,
        positions=args.positions,
        angles=args.angles,
        max_angle=args.max_angle,
        max_ticks=args.max_ticks,
    )
    out = plot_sweep(result, args.out_dir)
    print(f"\nHeatmap saved to {out}")

    best = best_shot(result)
    if best is None:
        print("No launch in the sweep escaped.")
    else:
        offset, angle, speed, grade = best
        print(f"Best shot: offset {offset / 1e6:.2f} Gm, angle {angle:+.1f} deg -> {speed:.2f} km/s (grade {grade})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
