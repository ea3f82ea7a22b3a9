"""
Swing-by - Interactive Gravity Assist
=====================================

Launch a probe from the edge of the simulation region at 10 km/s and use a
close pass of Jupiter to leave the region as fast as possible.

Controls: press near the edge of the canvas and drag to aim, then press
Start. Reset clears the run. Esc quits.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pygame

from swingby.core.config import (
    DEFAULT_PROFILE,
    PROFILES,
    RENDER_CFG,
    PhysicsCfg,
    RenderCfg,
    get_profile,
)
from swingby.core.logging_utils import DEFAULT_RUNS_DIR, RunLogger
from swingby.core.outcome import Outcome, OutcomeKind
from swingby.core.session import RunState, Session
from swingby.core.vector import Vector2
from swingby.render import (
    Button,
    ButtonVisualStyle,
    draw_aim_line,
    draw_axes,
    draw_body,
    draw_ghost,
    draw_speed_graph,
    draw_text_lines,
    draw_trail,
    load_font,
    wrap_text,
)

INTRO_LINES = (
    "Swing past Jupiter to boost the probe from 10 km/s to 20 km/s or more.",
    "Press near the edge of the region and drag to aim, then press Start.",
)


def describe_outcome(outcome: Outcome) -> str:
    if outcome.kind is OutcomeKind.CRASH:
        return f"Mission failed! The probe crashed into Jupiter (grade: {outcome.grade})"
    if outcome.kind is OutcomeKind.CAPTURED:
        return (
            "Escape velocity not reached. The probe is captured by Jupiter's gravity "
            f"(grade: {outcome.grade})"
        )
    return (
        f"Mission complete! Final speed: {outcome.speed:.2f} km/s, "
        f"Jupiter escape velocity: {outcome.escape_velocity:.2f} km/s (grade: {outcome.grade})"
    )


def format_sim_time(seconds: float) -> str:
    days = seconds / 86_400.0
    return f"t = {days:,.1f} days"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Interactive gravity-assist simulator.")
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default=DEFAULT_PROFILE,
        help="Parameter profile (grading thresholds).",
    )
    parser.add_argument(
        "--runs-dir",
        type=Path,
        default=DEFAULT_RUNS_DIR,
        help="Directory where run logs are written.",
    )
    parser.add_argument("--no-log", action="store_true", help="Do not write run logs.")
    return parser.parse_args(argv)


def run(physics_cfg: PhysicsCfg, render_cfg: RenderCfg = RENDER_CFG, *, runs_dir: Path | None = DEFAULT_RUNS_DIR) -> None:
    pygame.init()
    pygame.display.set_caption("Swing-by")
    screen = pygame.display.set_mode(render_cfg.window_size)
    clock = pygame.time.Clock()

    tick_font = load_font(11)
    graph_font = load_font(12)
    hud_font = load_font(15)
    button_font = load_font(16, bold=True)

    session = Session(physics_cfg, render_cfg)
    viewport = session.viewport
    canvas_rect = pygame.Rect(0, 0, render_cfg.width, render_cfg.height)
    graph_rect = pygame.Rect(0, render_cfg.height, render_cfg.width, render_cfg.graph_height)
    panel_top = render_cfg.height + render_cfg.graph_height

    running = True
    dragging = False
    drag_origin: Vector2 | None = None
    mouse_pos = (0, 0)
    result_text = ""
    result_color = render_cfg.hud_text_color
    logger: RunLogger | None = None

    def start() -> None:
        nonlocal logger, result_text
        if session.state is not RunState.ARMED:
            return
        logger = RunLogger(runs_dir) if runs_dir is not None else None
        session.start(logger)
        result_text = ""

    def reset() -> None:
        nonlocal dragging, drag_origin, result_text, logger
        session.reset()
        dragging = False
        drag_origin = None
        result_text = ""
        logger = None

    def finish(outcome: Outcome) -> None:
        nonlocal result_text, result_color
        result_text = describe_outcome(outcome)
        result_color = render_cfg.result_good_color if outcome.escaped else render_cfg.result_bad_color
        print(result_text)
        if logger is not None:
            print(f"Run logged to {logger.run_dir}")

    style = ButtonVisualStyle(
        base_color=render_cfg.button_color,
        hover_color=render_cfg.button_hover_color,
        disabled_color=render_cfg.button_disabled_color,
        text_color=render_cfg.button_text_color,
        disabled_text_color=render_cfg.button_disabled_text_color,
        radius=render_cfg.button_radius,
        border_color=render_cfg.button_border_color,
        border_width=1,
    )
    button_y = panel_top + (render_cfg.panel_height - 40) // 2
    start_button = Button((render_cfg.width - 250, button_y, 110, 40), "Start", start, style=style)
    reset_button = Button((render_cfg.width - 125, button_y, 110, 40), "Reset", reset, style=style)
    buttons = (start_button, reset_button)
    text_width = start_button.rect.left - 28

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.MOUSEMOTION:
                mouse_pos = event.pos
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if any(button.handle_event(event) for button in buttons):
                    continue
                if session.state in (RunState.IDLE, RunState.ARMED) and canvas_rect.collidepoint(event.pos):
                    edge = viewport.edge_at(*event.pos, render_cfg.edge_pick_margin)
                    if edge is not None:
                        dragging = True
                        drag_origin = viewport.snap_to_edge(*event.pos, edge)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1 and dragging:
                dragging = False
                if drag_origin is not None:
                    target = viewport.to_world(*event.pos)
                    session.set_launch(drag_origin, target - drag_origin)
                drag_origin = None

        if session.state is RunState.RUNNING:
            snapshot = session.step()
            if snapshot.ended and snapshot.outcome is not None:
                finish(snapshot.outcome)

        start_button.enabled = session.state is RunState.ARMED

        # --- Drawing ---
        screen.fill(render_cfg.background_color)
        canvas = screen.subsurface(canvas_rect)
        draw_axes(canvas, viewport, physics_cfg=physics_cfg, render_cfg=render_cfg, tick_font=tick_font)
        draw_body(canvas, viewport, session.primary, render_cfg=render_cfg)
        draw_trail(canvas, viewport, session.trail.view(), render_cfg=render_cfg)
        if session.state is not RunState.IDLE:
            draw_body(canvas, viewport, session.probe, render_cfg=render_cfg)

        if dragging and drag_origin is not None:
            draw_ghost(canvas, viewport, drag_origin, render_cfg=render_cfg)
            draw_aim_line(canvas, viewport.to_pixel(drag_origin), mouse_pos, render_cfg=render_cfg)
        elif session.state is RunState.IDLE and canvas_rect.collidepoint(mouse_pos):
            edge = viewport.edge_at(*mouse_pos, render_cfg.edge_pick_margin)
            if edge is not None:
                draw_ghost(canvas, viewport, viewport.snap_to_edge(*mouse_pos, edge), render_cfg=render_cfg)

        draw_speed_graph(
            screen,
            graph_rect,
            session.speeds.view(),
            session.speed_axis_max,
            render_cfg=render_cfg,
            font=graph_font,
        )

        hud = [
            (f"Speed: {session.probe.speed:.2f} km/s   {format_sim_time(session.time)}", render_cfg.hud_text_color),
        ]
        if result_text:
            hud.extend((line, result_color) for line in wrap_text(result_text, hud_font, text_width))
        elif session.state is RunState.IDLE:
            for paragraph in INTRO_LINES:
                hud.extend((line, render_cfg.hud_text_color) for line in wrap_text(paragraph, hud_font, text_width))
        draw_text_lines(screen, hud_font, hud, (14, panel_top + 12))
        for button in buttons:
            button.draw(screen, button_font, mouse_pos)

        pygame.display.flip()
        clock.tick(render_cfg.fps)

    session.reset()
    pygame.quit()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    physics_cfg = get_profile(args.profile)
    run(physics_cfg, runs_dir=None if args.no_log else args.runs_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
