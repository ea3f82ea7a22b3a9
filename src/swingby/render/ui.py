from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from .assets import Color, get_text_surface


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    disabled_color: Color
    text_color: tuple[int, int, int]
    disabled_text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0


class Button:
    """Rounded button that only fires its callback while enabled."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        *,
        style: ButtonVisualStyle,
        enabled: bool = True,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.enabled = enabled
        self._callback = callback
        self._style = style

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        mouse_pos: tuple[int, int] | None = None,
    ) -> None:
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        style = self._style
        if not self.enabled:
            color = style.disabled_color
            text_color = style.disabled_text_color
        elif self.rect.collidepoint(mouse_pos):
            color = style.hover_color
            text_color = style.text_color
        else:
            color = style.base_color
            text_color = style.text_color

        button_surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(button_surface, color, button_surface.get_rect(), border_radius=style.radius)
        if style.border_color is not None and style.border_width > 0 and self.enabled:
            pygame.draw.rect(
                button_surface,
                style.border_color,
                button_surface.get_rect(),
                style.border_width,
                border_radius=style.radius,
            )
        surface.blit(button_surface, self.rect.topleft)
        text_surf = get_text_surface(font, self.text, text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Fire the callback on a left click inside the button; return whether it fired."""

        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self._callback()
                return True
        return False


def wrap_text(text: str, font: pygame.font.Font, max_width: int) -> list[str]:
    """Greedy word wrap to fit within *max_width* pixels."""
    lines: list[str] = []
    current: list[str] = []
    for word in text.split():
        candidate = " ".join(current + [word])
        if font.size(candidate)[0] <= max_width or not current:
            current.append(word)
        else:
            lines.append(" ".join(current))
            current = [word]
    if current:
        lines.append(" ".join(current))
    return lines


def draw_text_lines(
    surface: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    topleft: tuple[int, int],
) -> None:
    x, y = topleft
    line_height = font.get_linesize()
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        surface.blit(get_text_surface(font, text, color), (x, y + idx * line_height))


__all__ = ["Button", "ButtonVisualStyle", "draw_text_lines", "wrap_text"]
