from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]

DEFAULT_FONT_NAMES = ("dejavusans", "arial", "helvetica", "liberationsans")

_TEXT_CACHE_MAX_SIZE = 256
_TEXT_CACHE: OrderedDict[tuple[int, str, Color, int], pygame.Surface] = OrderedDict()


def get_text_surface(
    font: pygame.font.Font,
    text: str,
    color: Color,
    alpha: int = 255,
) -> pygame.Surface:
    """Return a cached rendered label, optionally faded to *alpha*."""

    key = (id(font), text, color, alpha)
    cached = _TEXT_CACHE.get(key)
    if cached is not None:
        _TEXT_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color[:3])
    if alpha < 255:
        rendered.set_alpha(alpha)
    _TEXT_CACHE[key] = rendered
    if len(_TEXT_CACHE) > _TEXT_CACHE_MAX_SIZE:
        _TEXT_CACHE.popitem(last=False)
    return rendered


def load_font(size: int, preferred_names: Iterable[str] = DEFAULT_FONT_NAMES, *, bold: bool = False) -> pygame.font.Font:
    for name in preferred_names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    return pygame.font.Font(None, size)


__all__ = ["Color", "DEFAULT_FONT_NAMES", "get_text_surface", "load_font"]
