"""Colour palettes for the GUI.

A Theme is an immutable record handed to the window; nothing here is
mutated at runtime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_THEME = "dracula"


@dataclass(frozen=True)
class Theme:
    name: str
    bg: str
    darker_bg: str
    panel: str
    accent: str
    text: str
    muted: str
    primary: str
    secondary: str
    purple: str
    cyan: str
    green: str
    orange: str
    red: str


THEMES = {
    "dracula": Theme(
        name="dracula",
        bg="#282a36",
        darker_bg="#20222e",
        panel="#44475a",
        accent="#6272a4",
        text="#f8f8f2",
        muted="#bababa",
        primary="#9862af",
        secondary="#ff79c6",
        purple="#bd93f9",
        cyan="#8be9fd",
        green="#50fa7b",
        orange="#ffb86c",
        red="#ff5555",
    ),
    "cyber": Theme(
        name="cyber",
        bg="#050505",
        darker_bg="#000000",
        panel="#0f2b2b",
        accent="#00e5ff",
        text="#39ff14",
        muted="#8cffc1",
        primary="#ff2dfd",
        secondary="#faff00",
        purple="#ff8c00",
        cyan="#00e5ff",
        green="#39ff14",
        orange="#ff8c00",
        red="#ff4d4d",
    ),
}


def get_theme(name):
    theme = THEMES.get((name or "").lower())
    if theme is None:
        logger.warning("Unknown theme %r; using %s.", name, DEFAULT_THEME)
        return THEMES[DEFAULT_THEME]
    return theme


def priority_color(theme: Theme, priority: int) -> str:
    return {
        1: theme.red,
        2: theme.primary,
        3: theme.secondary,
        4: theme.purple,
    }.get(priority, theme.accent)


def priority_label(priority: int) -> str:
    if priority == 1:
        return "High"
    if priority == 2:
        return "Medium"
    return "Low"
