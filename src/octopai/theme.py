"""Textual themes for Octopai."""

from __future__ import annotations

from textual.theme import Theme

# Deep-sea palette for truecolor terminals
OCTOPAI_THEME = Theme(
    name="octopai",
    primary="#4aa3df",  # Lagoon Blue
    secondary="#c678dd",  # Ink Violet
    accent="#56d4c4",  # Reef Teal
    foreground="#cdd6e0",
    background="#0b1220",  # Abyss
    surface="#121b2b",
    panel="#1a2436",
    warning="#e5c07b",
    error="#e06c75",
    success="#7ec699",
    dark=True,
    variables={
        "border": "#28344a",
        "border-blurred": "#28344a80",
        "text-muted": "#5f6f86",
        "text-disabled": "#5f6f8680",
        "input-cursor-foreground": "#0b1220",
        "input-cursor-background": "#56d4c4",
        "scrollbar": "#28344a",
        "scrollbar-hover": "#4aa3df",
        "scrollbar-active": "#c678dd",
    },
)

# Same palette snapped to the xterm-256 cube; used when supports_truecolor() is False
OCTOPAI_THEME_256 = Theme(
    name="octopai-256",
    primary="#5fafd7",  # color(74)
    secondary="#d787d7",  # color(176)
    accent="#5fd7d7",  # color(80)
    foreground="#d0d0d0",  # color(252)
    background="#121212",  # color(233)
    surface="#1c1c1c",  # color(234)
    panel="#262626",  # color(235)
    warning="#d7af87",  # color(180)
    error="#d75f5f",  # color(167)
    success="#87d787",  # color(114)
    dark=True,
    variables={
        "border": "#303030",
        "border-blurred": "#30303080",
        "text-muted": "#6c6c6c",
        "text-disabled": "#6c6c6c80",
        "input-cursor-foreground": "#121212",
        "input-cursor-background": "#5fd7d7",
        "scrollbar": "#303030",
        "scrollbar-hover": "#5fafd7",
        "scrollbar-active": "#d787d7",
    },
)

__all__ = ["OCTOPAI_THEME", "OCTOPAI_THEME_256"]
