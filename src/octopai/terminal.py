"""Terminal capability detection."""

from __future__ import annotations

import os

# Checked before COLORTERM, which some shell configs set unconditionally
_NO_TRUECOLOR_TERMINALS = {"apple_terminal"}

_TRUECOLOR_TERMINALS = {
    "iterm.app",
    "vscode",
    "alacritty",
    "kitty",
    "wezterm",
    "ghostty",
    "warp",
}


def supports_truecolor() -> bool:
    """Guess whether the terminal renders 24-bit color.

    ``TEXTUAL_COLOR_SYSTEM=truecolor`` always wins; then the known
    ``TERM_PROGRAM`` values; then ``COLORTERM``; then Windows Terminal.
    """
    if os.environ.get("TEXTUAL_COLOR_SYSTEM", "").lower() == "truecolor":
        return True

    term_program = os.environ.get("TERM_PROGRAM", "").lower()
    if term_program in _NO_TRUECOLOR_TERMINALS:
        return False
    if term_program in _TRUECOLOR_TERMINALS:
        return True

    if os.environ.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return True
    return bool(os.environ.get("WT_SESSION"))


__all__ = ["supports_truecolor"]
