"""OSC-8 hyperlinks for the NEOBUNDLE CLI, with a plain-text fallback."""

import os
import sys
from typing import TextIO

OSC8_TERMINALS = frozenset(
    {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}
)


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether *stream* renders OSC-8 hyperlinks.

    Args:
        stream: Text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: False for non-TTY streams; otherwise True for known terminals
        (VS Code, iTerm2, WezTerm, Kitty, Windows Terminal, VTE-based, ...).
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    return bool(
        (os.getenv("TERM_PROGRAM") or "").lower() in OSC8_TERMINALS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, text: str | None = None) -> str:
    """Render *url* as a clickable link labelled *text* (defaults to the URL).

    Falls back to the bare URL when the terminal lacks OSC-8 support.
    """
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{text or url}\x1b]8;;\x07"  # OSC 8 ; ; URL BEL
