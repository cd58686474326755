"""Keyboard command parsing.

Commands are typed one per line. Some become update messages (toggle
follow, jump to an event); the rest are viewport-local actions that
never touch the model.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from agentlens.app.messages import Msg, ScrollToEvent, ToggleScrollToNewEvent


class LocalAction(str, Enum):
    """Viewport actions handled without going through update()."""

    page_up = "page_up"
    page_down = "page_down"
    bottom = "bottom"
    quit = "quit"


Command = Union[Msg, LocalAction]

_LOCAL_ALIASES: dict[str, LocalAction] = {
    "n": LocalAction.page_down,
    "next": LocalAction.page_down,
    "p": LocalAction.page_up,
    "prev": LocalAction.page_up,
    "b": LocalAction.bottom,
    "bottom": LocalAction.bottom,
    "q": LocalAction.quit,
    "quit": LocalAction.quit,
    "exit": LocalAction.quit,
}


def _event_number(word: str) -> int | None:
    """Parse a one-based event number into a chronological index."""
    if not word.isdigit():
        return None
    number = int(word)
    return number - 1 if number >= 1 else None


def parse_command(line: str) -> Command | None:
    """Parse one input line.

    ``f``/``follow`` toggles auto-scroll, ``g N``/``goto N`` or a bare
    ``N`` jumps to event N (as numbered on screen, one-based). Returns
    None for blank or unrecognized input.
    """
    words = line.strip().lower().split()
    if not words:
        return None
    head, args = words[0], words[1:]

    if head in ("f", "follow") and not args:
        return ToggleScrollToNewEvent()
    if head in ("g", "goto") and len(args) == 1:
        index = _event_number(args[0])
        return ScrollToEvent(index) if index is not None else None
    if not args:
        index = _event_number(head)
        if index is not None:
            return ScrollToEvent(index)
        return _LOCAL_ALIASES.get(head)
    return None
