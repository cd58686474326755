"""Runtime: update loop, effect interpreter, viewport, and terminal front-end."""

from agentlens.runtime.commands import Command, LocalAction, parse_command
from agentlens.runtime.interpreter import EffectInterpreter
from agentlens.runtime.loop import Dashboard
from agentlens.runtime.viewport import Viewport

__all__ = [
    "Command",
    "Dashboard",
    "EffectInterpreter",
    "LocalAction",
    "Viewport",
    "parse_command",
]
