"""Live terminal front-end: wires the update loop to rich Live and stdin."""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import Callable
from typing import TextIO

from rich.console import Console
from rich.live import Live

from agentlens.app.messages import ToggleScrollToNewEvent
from agentlens.app.state import Model
from agentlens.app.update import init
from agentlens.models.config import DashboardConfig
from agentlens.runtime.commands import LocalAction, parse_command
from agentlens.runtime.interpreter import EffectInterpreter
from agentlens.runtime.loop import Dashboard
from agentlens.runtime.viewport import Viewport
from agentlens.transport import WireLogWriter
from agentlens.view.timeline import render

logger = logging.getLogger(__name__)


def start_line_reader(
    loop: asyncio.AbstractEventLoop,
    handle_line: Callable[[str], None],
    stream: TextIO | None = None,
) -> threading.Thread:
    """Read lines on a daemon thread and hand each one to the event loop.

    The thread does not hold the process open; a read still pending at
    exit is abandoned.
    """
    source = stream if stream is not None else sys.stdin

    def pump() -> None:
        for line in source:
            try:
                loop.call_soon_threadsafe(handle_line, line)
            except RuntimeError:
                # Event loop already closed.
                return

    thread = threading.Thread(target=pump, name="agentlens-input", daemon=True)
    thread.start()
    return thread


async def run_live_dashboard(
    source: str,
    config: DashboardConfig,
    *,
    console: Console,
    follow: bool = False,
    capture: WireLogWriter | None = None,
    read_input: bool = True,
) -> Model:
    """Run the live dashboard until the user quits.

    Args:
        source: Stream URL or NDJSON wire-log path.
        config: Loaded dashboard configuration.
        console: Console the dashboard renders to.
        follow: Turn on auto-scroll at startup.
        capture: Optional writer recording raw messages.
        read_input: Read keyboard commands from stdin.

    Returns:
        The final model.
    """
    viewport = Viewport(page_size=config.view.page_size)
    interpreter = EffectInterpreter(
        viewport,
        stream_config=config.stream,
        capture=capture,
    )
    model, subscribe_effect = init(source)

    with Live(console=console, auto_refresh=False, vertical_overflow="crop") as live:

        def redraw(current: Model) -> None:
            screen = render(current, max_payload_lines=config.view.max_payload_lines)
            live.update(viewport.compose(screen), refresh=True)

        dashboard = Dashboard(interpreter, model=model, on_render=redraw)

        def handle_line(line: str) -> None:
            command = parse_command(line)
            if command is None:
                return
            if command is LocalAction.quit:
                dashboard.stop()
                return
            if command is LocalAction.page_down:
                viewport.page_down()
            elif command is LocalAction.page_up:
                viewport.page_up()
            elif command is LocalAction.bottom:
                viewport.scroll_to_bottom()
            else:
                dashboard.dispatch(command)
                return
            redraw(dashboard.model)

        if follow:
            dashboard.dispatch(ToggleScrollToNewEvent())
        if read_input:
            start_line_reader(asyncio.get_running_loop(), handle_line)

        try:
            return await dashboard.run(subscribe_effect)
        finally:
            await interpreter.aclose()
            logger.info("Dashboard stopped with %d event(s)", len(dashboard.model.events))
