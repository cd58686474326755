"""The serialized update loop.

All messages, whether from the stream or the keyboard, go through one
queue with one consumer, so update() never runs concurrently with itself
and the model has a single writer.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from agentlens.app.effects import NO_EFFECT, Effect
from agentlens.app.messages import Msg
from agentlens.app.state import Model
from agentlens.app.update import update
from agentlens.runtime.interpreter import EffectInterpreter


class Dashboard:
    """Own the model and feed queued messages through update().

    Args:
        interpreter: Performs the effects update() returns.
        model: Starting model (defaults to an empty one).
        on_render: Called with every new model snapshot, after the
            transition's effect has been performed.
    """

    def __init__(
        self,
        interpreter: EffectInterpreter,
        *,
        model: Model | None = None,
        on_render: Callable[[Model], None] | None = None,
    ) -> None:
        self.interpreter = interpreter
        self.model = model if model is not None else Model()
        self._on_render = on_render
        self._queue: asyncio.Queue[Msg | None] = asyncio.Queue()

    def dispatch(self, msg: Msg) -> None:
        """Enqueue a message. Safe to call from callbacks on the loop."""
        self._queue.put_nowait(msg)

    def stop(self) -> None:
        """Ask run() to return once queued messages are processed."""
        self._queue.put_nowait(None)

    def apply(self, msg: Msg) -> Effect:
        """Run one transition, perform its effect, and re-render."""
        self.model, effect = update(self.model, msg)
        self.interpreter.perform(effect, self.dispatch)
        self.render()
        return effect

    def render(self) -> None:
        if self._on_render is not None:
            self._on_render(self.model)

    async def run(self, initial_effect: Effect = NO_EFFECT) -> Model:
        """Process messages until stop() is called; return the final model."""
        self.interpreter.perform(initial_effect, self.dispatch)
        self.render()
        while True:
            msg = await self._queue.get()
            if msg is None:
                return self.model
            self.apply(msg)
