"""Terminal viewport: the two scroll primitives plus manual paging.

The view produces every event block; the viewport decides which page of
them is on screen, the way a browser window decides which part of a
document is visible. Scroll requests are fire-and-forget and resolve
against the next screen that is composed.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.text import Text

from agentlens.view.timeline import EventBlock, Screen


class Viewport:
    """Shows ``page_size`` consecutive event blocks.

    Args:
        page_size: Number of event blocks visible at once.
    """

    def __init__(self, page_size: int = 10) -> None:
        self.page_size = page_size
        self.top = 0
        self._pin_bottom = False
        self._target: str | None = None

    def scroll_to_bottom(self) -> None:
        """Show the last page on the next compose."""
        self._pin_bottom = True
        self._target = None

    def scroll_to_element(self, element_id: str) -> None:
        """Put the block with ``element_id`` at the top on the next compose.

        Unknown ids are ignored.
        """
        self._target = element_id
        self._pin_bottom = False

    def page_down(self) -> None:
        self._pin_bottom = False
        self._target = None
        self.top += self.page_size

    def page_up(self) -> None:
        self._pin_bottom = False
        self._target = None
        self.top = max(0, self.top - self.page_size)

    def visible(self, screen: Screen) -> tuple[EventBlock, ...]:
        """Resolve pending scroll requests and return the blocks on screen."""
        count = len(screen.blocks)
        if self._target is not None:
            index = screen.index_of(self._target)
            if index is not None:
                self.top = index
            self._target = None
        if self._pin_bottom:
            self.top = max(0, count - self.page_size)
            self._pin_bottom = False
        self.top = min(self.top, max(0, count - 1))
        return screen.blocks[self.top : self.top + self.page_size]

    def compose(self, screen: Screen) -> RenderableType:
        """Lay out the header, controls, minimap and the visible page."""
        blocks = self.visible(screen)
        if blocks:
            position = f"{screen.count_text}  (showing #{blocks[0].index + 1}-#{blocks[-1].index + 1})"
        else:
            position = screen.count_text
        return Group(
            screen.header,
            screen.control_bar,
            screen.minimap,
            Text(position, style="bold"),
            *(block.renderable for block in blocks),
        )
