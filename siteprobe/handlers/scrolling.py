"""Scrolling that triggers lazy-loaded content."""

import logging

from ..config import Delays, Limits
from ..core.interfaces import BrowserSession
from ..core.settling import Settler

SCROLL_BOTTOM = "window.scrollTo(0, document.body.scrollHeight);"
SCROLL_TOP = "window.scrollTo(0, 0);"
PAGE_HEIGHT = "return document.body.scrollHeight"


class LazyLoadScroller:
    """Scrolls to the bottom until the page stops growing, then back to the top."""

    def __init__(self, session: BrowserSession, settler: Settler, max_scrolls: int = Limits.MAX_SCROLLS):
        self.session = session
        self.settler = settler
        self.max_scrolls = max_scrolls
        self.logger = logging.getLogger(self.__class__.__name__)

    def scroll(self) -> int:
        """Returns the number of scroll cycles performed."""
        cycles = 0
        previous_height = None
        try:
            for _ in range(self.max_scrolls):
                self.session.run_script(SCROLL_BOTTOM)
                cycles += 1
                self.settler.settle(Delays.AFTER_SCROLL)

                height = self.session.run_script(PAGE_HEIGHT)
                if height == previous_height:
                    break
                previous_height = height

            self.session.run_script(SCROLL_TOP)
            self.settler.settle(Delays.AFTER_SCROLL_TOP)
        except Exception as e:
            self.logger.warning(f"Error during scrolling: {e}")

        self.logger.debug(f"Scrolled {cycles} time(s)")
        return cycles
