"""
Pagination handler.
Follows "next" controls a bounded number of times and re-runs extraction.
"""

import logging
from typing import Callable

from ..config import Cascades, Delays, Limits
from ..core.interfaces import BrowserSession
from ..core.results import ErrorKind, Result
from ..core.settling import Settler
from ..core.strategies import SelectorCascade
from .interaction import SCRIPT_CLICK, error_message
from .locator import ElementLocator


def page_location(base_location: str, page: int) -> str:
    """Synthesized location for page ``page`` of ``base_location``."""
    separator = "&" if "?" in base_location else "?"
    return f"{base_location}{separator}page={page}"


class PaginationWalker:
    """Walks "next" controls until there are none or the page ceiling is hit."""

    def __init__(
        self,
        session: BrowserSession,
        locator: ElementLocator,
        settler: Settler,
        cascade: SelectorCascade = Cascades.NEXT_PAGE,
        settle: float = Delays.AFTER_PAGINATION,
    ):
        self.session = session
        self.locator = locator
        self.settler = settler
        self.cascade = cascade
        self.settle = settle
        self.logger = logging.getLogger(self.__class__.__name__)

    def walk(
        self,
        extract_fn: Callable[[str], object],
        base_location: str,
        max_pages: int = Limits.MAX_PAGES,
    ) -> Result:
        """
        Advance through at most ``max_pages`` further pages.

        Returns:
            Result whose value is the number of extra pages extracted. A click
            failure ends the walk with an ``INTERACTION`` failure carrying the
            pages extracted so far.
        """
        pages = 0
        for page in range(1, max_pages + 1):
            found = self.locator.require(self.cascade)
            if not found.ok:
                self.logger.debug(f"{found.reason} after {pages} page(s) of {base_location}")
                break
            next_control = found.value

            try:
                self.session.run_script(SCRIPT_CLICK, next_control)
            except Exception as e:
                self.logger.warning(f"Error clicking pagination: {error_message(e)}")
                return Result.failure(ErrorKind.INTERACTION, error_message(e), value=pages)

            self.settler.settle(self.settle)
            location = page_location(base_location, page + 1)
            self.logger.info(f"Extracting page {page + 1}: {location}")
            extract_fn(location)
            pages += 1

        return Result.success(pages)
