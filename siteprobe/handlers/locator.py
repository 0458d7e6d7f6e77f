"""
Element location through selector cascades.
"""

import logging
from typing import Callable, Dict, List, Optional

from selenium.common.exceptions import StaleElementReferenceException, WebDriverException

from ..config import Limits
from ..core.interfaces import BrowserSession
from ..core.results import ErrorKind, Result
from ..core.strategies import SelectorCascade
from .interaction import error_message


def is_live(element) -> bool:
    """Visible and enabled; stale or broken handles count as not live."""
    try:
        return element.is_displayed() and element.is_enabled()
    except WebDriverException:
        return False


def inspect(element, read: Callable) -> Result:
    """
    Run ``read(element)`` and wrap the answer.

    A detached element gives a ``STALE`` failure, any other driver error an
    ``INTERACTION`` failure; neither is raised.
    """
    try:
        return Result.success(read(element))
    except StaleElementReferenceException as e:
        return Result.failure(ErrorKind.STALE, error_message(e))
    except WebDriverException as e:
        return Result.failure(ErrorKind.INTERACTION, error_message(e))


def identity_key(element) -> str:
    """
    Key used to deduplicate discovered elements.

    ``id:<id>``, else ``class:<class>``, else ``text:<first 20 chars>``, else
    ``tag:<tag>``; ``unknown`` when the element cannot be inspected.
    """
    try:
        element_id = element.get_attribute("id")
        if element_id:
            return f"id:{element_id}"

        class_name = element.get_attribute("class")
        if class_name:
            return f"class:{class_name}"

        text = element.text
        if text:
            return f"text:{text[:Limits.IDENTITY_TEXT_LENGTH]}"

        return f"tag:{element.tag_name}"
    except WebDriverException:
        return "unknown"


class ElementLocator:
    """Resolves selector cascades against the document or an element scope."""

    def __init__(self, session: BrowserSession):
        self.session = session
        self.logger = logging.getLogger(self.__class__.__name__)

    def locate(self, cascade: SelectorCascade, scope=None):
        """
        Return the first visible and enabled match of ``cascade``, or None.

        Strategies after the first one that yields a live element are never
        evaluated.
        """
        for strategy in cascade:
            for candidate in strategy.try_match(self.session, scope):
                if is_live(candidate):
                    self.logger.debug(f"{cascade.name}: matched by {strategy}")
                    return candidate
        return None

    def require(self, cascade: SelectorCascade, scope=None) -> Result:
        """Like ``locate``, with a ``NOT_FOUND`` failure instead of None."""
        element = self.locate(cascade, scope)
        if element is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"No live match for {cascade.name}")
        return Result.success(element)

    def locate_all(self, cascade: SelectorCascade, scope=None, live_only: bool = True) -> List:
        """Every match of every strategy, in cascade order (may contain repeats)."""
        matches = []
        for strategy in cascade:
            found = strategy.try_match(self.session, scope)
            self.logger.debug(f"Found {len(found)} elements with {strategy}")
            matches.extend(el for el in found if not live_only or is_live(el))
        return matches

    def discover(
        self,
        cascade: SelectorCascade,
        seen: Optional[Dict[str, object]] = None,
        key: Callable = identity_key,
    ) -> List:
        """
        Run every strategy and keep one live element per identity key.

        Pass the same ``seen`` mapping across calls to deduplicate over
        several cascades.
        """
        seen = {} if seen is None else seen
        unique = []
        for element in self.locate_all(cascade):
            element_key = key(element)
            if element_key in seen:
                continue
            seen[element_key] = element
            unique.append(element)
        return unique

    def extract_text(self, cascade: SelectorCascade, scope=None) -> str:
        """First non-blank text found through the cascade, or an empty string."""
        for strategy in cascade:
            for candidate in strategy.try_match(self.session, scope):
                try:
                    text = (candidate.text or "").strip()
                except StaleElementReferenceException:
                    continue
                if text:
                    return text
        return ""

    def extract_attribute(self, cascade: SelectorCascade, attribute: str, scope=None) -> str:
        """First non-blank attribute value found through the cascade."""
        for strategy in cascade:
            for candidate in strategy.try_match(self.session, scope):
                try:
                    value = (candidate.get_attribute(attribute) or "").strip()
                except StaleElementReferenceException:
                    continue
                if value:
                    return value
        return ""
