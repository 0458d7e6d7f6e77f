"""
Best-effort safety check before clicking an element.

This is a keyword heuristic, not a guarantee: it only knows the deny tokens it
is given (English by default) and cannot see what a click handler really does.
"""

import logging
from typing import Iterable

from ..config import Safety


class SafetyClassifier:
    """Decides whether an element may be clicked."""

    def __init__(
        self,
        deny_tokens: Iterable[str] = Safety.DENY_TOKENS,
        clickable_tags: Iterable[str] = Safety.CLICKABLE_TAGS,
        clickable_roles: Iterable[str] = Safety.CLICKABLE_ROLES,
    ):
        self.deny_tokens = tuple(token.lower() for token in deny_tokens)
        self.clickable_tags = tuple(clickable_tags)
        self.clickable_roles = tuple(clickable_roles)
        self.logger = logging.getLogger(self.__class__.__name__)

    def denied_token(self, element) -> str:
        """The first deny token found in the element's text or class, or ''."""
        text = (element.text or "").lower()
        class_name = (element.get_attribute("class") or "").lower()
        for token in self.deny_tokens:
            if token in text or token in class_name:
                return token
        return ""

    def is_safe_to_trigger(self, element) -> bool:
        """Fails closed: anything that cannot be inspected is unsafe."""
        try:
            token = self.denied_token(element)
            if token:
                self.logger.debug(f"Unsafe element, contains '{token}'")
                return False

            tag_name = (element.tag_name or "").lower()
            role = (element.get_attribute("role") or "").lower()
            return tag_name in self.clickable_tags or role in self.clickable_roles
        except Exception as e:
            self.logger.debug(f"Could not inspect element, treating as unsafe: {e}")
            return False
