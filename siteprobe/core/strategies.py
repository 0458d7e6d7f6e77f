"""
Selector strategies and cascades.

A strategy knows how to turn one lookup idea (a tag, an attribute pattern, a
class fragment, visible text, or a structural path) into a Selenium locator.
A cascade is an ordered tuple of strategies tried first to last.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from selenium.common.exceptions import InvalidSelectorException, NoSuchElementException
from selenium.webdriver.common.by import By

from .interfaces import BrowserSession, Locator


def xpath_literal(value: str) -> str:
    """Quote a string for use inside an XPath expression."""
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


class SelectorStrategy(ABC):
    """One way of finding candidate elements."""

    @abstractmethod
    def locator(self) -> Locator:
        """Selenium ``(By, value)`` pair for this strategy."""

    def try_match(self, session: BrowserSession, scope=None) -> List:
        """
        Query ``scope`` (or the whole document) for candidates.

        A strategy that matches nothing is an expected branch, so not-found and
        invalid-selector errors are reported as an empty match.
        """
        try:
            return list(session.find(self.locator(), scope))
        except (NoSuchElementException, InvalidSelectorException):
            return []

    def __str__(self) -> str:
        by, value = self.locator()
        return f"{self.__class__.__name__}({value})"


@dataclass(frozen=True)
class ByTag(SelectorStrategy):
    tag: str

    def locator(self) -> Locator:
        return (By.TAG_NAME, self.tag)


@dataclass(frozen=True)
class ByAttribute(SelectorStrategy):
    """``tag[attribute<op>value]``; ``match`` is one of equals, contains, present."""
    attribute: str
    value: str = ""
    match: str = "equals"
    tag: str = ""

    _OPERATORS = {"equals": "=", "contains": "*=", "prefix": "^="}

    def locator(self) -> Locator:
        if self.match == "present":
            return (By.CSS_SELECTOR, f"{self.tag}[{self.attribute}]")
        operator = self._OPERATORS[self.match]
        return (By.CSS_SELECTOR, f"{self.tag}[{self.attribute}{operator}'{self.value}']")


@dataclass(frozen=True)
class ByClassPattern(SelectorStrategy):
    """Exact class (``.name``) or any class attribute containing ``fragment``."""
    fragment: str
    exact: bool = True
    tag: str = ""

    def locator(self) -> Locator:
        if self.exact:
            return (By.CSS_SELECTOR, f"{self.tag}.{self.fragment}")
        return (By.CSS_SELECTOR, f"{self.tag}[class*='{self.fragment}']")


@dataclass(frozen=True)
class ByText(SelectorStrategy):
    """Elements of ``tag`` whose text contains any of ``words``."""
    words: Tuple[str, ...]
    tag: str = "*"

    def locator(self) -> Locator:
        clauses = " or ".join(f"contains(., {xpath_literal(word)})" for word in self.words)
        return (By.XPATH, f"//{self.tag}[{clauses}]")


@dataclass(frozen=True)
class ByStructure(SelectorStrategy):
    """A structural CSS path (``nav a``, ``.modal .close``) or an XPath."""
    path: str
    xpath: bool = False

    def locator(self) -> Locator:
        return (By.XPATH if self.xpath else By.CSS_SELECTOR, self.path)


@dataclass(frozen=True)
class SelectorCascade:
    """Ordered alternatives for one logical hint; the first live match wins."""
    name: str
    strategies: Tuple[SelectorStrategy, ...]

    def __iter__(self) -> Iterator[SelectorStrategy]:
        return iter(self.strategies)

    def __len__(self) -> int:
        return len(self.strategies)

    @classmethod
    def of(cls, name: str, *strategies: SelectorStrategy) -> "SelectorCascade":
        return cls(name=name, strategies=tuple(strategies))

    @classmethod
    def from_css(cls, name: str, selectors: Sequence[str]) -> "SelectorCascade":
        """Shorthand for cascades made only of CSS paths."""
        return cls(name=name, strategies=tuple(ByStructure(css) for css in selectors))

    def extended(self, *strategies: SelectorStrategy, name: Optional[str] = None) -> "SelectorCascade":
        return SelectorCascade(name=name or self.name, strategies=self.strategies + tuple(strategies))
