"""
Shared fakes for the handler and orchestrator tests.

FakeSession and FakeElement stand in for a live browser: elements are looked up
by the exact ``(By, value)`` locator a strategy produces.
"""

import pytest
from selenium.common.exceptions import (
    ElementClickInterceptedException, StaleElementReferenceException, WebDriverException,
)

from siteprobe.core.settling import Settler
from siteprobe.handlers.interaction import SCRIPT_CLICK
from siteprobe.handlers.scrolling import PAGE_HEIGHT


class FakeElement:
    def __init__(
        self,
        tag="div",
        text="",
        attrs=None,
        displayed=True,
        enabled=True,
        children=None,
        on_click=None,
        click_error=None,
        script_error=None,
        stale=False,
        read_error=None,
    ):
        self._tag = tag
        self._text = text
        self.attrs = dict(attrs or {})
        self.displayed = displayed
        self.enabled = enabled
        self.children = dict(children or {})
        self.on_click = on_click
        self.click_error = click_error
        self.script_error = script_error
        self.stale = stale
        self.read_error = read_error
        self.clicks = 0
        self.script_clicks = 0
        self.typed = []

    def _check(self):
        if self.stale:
            raise StaleElementReferenceException("stale element reference")

    def _read(self):
        self._check()
        if self.read_error is not None:
            raise self.read_error

    @property
    def tag_name(self):
        self._read()
        return self._tag

    @property
    def text(self):
        self._read()
        return self._text

    def get_attribute(self, name):
        self._read()
        return self.attrs.get(name)

    def is_displayed(self):
        self._check()
        return self.displayed

    def is_enabled(self):
        self._check()
        return self.enabled

    def find_elements(self, by, value):
        self._check()
        return list(self.children.get((by, value), []))

    def click(self):
        self._check()
        if self.click_error is not None:
            raise self.click_error
        self.clicks += 1
        if self.on_click:
            self.on_click()

    def script_click(self):
        if self.script_error is not None:
            raise self.script_error
        self.script_clicks += 1
        if self.on_click:
            self.on_click()

    def clear(self):
        self.attrs["value"] = ""

    def send_keys(self, value):
        self.typed.append(value)
        self.attrs["value"] = value

    def __repr__(self):
        return f"FakeElement({self._tag!r}, {self._text!r})"


class FakeSession:
    """In-memory BrowserSession; ``elements`` maps locators to element lists."""

    def __init__(self, elements=None, location="https://shop.example.com/"):
        self.elements = dict(elements or {})
        self.location = location
        self.navigations = []
        self.scripts = []
        self.queries = []
        self.hovered = []
        self.failing_locations = set()
        self.hover_error = None
        self.heights = []
        self.dom_size = 100
        self.screenshot_error = None

    def add(self, strategy, *elements):
        self.elements.setdefault(strategy.locator(), []).extend(elements)
        return elements[0] if len(elements) == 1 else elements

    def navigate(self, location):
        self.navigations.append(location)
        if location in self.failing_locations:
            raise WebDriverException(f"net::ERR_NAME_NOT_RESOLVED at {location}")
        self.location = location

    def wait_until_ready(self, timeout=None):
        return None

    def current_location(self):
        return self.location

    def page_title(self):
        return "Fake page"

    def page_source(self):
        return "<html><body>fake</body></html>"

    def screenshot(self):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b"\x89PNG fake"

    def find(self, locator, scope=None):
        self.queries.append(locator)
        if scope is not None:
            return scope.find_elements(*locator)
        return list(self.elements.get(locator, []))

    def run_script(self, code, *args):
        self.scripts.append(code)
        if code == SCRIPT_CLICK:
            return args[0].script_click()
        if code == PAGE_HEIGHT:
            return self.heights.pop(0) if self.heights else 1000
        if "getElementsByTagName" in code:
            return self.dom_size
        return None

    def hover(self, element):
        if self.hover_error is not None:
            raise self.hover_error
        self.hovered.append(element)


class MemorySink:
    def __init__(self, fail_on_append=False):
        self.header = None
        self.rows = []
        self.flushes = 0
        self.closed = False
        self.fail_on_append = fail_on_append

    def write_header(self, fields):
        self.header = list(fields)

    def append(self, row):
        if self.fail_on_append:
            raise OSError("disk full")
        self.rows.append(list(row))

    def flush(self):
        self.flushes += 1

    def close(self):
        self.closed = True

    def records(self):
        """Rows as dicts keyed by the header."""
        return [dict(zip(self.header, row)) for row in self.rows]


def counter():
    state = {"n": 0}

    def next_id():
        state["n"] += 1
        return state["n"]
    return next_id


def intercepted():
    return ElementClickInterceptedException("element click intercepted: other element would receive the click")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def settler(session):
    return Settler(session, mode="fixed", sleep=lambda seconds: None)


@pytest.fixture
def sink():
    return MemorySink()
