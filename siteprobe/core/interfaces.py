"""
Interface protocols for better type safety and cleaner architecture.
These define contracts that components must follow.
"""

from typing import Protocol, runtime_checkable, Optional, List, Any, Sequence, Tuple

from selenium.webdriver.remote.webelement import WebElement


Locator = Tuple[str, str]


@runtime_checkable
class BrowserSession(Protocol):
    """The browser capability every component shares for the run."""

    def navigate(self, location: str) -> None:
        """Open a location."""
        ...

    def current_location(self) -> str:
        """Return the location the browser is currently showing."""
        ...

    def page_title(self) -> str:
        ...

    def page_source(self) -> str:
        ...

    def screenshot(self) -> bytes:
        """Capture the viewport as PNG bytes."""
        ...

    def find(self, locator: Locator, scope: Optional[WebElement] = None) -> List[WebElement]:
        """Find all elements matching a locator, under ``scope`` when given."""
        ...

    def run_script(self, code: str, *args) -> Any:
        """Execute JavaScript in the page."""
        ...

    def hover(self, element: WebElement) -> None:
        """Move the pointer onto an element."""
        ...

    def wait_until_ready(self, timeout: Optional[float] = None) -> None:
        """Block until the document reports it is ready."""
        ...


@runtime_checkable
class OutputSink(Protocol):
    """Append-only tabular sink."""

    def write_header(self, fields: Sequence[str]) -> None:
        ...

    def append(self, row: Sequence[str]) -> None:
        ...

    def flush(self) -> None:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Recordable(Protocol):
    """Anything the recorder can turn into a row."""

    def to_record(self) -> dict:
        ...
