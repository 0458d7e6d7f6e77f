"""
Custom exceptions for the siteprobe package.
Provides specific exception types for better error handling.
"""


class ScraperError(Exception):
    """Base exception for all probe-related errors."""
    pass


class BrowserError(ScraperError):
    """Raised when there are browser-related issues."""
    pass


class DriverNotStartedError(BrowserError):
    """Raised when attempting to use the session before starting it."""
    pass


class DriverStartError(BrowserError):
    """Raised when the driver fails to start. This is the only fatal error of a run."""
    pass


class PageLoadError(ScraperError):
    """Raised when a page fails to load properly."""
    pass


class NavigationError(ScraperError):
    """Raised when the session cannot open a location."""
    pass


class SinkError(ScraperError):
    """Raised when a row cannot be written to the output sink."""
    pass


class InvalidConfigurationError(ScraperError):
    """Raised when configuration is invalid."""
    pass
