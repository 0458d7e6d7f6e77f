"""Core probe components."""

from .session import SeleniumSession
from .browser_factory import BrowserFactory
from .progress_tracker import ProgressTracker, TaskInfo, TaskStatus
from .results import ErrorKind, Result
from .settling import DomStable, Settler
from .strategies import (
    SelectorStrategy, SelectorCascade, ByTag, ByAttribute, ByClassPattern, ByText, ByStructure
)
from .exceptions import (
    ScraperError, BrowserError, DriverNotStartedError, DriverStartError,
    PageLoadError, NavigationError, SinkError, InvalidConfigurationError
)
from .interfaces import BrowserSession, OutputSink, Recordable

__all__ = [
    # Session
    'SeleniumSession', 'BrowserFactory',

    # Utility classes
    'ProgressTracker', 'TaskInfo', 'TaskStatus', 'ErrorKind', 'Result', 'DomStable', 'Settler',

    # Strategies
    'SelectorStrategy', 'SelectorCascade', 'ByTag', 'ByAttribute', 'ByClassPattern',
    'ByText', 'ByStructure',

    # Exceptions
    'ScraperError', 'BrowserError', 'DriverNotStartedError', 'DriverStartError',
    'PageLoadError', 'NavigationError', 'SinkError', 'InvalidConfigurationError',

    # Protocols
    'BrowserSession', 'OutputSink', 'Recordable',
]
