"""Element handling components used by the orchestrator."""

from .locator import ElementLocator, identity_key, inspect, is_live
from .safety import SafetyClassifier
from .interaction import InteractionExecutor
from .visits import VisitTracker
from .pagination_handler import PaginationWalker, page_location
from .recorder import ExtractionRecorder
from .extraction import ContentExtractor, category_for
from .scrolling import LazyLoadScroller
from .overlays import OverlayDismisser

__all__ = [
    'ElementLocator', 'identity_key', 'inspect', 'is_live', 'SafetyClassifier', 'InteractionExecutor',
    'VisitTracker', 'PaginationWalker', 'page_location', 'ExtractionRecorder',
    'ContentExtractor', 'category_for', 'LazyLoadScroller', 'OverlayDismisser',
]
