"""
siteprobe

Drives a browser through a website, tests its clickable elements and extracts
structured content into CSV files.
"""

from .config import ProbeConfig
from .orchestrator import Orchestrator, RunState, RunSummary
from .models import ExtractedItem, InteractionOutcome, OutcomeCategory
from .utils import setup_logging, str_to_bool

__version__ = "1.0.0"
__all__ = [
    'Orchestrator', 'RunState', 'RunSummary', 'ProbeConfig',
    'ExtractedItem', 'InteractionOutcome', 'OutcomeCategory',
    'setup_logging', 'str_to_bool',
]
