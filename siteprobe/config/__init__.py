"""Configuration package for siteprobe."""

from .constants import SiteConfig, Limits, Delays, Safety, Headers, Cascades
from .settings import ProbeConfig, MODES

__all__ = ['SiteConfig', 'Limits', 'Delays', 'Safety', 'Headers', 'Cascades', 'ProbeConfig', 'MODES']
