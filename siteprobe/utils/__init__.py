"""Utility functions package for siteprobe."""

from .helpers import str_to_bool, split_csv, truncate, retry_on_exception, setup_logging

__all__ = ['str_to_bool', 'split_csv', 'truncate', 'retry_on_exception', 'setup_logging']
