"""
Core measurement logic: metric derivation and the run pipeline.
"""

from .calculator import METRIC_KEYS, EMPTY_RESOURCE_DOWNLOAD_TIME, calculate

__all__ = ['METRIC_KEYS', 'EMPTY_RESOURCE_DOWNLOAD_TIME', 'calculate']
