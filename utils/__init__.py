"""
Utilities package for the performance data extractor.
"""

from .config.settings import MeasurementSettings, load_settings

__all__ = [
    'MeasurementSettings',
    'load_settings'
]
