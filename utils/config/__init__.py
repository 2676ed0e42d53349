"""
Configuration utilities for loading and validating measurement settings.
"""

from .settings import MeasurementSettings, load_settings, settings_from_env

__all__ = ['MeasurementSettings', 'load_settings', 'settings_from_env']
