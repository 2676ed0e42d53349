"""
Validation utilities for measurement settings.
"""

from .config_validator import ConfigValidator

__all__ = ['ConfigValidator']
