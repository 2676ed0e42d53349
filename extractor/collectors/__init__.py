"""
Raw metrics collectors.
"""

from .playwright_collector import PlaywrightCollector

__all__ = ['PlaywrightCollector']
