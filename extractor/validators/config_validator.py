# extractor/validators/config_validator.py
"""
Configuration validation utilities.
"""
from typing import List, TYPE_CHECKING
from urllib.parse import urlparse

if TYPE_CHECKING:
    from utils.config.settings import MeasurementSettings

ALLOWED_SCHEMES = ("http", "https")
WAIT_UNTIL_MODES = ("load", "domcontentloaded", "networkidle", "commit")


class ConfigValidator:
    """Validator for measurement settings."""

    @classmethod
    def validate_settings(cls, settings: "MeasurementSettings") -> List[str]:
        """
        Validate measurement settings.

        Args:
            settings: MeasurementSettings to validate

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # URL validation
        errors.extend(cls._validate_urls(settings))

        # Browser options
        if settings.wait_until not in WAIT_UNTIL_MODES:
            errors.append(
                f"Invalid wait mode '{settings.wait_until}'. Must be one of: {list(WAIT_UNTIL_MODES)}"
            )

        # Numeric field validation
        errors.extend(cls._validate_numeric_fields(settings))

        return errors

    @classmethod
    def _validate_urls(cls, settings: "MeasurementSettings") -> List[str]:
        """Validate URL fields."""
        errors = []

        if not settings.target_url:
            errors.append("Target URL cannot be empty")
        elif not cls.is_valid_url(settings.target_url):
            errors.append(f"Invalid target URL: {settings.target_url}")

        if not settings.collector_base_url:
            errors.append("Collector base URL cannot be empty")
        elif not cls.is_valid_url(settings.collector_base_url):
            errors.append(f"Invalid collector base URL: {settings.collector_base_url}")

        return errors

    @classmethod
    def _validate_numeric_fields(cls, settings: "MeasurementSettings") -> List[str]:
        """Validate numeric fields."""
        errors = []

        if settings.navigation_timeout_seconds <= 0:
            errors.append("Navigation timeout seconds must be positive")

        if settings.publish_timeout_seconds <= 0:
            errors.append("Publish timeout seconds must be positive")

        return errors

    @classmethod
    def is_valid_url(cls, url: str) -> bool:
        """Check if URL is a well-formed http(s) URL."""
        try:
            result = urlparse(url)
            return result.scheme in ALLOWED_SCHEMES and bool(result.hostname)
        except ValueError:
            return False
