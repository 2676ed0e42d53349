"""
Measurement settings for the performance data extractor.

Settings come from environment variables (a local .env file is honoured)
and can be overridden per invocation, e.g. from command-line flags.
"""
import os
from dataclasses import dataclass, replace
from typing import Any, Optional

from dotenv import load_dotenv
from loguru import logger

from extractor.interfaces.perf_source_interface import InvalidConfigurationError
from extractor.validators.config_validator import ConfigValidator

# Load environment variables
load_dotenv()


@dataclass(frozen=True)
class MeasurementSettings:
    """Everything one measurement run needs to know."""
    target_url: str
    collector_base_url: str
    accept_insecure_certs: bool = True
    headless: bool = True
    wait_until: str = "load"
    navigation_timeout_seconds: float = 30.0
    publish_timeout_seconds: float = 10.0
    dry_run: bool = False


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() == "true"


def _env_seconds(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError as e:
        raise InvalidConfigurationError(f"{name} must be a number of seconds, got '{raw}'", cause=e) from e


def settings_from_env() -> MeasurementSettings:
    """Read settings from PERF_* environment variables without validating them."""
    return MeasurementSettings(
        target_url=os.getenv("PERF_TARGET_URL", "").strip(),
        collector_base_url=os.getenv("PERF_COLLECTOR_BASE_URL", "").strip(),
        accept_insecure_certs=_env_flag("PERF_ACCEPT_INSECURE_CERTS", "true"),
        headless=_env_flag("PERF_HEADLESS", "true"),
        wait_until=os.getenv("PERF_WAIT_UNTIL", "load").strip().lower(),
        navigation_timeout_seconds=_env_seconds("PERF_NAVIGATION_TIMEOUT_SECONDS", "30"),
        publish_timeout_seconds=_env_seconds("PERF_PUBLISH_TIMEOUT_SECONDS", "10"),
    )


def load_settings(**overrides: Optional[Any]) -> MeasurementSettings:
    """
    Load and validate measurement settings.

    Args:
        **overrides: Field values taking precedence over the environment;
            None values are ignored

    Returns:
        Validated MeasurementSettings

    Raises:
        InvalidConfigurationError: When any setting is invalid
    """
    settings = settings_from_env()

    explicit = {key: value for key, value in overrides.items() if value is not None}
    if explicit:
        try:
            settings = replace(settings, **explicit)
        except TypeError as e:
            raise InvalidConfigurationError(f"Unknown setting: {e}", cause=e) from e

    errors = ConfigValidator.validate_settings(settings)
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        raise InvalidConfigurationError("; ".join(errors))

    if settings.accept_insecure_certs:
        logger.warning("Accepting untrusted TLS certificates for the target page and the collector")

    return settings
