# main.py
"""
Command-line entry point for the performance data extractor.

Loads a page in headless Chromium, derives its timing metrics and publishes
each one to a metrics collector.
"""
import argparse
import asyncio
import os
import sys
from typing import List, Optional

from loguru import logger

from extractor.core.pipeline import run_measurement
from extractor.interfaces import InvalidConfigurationError, MetricPublishError, PerfDataError
from extractor.validators.config_validator import WAIT_UNTIL_MODES
from utils.config.settings import load_settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def setup_logging(level: str = "INFO"):
    """Replace loguru's default sink with a stdout sink at the given level."""
    logger.remove()
    logger.add(sys.stdout, format=LOG_FORMAT, level=level.upper())


def build_parser() -> argparse.ArgumentParser:
    target_default = os.getenv("PERF_TARGET_URL")
    collector_default = os.getenv("PERF_COLLECTOR_BASE_URL")

    parser = argparse.ArgumentParser(
        description="Measure a page in headless Chromium and publish its performance metrics"
    )
    parser.add_argument("--url", default=target_default, required=not target_default,
                        help="Page to measure (env PERF_TARGET_URL)")
    parser.add_argument("--collector-url", default=collector_default, required=not collector_default,
                        help="Base URL of the metrics collector (env PERF_COLLECTOR_BASE_URL)")
    parser.add_argument("--strict-tls", action="store_true",
                        help="Reject untrusted TLS certificates instead of accepting them")
    parser.add_argument("--wait-until", choices=WAIT_UNTIL_MODES, default=None,
                        help="Page load state to wait for before measuring (default: load)")
    parser.add_argument("--navigation-timeout", type=float, default=None,
                        help="Seconds to wait for the page to load")
    parser.add_argument("--publish-timeout", type=float, default=None,
                        help="Seconds to wait for each metric write")
    parser.add_argument("--dry-run", action="store_true",
                        help="Collect and calculate metrics but do not publish them")
    parser.add_argument("--log-level", default=os.getenv("PERF_LOG_LEVEL", "INFO"),
                        help="Log level (default: INFO)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = load_settings(
            target_url=args.url,
            collector_base_url=args.collector_url,
            accept_insecure_certs=False if args.strict_tls else None,
            wait_until=args.wait_until,
            navigation_timeout_seconds=args.navigation_timeout,
            publish_timeout_seconds=args.publish_timeout,
            dry_run=args.dry_run or None,
        )
    except InvalidConfigurationError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        return EXIT_USAGE

    logger.info(f"🚀 Measuring {settings.target_url}")

    try:
        result = asyncio.run(run_measurement(settings))
    except MetricPublishError as e:
        logger.error(f"❌ {e.stage.value} stage failed while publishing '{e.metric_key}': {e}")
        return EXIT_FAILURE
    except PerfDataError as e:
        logger.error(f"❌ {e.stage.value} stage failed: {e}")
        return EXIT_FAILURE

    if result.published:
        logger.info(f"✅ Published {len(result.published_keys)} metrics to {settings.collector_base_url}")
    else:
        logger.info(f"✅ Calculated {len(result.metrics)} metrics")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
