"""
HTTP client for publishing derived metrics to a remote collector.

Each metric is written as its own data point with one POST to
``<base_url>/<metric key>``.
"""
import asyncio
from typing import Dict, List, Optional

import aiohttp
from loguru import logger

from extractor.interfaces.perf_source_interface import MetricPublishError
from models.output import DataPointModel

DEFAULT_TIMEOUT_SECONDS = 10.0


class MetricsClient:
    """aiohttp-backed client for the metrics collector.

    ``accept_insecure_certs`` turns off TLS certificate verification so the
    client can talk to local collector instances with self-signed
    certificates. It is off unless asked for.
    """

    def __init__(self, accept_insecure_certs: bool = False,
                 timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
                 session: Optional[aiohttp.ClientSession] = None):
        self.accept_insecure_certs = accept_insecure_certs
        self.timeout_seconds = timeout_seconds
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "MetricsClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Open the underlying session if none was injected."""
        if self.session is not None:
            return

        if self.accept_insecure_certs:
            logger.warning("TLS certificate verification is disabled for the metrics collector")

        self.session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=False if self.accept_insecure_certs else True),
            timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
        )

    async def close(self):
        """Close the session if this client created it."""
        if self.session is not None and self._owns_session:
            await self.session.close()
            self.session = None

    async def post_data_point(self, url: str, data_point: DataPointModel) -> str:
        """
        Write one data point and return the collector's acknowledgement.

        Raises:
            aiohttp.ClientError: On network failure or a non-2xx status
        """
        if self.session is None:
            raise RuntimeError("MetricsClient used before start()")

        async with self.session.post(url, json=data_point.to_dict()) as response:
            response.raise_for_status()
            return await response.text()


def metric_url(base_url: str, metric_key: str) -> str:
    """Endpoint URL for a single metric series."""
    return f"{base_url.rstrip('/')}/{metric_key}"


async def publish(client: MetricsClient, base_url: str, metrics: Dict[str, float],
                  time_stamp: int) -> List[str]:
    """
    Publish every metric, one write at a time, in mapping order.

    Each write is awaited before the next is issued. The first failing
    write aborts the run: no retries and no further writes.

    Args:
        client: Started metrics client
        base_url: Collector base URL
        metrics: Derived metric mapping
        time_stamp: Unix epoch seconds shared by every data point

    Returns:
        Keys that were acknowledged, in publish order

    Raises:
        MetricPublishError: For the first metric whose write failed
    """
    published = []

    for key, value in metrics.items():
        url = metric_url(base_url, key)
        data_point = DataPointModel(timeStamp=time_stamp, value=value)

        try:
            acknowledgement = await client.post_data_point(url, data_point)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise MetricPublishError(
                f"Failed to publish metric '{key}' to {url}: {e}",
                metric_key=key,
                url=url,
                cause=e,
            ) from e

        logger.debug(f"Published {key}={value} to {url}: {acknowledgement}")
        published.append(key)

    logger.info(f"Published {len(published)} metrics to {base_url}")
    return published
