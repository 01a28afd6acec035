"""
InfluxDB implementation of the MetricsSink port.

Points are buffered in memory and written in one request per flush. Every
failure is logged and swallowed.
"""

from typing import Any

import structlog
from influxdb_client import InfluxDBClient, Point
from influxdb_client.client.write_api import SYNCHRONOUS

from ...config import Settings
from ...domain.exceptions import ConfigurationError
from ...domain.ports import MetricsSink, SecretStore

logger = structlog.get_logger()


class InfluxMetricsSink(MetricsSink):
    """Best-effort point writer for InfluxDB (including Timestream for InfluxDB)."""

    def __init__(self, client: InfluxDBClient, org: str, bucket: str) -> None:
        self._client = client
        self._org = org
        self._bucket = bucket
        self._write_api = client.write_api(write_options=SYNCHRONOUS)
        self._pending: list[Point] = []
        self._closed = False

    @classmethod
    def connect(
        cls,
        url: str,
        token: str,
        org: str,
        bucket: str,
        default_tags: dict[str, str] | None = None,
        timeout_ms: int = 10000,
    ) -> "InfluxMetricsSink":
        client = InfluxDBClient(
            url=url,
            token=token,
            org=org,
            timeout=timeout_ms,
            enable_gzip=True,
            default_tags=default_tags,
        )
        logger.info("Connected to InfluxDB", url=url, org=org, bucket=bucket)
        return cls(client, org=org, bucket=bucket)

    def write_point(
        self,
        measurement: str,
        tags: dict[str, str] | None = None,
        fields: dict[str, Any] | None = None,
    ) -> None:
        if self._closed:
            logger.warning("Dropping metric point, sink is closed", measurement=measurement)
            return
        try:
            point = Point(measurement)
            for key, value in (tags or {}).items():
                point = point.tag(key, value)
            for key, value in (fields or {}).items():
                point = point.field(key, value)
            self._pending.append(point)
        except Exception as e:
            logger.error("Failed to build metric point", measurement=measurement, error=str(e))

    def flush(self) -> None:
        if not self._pending:
            return
        points, self._pending = self._pending, []
        try:
            self._write_api.write(bucket=self._bucket, org=self._org, record=points)
            logger.debug("Flushed metric points", count=len(points))
        except Exception as e:
            logger.error("Failed to write metrics to InfluxDB", count=len(points), error=str(e))

    def close(self) -> None:
        if self._closed:
            return
        self.flush()
        self._closed = True
        try:
            self._write_api.close()
            self._client.close()
            logger.info("InfluxDB connection closed")
        except Exception as e:
            logger.error("Error closing InfluxDB connection", error=str(e))


class NullMetricsSink(MetricsSink):
    """Discards points. Used when no InfluxDB URL is configured."""

    def write_point(
        self,
        measurement: str,
        tags: dict[str, str] | None = None,
        fields: dict[str, Any] | None = None,
    ) -> None:
        logger.debug("Metric point discarded", measurement=measurement)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


def open_metrics_sink(settings: Settings, secrets: SecretStore) -> MetricsSink:
    """
    Open the metrics sink for one invocation.

    The token lookup is part of handler setup: a failure here propagates and
    fails the invocation.
    """
    if not settings.influxdb_url:
        logger.info("InfluxDB not configured, metrics disabled")
        return NullMetricsSink()

    if not settings.influxdb_secret_arn:
        raise ConfigurationError("INFLUXDB_SECRET_ARN must be set when INFLUXDB_URL is configured")

    token = secrets.get_secret_value(settings.influxdb_secret_arn, "token")
    logger.info(
        "InfluxDB client initialized",
        url=settings.influxdb_url,
        org=settings.influxdb_org,
        bucket=settings.influxdb_bucket,
    )
    return InfluxMetricsSink.connect(
        url=settings.influxdb_url,
        token=token,
        org=settings.influxdb_org,
        bucket=settings.influxdb_bucket,
        default_tags={"host": settings.metrics_host_tag, "environment": settings.environment},
        timeout_ms=settings.influxdb_timeout_ms,
    )
