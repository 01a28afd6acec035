from types import SimpleNamespace
from typing import Any

import pytest

from lambda_jobs.application.services import ReceivedMessage
from lambda_jobs.domain.ports import MetricsSink, QueueMessage, QueuePublisher


class RecordingMetricsSink(MetricsSink):
    """In-memory sink that keeps every point for assertions."""

    def __init__(self) -> None:
        self.points: list[tuple[str, dict[str, str], dict[str, Any]]] = []
        self.flushes = 0
        self.closed = False

    def write_point(self, measurement, tags=None, fields=None) -> None:
        self.points.append((measurement, dict(tags or {}), dict(fields or {})))

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        self.closed = True

    def measurements(self) -> list[str]:
        return [p[0] for p in self.points]

    def named(self, measurement: str) -> list[tuple[str, dict[str, str], dict[str, Any]]]:
        return [p for p in self.points if p[0] == measurement]


class InMemoryQueue(QueuePublisher):
    """Queue publisher that stores messages and can fail on a given call."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.sent: list[tuple[str, QueueMessage]] = []
        self._calls = 0
        self._fail_on_call = fail_on_call

    async def publish(self, queue_url: str, message: QueueMessage) -> str:
        self._calls += 1
        if self._fail_on_call == self._calls:
            raise ConnectionError("queue unavailable")
        self.sent.append((queue_url, message))
        return f"msg-{len(self.sent)}"

    def received(self) -> list[ReceivedMessage]:
        """Messages as the worker would receive them."""
        return [
            ReceivedMessage(message_id=f"msg-{i}", body=message.body)
            for i, (_, message) in enumerate(self.sent, start=1)
        ]


@pytest.fixture
def metrics() -> RecordingMetricsSink:
    return RecordingMetricsSink()


@pytest.fixture
def queue() -> InMemoryQueue:
    return InMemoryQueue()


@pytest.fixture
def lambda_context():
    return SimpleNamespace(function_name="lambda-cron-test", aws_request_id="req-123")
