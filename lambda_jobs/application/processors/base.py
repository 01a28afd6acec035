import asyncio
import random
from abc import ABC, abstractmethod
from typing import Any

from ...domain.entities import WorkType
from ...domain.exceptions import InvalidPayloadError
from ...domain.ports import MetricsSink


class WorkItemProcessor(ABC):
    """
    Processing routine for one work type.

    Subclasses simulate their unit of work with a bounded delay and report
    type-specific metrics. Failures are raised and handled by the worker.
    """

    #: Simulated duration of one unit of work, in milliseconds.
    delay_ms: int = 0

    def __init__(
        self,
        metrics: MetricsSink,
        delay_scale: float = 1.0,
        rng: random.Random | None = None,
    ) -> None:
        self._metrics = metrics
        self._delay_scale = delay_scale
        self._rng = rng or random.Random()

    @property
    @abstractmethod
    def work_type(self) -> WorkType:
        """Return the work type this processor handles."""
        ...

    @abstractmethod
    async def process(self, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Process one work item payload.

        Returns:
            Metrics describing the work performed
        """
        ...

    async def _simulate_work(self) -> None:
        if self._delay_scale > 0 and self.delay_ms > 0:
            await asyncio.sleep(self.delay_ms / 1000 * self._delay_scale)


def require_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise InvalidPayloadError(f"missing or invalid {key} in payload")
    return value


def require_int(payload: dict[str, Any], key: str) -> int:
    value = payload.get(key)
    # JSON numbers may arrive as floats
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidPayloadError(f"missing or invalid {key} in payload")
    return int(value)
