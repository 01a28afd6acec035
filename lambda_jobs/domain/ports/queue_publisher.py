"""
Outbound port for the work queue.

The dispatcher publishes through this interface; the SQS adapter in the
infrastructure layer implements it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class QueueMessage:
    """A message to publish: serialized body plus typed attributes.

    String attribute values are sent as String, int values as Number.
    """

    body: str
    attributes: dict[str, str | int] = field(default_factory=dict)


class QueuePublisher(ABC):
    """Outbound port for publishing messages to a queue."""

    @abstractmethod
    async def publish(self, queue_url: str, message: QueueMessage) -> str:
        """
        Publish a single message.

        Args:
            queue_url: Destination queue identifier
            message: Body and attributes to send

        Returns:
            Transport-assigned message ID
        """
        ...
