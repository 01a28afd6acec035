"""
Composition root.

Process-lifetime collaborators (secret store, queue publisher) are built once
per Lambda execution environment and injected into every invocation.
Per-invocation resources (metrics sink, database engine) are opened through
the factories and closed by the handler.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache

from .config import Settings, settings
from .domain.ports import MetricsSink, QueuePublisher, SecretStore
from .infrastructure.adapters import SqsQueuePublisher, open_metrics_sink
from .infrastructure.persistence import Database
from .infrastructure.secrets import SecretsManager


@dataclass
class Container:
    settings: Settings
    secrets: SecretStore
    publisher: QueuePublisher
    metrics_factory: Callable[[Settings, SecretStore], MetricsSink] = field(
        default=open_metrics_sink
    )
    database_factory: Callable[[Settings], Database] = field(default=Database.from_settings)

    def open_metrics(self) -> MetricsSink:
        return self.metrics_factory(self.settings, self.secrets)

    def open_database(self) -> Database:
        return self.database_factory(self.settings)


@lru_cache(maxsize=1)
def get_container() -> Container:
    """Get or create the process-wide container."""
    return Container(
        settings=settings,
        secrets=SecretsManager(
            region_name=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        ),
        publisher=SqsQueuePublisher(
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        ),
    )
