from .health_check_repository import HealthCheckRepository, HealthCheckRow
from .metrics_sink import MetricsSink
from .queue_publisher import QueueMessage, QueuePublisher
from .secret_store import SecretStore
from .work_log_repository import WorkLogEntry, WorkLogRepository

__all__ = [
    "HealthCheckRepository",
    "HealthCheckRow",
    "MetricsSink",
    "QueueMessage",
    "QueuePublisher",
    "SecretStore",
    "WorkLogEntry",
    "WorkLogRepository",
]
