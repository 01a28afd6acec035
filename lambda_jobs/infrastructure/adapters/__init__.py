from .influx_metrics import InfluxMetricsSink, NullMetricsSink, open_metrics_sink
from .sqs_publisher import SqsQueuePublisher

__all__ = [
    "InfluxMetricsSink",
    "NullMetricsSink",
    "SqsQueuePublisher",
    "open_metrics_sink",
]
