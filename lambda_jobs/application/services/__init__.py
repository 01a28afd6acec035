from .dispatch_service import WorkDispatchService
from .health_service import HealthCheckService
from .pipeline import CheckResult, NotifyStage, ProcessStage, ValidateStage
from .worker_service import ReceivedMessage, WorkItemWorker

__all__ = [
    "CheckResult",
    "HealthCheckService",
    "NotifyStage",
    "ProcessStage",
    "ReceivedMessage",
    "ValidateStage",
    "WorkDispatchService",
    "WorkItemWorker",
]
