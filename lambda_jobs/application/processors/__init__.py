from .backup_task import BackupTaskProcessor
from .base import WorkItemProcessor
from .data_cleanup import DataCleanupProcessor
from .data_processing import DataProcessingProcessor
from .email_notification import EmailNotificationProcessor
from .registry import build_processor_registry, index_processors
from .report_generation import ReportGenerationProcessor

__all__ = [
    "BackupTaskProcessor",
    "DataCleanupProcessor",
    "DataProcessingProcessor",
    "EmailNotificationProcessor",
    "ReportGenerationProcessor",
    "WorkItemProcessor",
    "build_processor_registry",
    "index_processors",
]
