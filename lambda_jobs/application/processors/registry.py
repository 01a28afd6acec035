import random
from collections.abc import Iterable, Mapping

from ...domain.entities import WorkType
from ...domain.ports import MetricsSink
from .backup_task import BackupTaskProcessor
from .base import WorkItemProcessor
from .data_cleanup import DataCleanupProcessor
from .data_processing import DataProcessingProcessor
from .email_notification import EmailNotificationProcessor
from .report_generation import ReportGenerationProcessor

PROCESSOR_CLASSES: tuple[type[WorkItemProcessor], ...] = (
    DataProcessingProcessor,
    EmailNotificationProcessor,
    DataCleanupProcessor,
    ReportGenerationProcessor,
    BackupTaskProcessor,
)


def index_processors(processors: Iterable[WorkItemProcessor]) -> dict[WorkType, WorkItemProcessor]:
    """
    Build the type -> processor lookup table.

    Raises:
        ValueError: If a work type has no processor or more than one
    """
    table: dict[WorkType, WorkItemProcessor] = {}
    for processor in processors:
        if processor.work_type in table:
            raise ValueError(f"Duplicate processor for work type: {processor.work_type.value}")
        table[processor.work_type] = processor

    missing = [t.value for t in WorkType if t not in table]
    if missing:
        raise ValueError(f"No processor registered for work types: {', '.join(missing)}")
    return table


def build_processor_registry(
    metrics: MetricsSink,
    delay_scale: float = 1.0,
    rng: random.Random | None = None,
) -> Mapping[WorkType, WorkItemProcessor]:
    """Create the default processor for every work type."""
    return index_processors(
        cls(metrics, delay_scale=delay_scale, rng=rng) for cls in PROCESSOR_CLASSES
    )
