"""The fixed batch of work items enqueued by the cron dispatcher."""

from ..domain.entities import WorkItem, WorkType


def default_work_items() -> list[WorkItem]:
    """Return a fresh copy of the cron batch, one item per work type."""
    return [
        WorkItem.create(1, WorkType.DATA_PROCESSING, {"userId": 123, "action": "update_profile"}),
        WorkItem.create(2, WorkType.EMAIL_NOTIFICATION, {"email": "user@example.com", "template": "welcome"}),
        WorkItem.create(3, WorkType.DATA_CLEANUP, {"table": "old_logs", "days": 30}),
        WorkItem.create(4, WorkType.REPORT_GENERATION, {"reportType": "monthly", "userId": 456}),
        WorkItem.create(5, WorkType.BACKUP_TASK, {"database": "main", "retention": 7}),
    ]
