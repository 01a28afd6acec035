from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ...domain.ports import HealthCheckRow, WorkLogEntry


class Base(DeclarativeBase):
    pass


class WorkItemLogModel(Base):
    """One worker processing attempt."""

    __tablename__ = "work_item_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    work_id: Mapped[int | None] = mapped_column(Integer)
    work_type: Mapped[str | None] = mapped_column(String(50))
    message_id: Mapped[str | None] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(20), server_default="processing")
    payload: Mapped[dict[str, Any] | None] = mapped_column(JSONB)
    processed_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    processing_duration_ms: Mapped[int | None] = mapped_column(Integer)
    error_message: Mapped[str | None] = mapped_column(Text)

    @classmethod
    def from_entry(cls, entry: WorkLogEntry) -> "WorkItemLogModel":
        return cls(
            work_id=entry.work_id,
            work_type=entry.work_type,
            message_id=entry.message_id,
            status=entry.status,
            payload=entry.payload,
            processing_duration_ms=entry.processing_duration_ms,
            error_message=entry.error_message,
        )


class HealthCheckModel(Base):
    """Rows written by the health check handler."""

    __tablename__ = "health_check"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    message: Mapped[str | None] = mapped_column(Text)

    def to_row(self) -> HealthCheckRow:
        return HealthCheckRow(id=self.id, timestamp=self.timestamp, message=self.message or "")
