"""Wire format for work items carried on the queue."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ...domain.entities import WorkItem
from ...domain.exceptions import WorkItemDecodeError


class WorkItemMessageDTO(BaseModel):
    """Queue message body for a work item."""

    id: int
    type: str
    payload: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, item: WorkItem) -> "WorkItemMessageDTO":
        return cls(id=item.id, type=item.type, payload=item.payload)

    def to_entity(self) -> WorkItem:
        return WorkItem(id=self.id, type=self.type, payload=self.payload)


def encode_work_item(item: WorkItem) -> str:
    """Serialize a work item to a JSON message body."""
    return WorkItemMessageDTO.from_entity(item).model_dump_json()


def decode_work_item(body: str) -> WorkItem:
    """
    Parse a message body into a work item.

    Raises:
        WorkItemDecodeError: If the body is not valid JSON or lacks fields
    """
    try:
        return WorkItemMessageDTO.model_validate_json(body).to_entity()
    except ValidationError as e:
        raise WorkItemDecodeError(f"Failed to parse work item: {e.errors()[0]['msg']}") from e
