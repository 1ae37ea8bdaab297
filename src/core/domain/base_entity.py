"""Identity and lifecycle fields common to catalog aggregates."""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class BaseEntity(BaseModel):
    """Aggregate root with a string id, UTC timestamps and a soft-delete flag.

    两个实体只要 id 相同即视为相等，与字段内容无关。
    """

    model_config = ConfigDict(
        from_attributes=True,
        validate_assignment=True,
        extra="forbid",
    )

    id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    is_deleted: bool = False

    def mark_as_deleted(self) -> None:
        self.is_deleted = True
        self.updated_at = datetime.now(UTC)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BaseEntity):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
