"""Shared SQLModel bases for catalog tables."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


def _utc_now() -> datetime:
    return datetime.now(UTC)


class TimestampedModel(SQLModel):
    """created_at / updated_at，均为带时区的 UTC 时间。"""

    created_at: datetime = Field(
        default_factory=_utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    updated_at: datetime = Field(
        default_factory=_utc_now,
        sa_type=DateTime(timezone=True),
        nullable=False,
    )

    def touch(self) -> None:
        self.updated_at = _utc_now()


class BaseModel(TimestampedModel):
    """UUID 字符串主键 + 软删除标记。行不会被物理删除。"""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    is_deleted: bool = Field(default=False, nullable=False)

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.touch()
