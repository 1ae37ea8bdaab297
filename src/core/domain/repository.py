"""Repository contracts shared by catalog aggregates."""

from abc import ABC, abstractmethod
from typing import TypeVar

T = TypeVar("T")


class BaseRepository[T](ABC):
    """按 ID 读取实体；记录只做软删除，不做物理删除。"""

    @abstractmethod
    async def get_by_id(self, entity_id: str) -> T | None:
        """Return the live entity, or None when missing or soft-deleted."""

    @abstractmethod
    async def soft_delete(self, entity_id: str) -> bool:
        """Flag the record as deleted. False means it was already gone."""
