"""Catalog repository interfaces."""

from abc import ABC, abstractmethod

from src.core.domain.repository import BaseRepository
from src.modules.catalog.domain.entities import (
    Category,
    ToneModel,
    ToneModelListing,
    ToneModelQuery,
)


class CategoryRepository(ABC):
    """Category repository interface."""

    @abstractmethod
    async def list_all(self) -> list[Category]:
        """All categories, in no particular order."""
        pass

    @abstractmethod
    async def count_listable_by_category(self) -> list[tuple[Category, int]]:
        """Listable tone models per category; categories without any count 0."""
        pass


class ToneModelRepository(BaseRepository[ToneModel]):
    """Tone model repository interface."""

    @abstractmethod
    async def list_page(self, query: ToneModelQuery) -> tuple[list[ToneModelListing], int]:
        """One page of listable models and the total under the same filters."""
        pass

    @abstractmethod
    async def list_by_profile(self, profile_id: str) -> list[ToneModelListing]:
        """All non-deleted models of a profile, newest first."""
        pass
