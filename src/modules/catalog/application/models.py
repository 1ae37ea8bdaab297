"""Catalog application data models."""

from datetime import datetime

from pydantic import BaseModel

from src.modules.catalog.domain.entities import ToneModelStatus
from src.modules.listing.domain.entities import CategoryOption


class MyModelData(BaseModel):
    """Owner's view of one of their tone models."""

    id: str
    title: str
    description: str | None = None
    tags: list[str] = []
    filename: str | None = None
    private: bool
    active: bool
    status: ToneModelStatus
    category: CategoryOption | None = None
    created_at: datetime
    updated_at: datetime
