"""Catalog database models."""

from sqlalchemy import ARRAY, Column, String
from sqlmodel import Field, SQLModel

from src.core.infrastructure.database.base_model import BaseModel


class ProfileModel(BaseModel, table=True):
    """Uploader profile; only the public username is read here."""

    __tablename__ = "profiles"

    username: str = Field(nullable=False, unique=True, index=True, max_length=64)


class CategoryModel(SQLModel, table=True):
    """Category database model. Ids start at 1; 0 means "All" in listings."""

    __tablename__ = "categories"

    id: int = Field(primary_key=True)
    title: str = Field(nullable=False, max_length=100)
    slug: str = Field(nullable=False, unique=True, index=True, max_length=100)


class ToneModelModel(BaseModel, table=True):
    """Tone model database model."""

    __tablename__ = "tone_models"

    profile_id: str = Field(nullable=False, index=True, foreign_key="profiles.id")
    category_id: int = Field(nullable=False, index=True, foreign_key="categories.id")
    title: str = Field(nullable=False, max_length=255)
    description: str | None = Field(default=None)
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(ARRAY(String()), nullable=False, server_default="{}"),
    )
    filename: str | None = Field(default=None, max_length=255)
    private: bool = Field(default=False, nullable=False)
    active: bool = Field(default=True, nullable=False)
    favorite_count: int = Field(default=0, nullable=False, index=True)
