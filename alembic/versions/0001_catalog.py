"""catalog tables: profiles, categories, tone_models

Revision ID: 0001_catalog
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_catalog"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "profiles",
        *_base_columns(),
        sa.Column("username", sa.String(64), nullable=False, unique=True),
    )
    op.create_index("ix_profiles_username", "profiles", ["username"], unique=True)
    op.create_index("ix_profiles_created_at", "profiles", ["created_at"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.CheckConstraint("id > 0", name="ck_categories_id_positive"),
    )
    op.create_index("ix_categories_slug", "categories", ["slug"], unique=True)

    op.create_table(
        "tone_models",
        *_base_columns(),
        sa.Column(
            "profile_id",
            sa.String(),
            sa.ForeignKey("profiles.id"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("categories.id"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "tags",
            postgresql.ARRAY(sa.String()),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
        sa.Column("filename", sa.String(255), nullable=True),
        sa.Column(
            "private",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "active",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("true"),
        ),
        sa.Column(
            "favorite_count",
            sa.Integer(),
            nullable=False,
            server_default=sa.text("0"),
        ),
    )
    op.create_index("ix_tone_models_profile_id", "tone_models", ["profile_id"])
    op.create_index("ix_tone_models_category_id", "tone_models", ["category_id"])
    op.create_index("ix_tone_models_created_at", "tone_models", ["created_at"])
    op.create_index("ix_tone_models_favorite_count", "tone_models", ["favorite_count"])
    op.create_index(
        "ix_tone_models_tags",
        "tone_models",
        ["tags"],
        postgresql_using="gin",
    )


def downgrade() -> None:
    op.drop_index("ix_tone_models_tags", table_name="tone_models")
    op.drop_index("ix_tone_models_favorite_count", table_name="tone_models")
    op.drop_index("ix_tone_models_created_at", table_name="tone_models")
    op.drop_index("ix_tone_models_category_id", table_name="tone_models")
    op.drop_index("ix_tone_models_profile_id", table_name="tone_models")
    op.drop_table("tone_models")

    op.drop_index("ix_categories_slug", table_name="categories")
    op.drop_table("categories")

    op.drop_index("ix_profiles_created_at", table_name="profiles")
    op.drop_index("ix_profiles_username", table_name="profiles")
    op.drop_table("profiles")
