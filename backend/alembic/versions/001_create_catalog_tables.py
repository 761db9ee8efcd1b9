"""Create catalog tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates ingredients, units, recipes, users and comments.
How:   Portable column types (Uuid, JSON) so the same migration runs on
       PostgreSQL and SQLite. References between tables are JSON id lists
       or bare UUID columns without foreign keys; deletes never cascade.

Rollback: downgrade() drops all five tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), primary_key=True, nullable=False)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "ingredients",
        _id(),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("allergen", sa.String(100), nullable=True),
        _created_at(),
    )
    op.create_index("idx_ingredients_name", "ingredients", ["name"])
    op.create_index("idx_ingredients_allergen", "ingredients", ["allergen"])

    op.create_table(
        "units",
        _id(),
        sa.Column("name", sa.String(100), nullable=True),
        _created_at(),
    )

    op.create_table(
        "recipes",
        _id(),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("prep_time", sa.Integer(), nullable=True, comment="Preparation time in minutes"),
        sa.Column("difficulty", sa.String(50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image", sa.String(255), nullable=True),
        sa.Column("instructions", sa.JSON(), nullable=False),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("quantities", sa.JSON(), nullable=False),
        sa.Column("comments", sa.JSON(), nullable=False),
        sa.Column("vegan", sa.Boolean(), nullable=True),
        sa.Column("vegetarian", sa.Boolean(), nullable=True),
        sa.Column("creator", sa.Uuid(), nullable=True),
        _created_at(),
    )
    op.create_index("idx_recipes_created_at", "recipes", ["created_at"])

    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("password_hash", sa.String(128), nullable=True),
        sa.Column("favorites", sa.JSON(), nullable=False),
        _created_at(),
    )
    op.create_index("idx_users_email", "users", ["email"])

    op.create_table(
        "comments",
        _id(),
        sa.Column("author", sa.Uuid(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        _created_at(),
    )


def downgrade() -> None:
    op.drop_table("comments")
    op.drop_index("idx_users_email", table_name="users")
    op.drop_table("users")
    op.drop_index("idx_recipes_created_at", table_name="recipes")
    op.drop_table("recipes")
    op.drop_table("units")
    op.drop_index("idx_ingredients_allergen", table_name="ingredients")
    op.drop_index("idx_ingredients_name", table_name="ingredients")
    op.drop_table("ingredients")
