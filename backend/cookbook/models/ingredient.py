"""
Cookbook Backend: Ingredient & Unit Models
===========================================

What:  ORM models for the `ingredients` and `units` tables.
Who:   Referenced by recipes (ingredient lists and quantity entries) and by
       the search filter, which resolves allergen and ingredient names here.

Both tables are referenced by id from JSON columns on `recipes`, so deleting
a row never cascades; readers skip ids that no longer resolve.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from cookbook.database import Base


class Ingredient(Base):
    """An ingredient with an optional allergen category (e.g. 'gluten', 'nuts')."""

    __tablename__ = "ingredients"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
        comment="Display name; matched exactly by the recipe search",
    )

    allergen: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        comment="Allergen category; NULL when the ingredient is not an allergen",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Both search facets look ingredients up by exact value
    __table_args__ = (
        Index("idx_ingredients_name", "name"),
        Index("idx_ingredients_allergen", "allergen"),
    )

    def __repr__(self) -> str:
        return f"<Ingredient(id={self.id}, name='{self.name}', allergen='{self.allergen}')>"


class Unit(Base):
    """A measuring unit (gram, cup, tablespoon...) used by quantity entries."""

    __tablename__ = "units"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Unit(id={self.id}, name='{self.name}')>"
