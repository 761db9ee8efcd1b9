"""
Cookbook Backend: Recipe Model
===============================

What:  ORM model representing the `recipes` table.
How:   Scalar fields are regular columns. References to other records are
       stored document-style as JSON arrays of id strings:

           ingredients  ["<ingredient id>", ...]
           quantities   [{"quantity": 2.0, "unit": "<unit id>", "ingredient": "<ingredient id>"}]
           comments     ["<comment id>", ...]

       `creator` is a plain UUID column without a foreign key.

JSON columns are not mutation-tracked: services always assign a new list
instead of appending in place.
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from cookbook.database import Base


class Recipe(Base):
    """
    A recipe in the catalog.

    Lifecycle:
        1. Created by POST /recipes or by the seed loader
        2. Replaced wholesale by PUT /recipes/{id}
        3. Comments appended by POST /recipes/{id}/comment
        4. Deleted by id, or all at once by /initRecipes
    """

    __tablename__ = "recipes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    prep_time: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, comment="Preparation time in minutes"
    )
    difficulty: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Filename returned by POST /uploadImage"
    )

    instructions: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    ingredients: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    quantities: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    comments: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    vegan: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    vegetarian: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)

    creator: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_recipes_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Recipe(id={self.id}, title='{self.title}')>"
