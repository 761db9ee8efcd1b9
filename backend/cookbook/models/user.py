"""
Cookbook Backend: User & Comment Models
========================================

What:  ORM models for the `users` and `comments` tables.

Security:
    Users never store a plaintext password. `password_hash` holds a bcrypt
    hash (salt embedded) and is excluded from every response schema.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from cookbook.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    password_hash: Mapped[Optional[str]] = mapped_column(
        String(128), nullable=True, comment="bcrypt hash; NULL means login is impossible"
    )

    # Favorited recipe ids, stored the same way as recipe references
    favorites: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Login looks users up by email
    __table_args__ = (
        Index("idx_users_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


class Comment(Base):
    """
    A comment left by a user.

    Comments are created standalone and attached to a recipe by id. Deleting
    a comment leaves the id in any recipe that lists it.
    """

    __tablename__ = "comments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    author: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, author={self.author})>"
