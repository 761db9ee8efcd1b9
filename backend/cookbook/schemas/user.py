"""
Cookbook Backend: User, Login & Comment Schemas
================================================

Security:
    No response model in this module has a password or hash field.
    `UserPublic` is the shape embedded wherever another record refers to a
    user (recipe creator, comment author).
"""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt hashes at most this many bytes of input
BCRYPT_MAX_BYTES = 72


# ══════════════════════════════════════════════════════════════════════════
# Users
# ══════════════════════════════════════════════════════════════════════════

class UserWrite(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: Optional[str] = Field(default=None, max_length=320, json_schema_extra={"example": "cook@example.com"})
    password: Optional[str] = Field(default=None, min_length=1, description="At most 72 bytes in UTF-8")
    favorites: Optional[List[uuid.UUID]] = Field(default=None, description="Favorited recipe ids")

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes in UTF-8")
        return value


class UserCreate(UserWrite):
    pass


class UserUpdate(UserWrite):
    pass


class UserPublic(BaseModel):
    id: uuid.UUID
    email: Optional[str] = None

    model_config = {"from_attributes": True}


class FavoriteRecipe(BaseModel):
    """Compact recipe reference used in a user's favorites list."""
    id: uuid.UUID
    title: Optional[str] = None
    image: Optional[str] = None

    model_config = {"from_attributes": True}


class UserResponse(UserPublic):
    favorites: List[FavoriteRecipe] = Field(default_factory=list)
    created_at: datetime


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str
    password: str


class LoginResponse(BaseModel):
    """
    Login outcome. Exactly one of `user` / `error` is set.

        {"success": true,  "user": {...}}
        {"success": false, "error": "Invalid email or password"}
    """
    success: bool
    user: Optional[UserResponse] = None
    error: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Comments
# ══════════════════════════════════════════════════════════════════════════

class CommentWrite(BaseModel):
    model_config = ConfigDict(extra="forbid")

    author: Optional[uuid.UUID] = Field(default=None, description="Defaults to the calling user on create")
    content: Optional[str] = Field(default=None, max_length=5000)


class CommentCreate(CommentWrite):
    pass


class CommentUpdate(CommentWrite):
    pass


class CommentResponse(BaseModel):
    id: uuid.UUID
    author: Optional[UserPublic] = None
    content: Optional[str] = None
    created_at: datetime
