"""
Cookbook Backend: User, Login & Comment Routes
===============================================

/users      CRUD; creating a user (sign up) is open, update/delete are gated
/login      credential match, always 200 with {success, user | error}
/comments   comment CRUD; list and read are open
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from cookbook.models import User
from cookbook.routes.deps import get_comment_service, get_user_service, require_user
from cookbook.schemas.common import DeleteResponse
from cookbook.schemas.user import (
    CommentCreate,
    CommentResponse,
    CommentUpdate,
    LoginRequest,
    LoginResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from cookbook.services.comment_service import CommentService
from cookbook.services.user_service import UserService

users_router = APIRouter(tags=["Users"])
comments_router = APIRouter(prefix="/comments", tags=["Comments"])


@users_router.get("/users", response_model=List[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)) -> List[UserResponse]:
    return await service.list()


@users_router.get("/users/{user_id}", response_model=UserResponse)
async def get_user(user_id: UUID, service: UserService = Depends(get_user_service)) -> UserResponse:
    return await service.get(user_id)


@users_router.post("/users", response_model=UserResponse)
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.create(payload)


@users_router.put("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    _: User = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.update(user_id, payload)


@users_router.delete("/users/{user_id}", response_model=DeleteResponse)
async def delete_user(
    user_id: str,
    _: User = Depends(require_user),
    service: UserService = Depends(get_user_service),
) -> DeleteResponse:
    return DeleteResponse.from_outcome(await service.delete(user_id))


@users_router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    summary="Check credentials",
    description="Returns {success: true, user} on a match and {success: false, error} otherwise.",
)
async def login(
    credentials: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> LoginResponse:
    return await service.login(credentials)


# ── Comments ──────────────────────────────────────────────────────────────

@comments_router.get("", response_model=List[CommentResponse])
async def list_comments(
    service: CommentService = Depends(get_comment_service),
) -> List[CommentResponse]:
    return await service.list()


@comments_router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: UUID,
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return await service.get(comment_id)


@comments_router.post("", response_model=CommentResponse)
async def create_comment(
    payload: CommentCreate,
    caller: User = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    if payload.author is None:
        payload = payload.model_copy(update={"author": caller.id})
    return await service.create(payload)


@comments_router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: UUID,
    payload: CommentUpdate,
    _: User = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> CommentResponse:
    return await service.update(comment_id, payload)


@comments_router.delete("/{comment_id}", response_model=DeleteResponse)
async def delete_comment(
    comment_id: str,
    _: User = Depends(require_user),
    service: CommentService = Depends(get_comment_service),
) -> DeleteResponse:
    return DeleteResponse.from_outcome(await service.delete(comment_id))
