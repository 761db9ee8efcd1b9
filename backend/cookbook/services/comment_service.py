"""
Cookbook Backend: Comment Service
==================================

What:  CRUD for comments, with the author resolved in every response.
       Attaching a comment to a recipe lives in RecipeService.attach_comment.
"""

from typing import List

from cookbook.models import Comment, User
from cookbook.schemas.user import CommentResponse, CommentWrite
from cookbook.services.crud import CrudService
from cookbook.services.resolver import ReferenceResolver


class CommentService(CrudService[Comment, CommentResponse]):
    model = Comment
    response_model = CommentResponse
    resource = "comment"

    async def present(self, entities: List[Comment]) -> List[CommentResponse]:
        return await ReferenceResolver(self.store).comments(entities)

    async def _check_references(self, payload: CommentWrite) -> None:
        await self._require_existing(User, [payload.author], "author")
