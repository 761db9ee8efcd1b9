"""
Cookbook Backend: Auth Gate
============================

What:  The capability check in front of every write endpoint.
How:   The caller names itself with a user id (header `X-User-Id`). The gate
       passes only when a user with that id exists; otherwise it raises
       AccessDeniedError before the wrapped operation runs.

This is not authentication: there is no password, token or session check
here. Login is a separate, ungated endpoint.
"""

import logging
from typing import Optional

from cookbook.exceptions import AccessDeniedError
from cookbook.models import User
from cookbook.services.store import DocumentStore, as_uuid

logger = logging.getLogger(__name__)


class AuthGate:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def require_user(self, user_id: Optional[str]) -> User:
        if not user_id:
            raise AccessDeniedError(message="A user id is required for this operation")

        key = as_uuid(user_id.strip())
        if key is None:
            raise AccessDeniedError(message="Access denied", context={"user_id": user_id})

        user = await self.store.get(User, key)
        if user is None:
            logger.warning("Access denied for unknown user id %s", key)
            raise AccessDeniedError(message="Access denied", context={"user_id": str(key)})
        return user
