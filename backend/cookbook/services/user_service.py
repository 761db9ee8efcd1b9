"""
Cookbook Backend: User Service
===============================

What:  User CRUD and the login credential check.

Password handling:
    Passwords are hashed with bcrypt (random salt per hash) before they reach
    the store, and verified with `bcrypt.checkpw`. The plaintext is never
    stored, logged or returned. bcrypt only accepts up to 72 bytes of input;
    the write schema rejects longer passwords, and login never matches one.

Full replace applies here too: a PUT without `password` clears the hash,
after which login for that user fails until a new password is set.
"""

import logging
from typing import Any, Dict, List, Optional

import bcrypt
from sqlalchemy import func

from cookbook.models import Recipe, User
from cookbook.schemas.user import BCRYPT_MAX_BYTES, LoginRequest, LoginResponse, UserResponse, UserWrite
from cookbook.services.crud import CrudService
from cookbook.services.resolver import ReferenceResolver
from cookbook.services.store import DocumentStore

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Invalid email or password"


class UserService(CrudService[User, UserResponse]):
    model = User
    response_model = UserResponse
    resource = "user"
    json_fields = frozenset({"favorites"})

    def __init__(self, store: DocumentStore, bcrypt_rounds: int = 12):
        super().__init__(store)
        self.bcrypt_rounds = bcrypt_rounds

    # ── Password hashing ──────────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: Optional[str]) -> bool:
        raw = password.encode("utf-8")
        if not password_hash or len(raw) > BCRYPT_MAX_BYTES:
            return False
        try:
            return bcrypt.checkpw(raw, password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False

    # ── CRUD hooks ────────────────────────────────────────────────────────

    def _to_columns(self, payload: UserWrite) -> Dict[str, Any]:
        columns = super()._to_columns(payload)
        password = columns.pop("password")
        columns["password_hash"] = self.hash_password(password) if password is not None else None
        return columns

    async def _check_references(self, payload: UserWrite) -> None:
        await self._require_existing(Recipe, payload.favorites or [], "favorites")

    async def present(self, entities: List[User]) -> List[UserResponse]:
        return await ReferenceResolver(self.store).users(entities)

    # ── Login ─────────────────────────────────────────────────────────────

    async def login(self, credentials: LoginRequest) -> LoginResponse:
        """
        Match an email/password pair.

        Never raises for bad credentials: unknown email and wrong password
        produce the same structured failure.
        """
        candidates = await self.store.list(
            User, func.lower(User.email) == credentials.email.strip().lower()
        )
        for user in candidates:
            if self.verify_password(credentials.password, user.password_hash):
                logger.info("Login succeeded for user %s", user.id)
                return LoginResponse(success=True, user=await self.present_one(user))

        logger.info("Login failed (%d account(s) matched the email)", len(candidates))
        return LoginResponse(success=False, error=LOGIN_FAILED)
