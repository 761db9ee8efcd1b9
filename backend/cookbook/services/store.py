"""
Cookbook Backend: Document Store Adapter
=========================================

What:  The single persistence boundary used by every service.
How:   `DocumentStore` wraps one `AsyncSession`. It exposes the handful of
       operations the services need (get, list, get_many, add, delete, clear,
       count) and translates every SQLAlchemyError into DatabaseError.
Who:   Built once per request by `routes.deps.get_store` and passed to the
       service constructors; tests build one directly on an in-memory
       SQLite session.

Writes are flushed, not committed. The session dependency commits once at
the end of the request, so a failing request leaves no partial writes.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Type, TypeVar, Union

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cookbook.database import Base
from cookbook.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
IdLike = Union[uuid.UUID, str]


def as_uuid(value: IdLike) -> Optional[uuid.UUID]:
    """Coerce a stored or client-supplied id into a UUID; None if malformed."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


class DocumentStore:
    """Collection-style access to the five record types over one session."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @contextmanager
    def _guard(self, operation: str, model: Optional[Type[Base]] = None) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            table = model.__tablename__ if model is not None else None
            logger.error("Store %s failed on %s: %s", operation, table, str(e))
            raise DatabaseError(
                context={"operation": operation, "table": table, "error_type": type(e).__name__},
            ) from e

    # ── Reads ─────────────────────────────────────────────────────────────

    async def get(self, model: Type[ModelT], entity_id: IdLike) -> Optional[ModelT]:
        key = as_uuid(entity_id)
        if key is None:
            return None
        with self._guard("get", model):
            return await self.session.get(model, key)

    async def exists(self, model: Type[ModelT], entity_id: IdLike) -> bool:
        return await self.get(model, entity_id) is not None

    async def list(self, model: Type[ModelT], *criteria: Any) -> List[ModelT]:
        """All records matching `criteria`, oldest first."""
        query = select(model).where(*criteria).order_by(model.created_at, model.id)
        with self._guard("list", model):
            result = await self.session.execute(query)
            return list(result.scalars().all())

    async def get_many(self, model: Type[ModelT], ids: Iterable[IdLike]) -> Dict[str, ModelT]:
        """
        Fetch records by id in one query, keyed by the string form of the id.

        Ids that are malformed or no longer exist are simply absent from the
        result; callers treat them as dangling references.
        """
        keys = {key for key in (as_uuid(i) for i in ids) if key is not None}
        if not keys:
            return {}
        with self._guard("get_many", model):
            result = await self.session.execute(select(model).where(model.id.in_(keys)))
            return {str(entity.id): entity for entity in result.scalars().all()}

    async def count(self, model: Type[ModelT]) -> int:
        with self._guard("count", model):
            result = await self.session.execute(select(func.count()).select_from(model))
            return result.scalar() or 0

    # ── Writes ────────────────────────────────────────────────────────────

    async def add(self, entity: ModelT) -> ModelT:
        """Insert one record; the id and timestamps are populated on return."""
        with self._guard("add", type(entity)):
            self.session.add(entity)
            await self.session.flush()
        return entity

    async def add_all(self, entities: Sequence[ModelT]) -> List[ModelT]:
        if not entities:
            return []
        with self._guard("add_all", type(entities[0])):
            self.session.add_all(list(entities))
            await self.session.flush()
        return list(entities)

    async def save(self, entity: ModelT) -> ModelT:
        """Flush pending changes on an already-loaded record."""
        with self._guard("save", type(entity)):
            await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        with self._guard("delete", type(entity)):
            await self.session.delete(entity)
            await self.session.flush()

    async def clear(self, model: Type[ModelT]) -> int:
        """Delete every record of `model`; returns the number removed."""
        with self._guard("clear", model):
            result = await self.session.execute(delete(model))
            await self.session.flush()
            return result.rowcount or 0

    async def rollback(self) -> None:
        await self.session.rollback()
