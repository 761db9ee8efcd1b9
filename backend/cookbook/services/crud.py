"""
Cookbook Backend: Generic CRUD Service
=======================================

What:  The uniform create / read / read-all / update / delete contract shared
       by every collection.
How:   `CrudService` is parameterized by an ORM model, the name of the
       resource (for errors and logs) and the JSON list columns. Concrete
       services set those class attributes and override `present()` when
       the response needs resolved references, or `_check_references()`
       when the input carries ids.

Update semantics (full replace):
    Every field of the write model is written back, including the ones the
    caller left out. PUT {"title": "x"} on a recipe sets title="x" and
    clears description, instructions, ingredients, ...

Delete semantics:
    Returns True/False and never raises. An unknown id and a store failure
    both report False; the store failure is rolled back and logged.
"""

import logging
from typing import Any, Dict, FrozenSet, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

from cookbook.database import Base
from cookbook.exceptions import DatabaseError, NotFoundError, ValidationError
from cookbook.services.store import DocumentStore, IdLike

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class CrudService(Generic[ModelT, ResponseT]):
    model: Type[ModelT]
    response_model: Type[ResponseT]
    resource: str = "record"
    json_fields: FrozenSet[str] = frozenset()

    def __init__(self, store: DocumentStore):
        self.store = store

    # ── Presentation ──────────────────────────────────────────────────────

    async def present(self, entities: List[ModelT]) -> List[ResponseT]:
        return [self.response_model.model_validate(entity) for entity in entities]

    async def present_one(self, entity: ModelT) -> ResponseT:
        return (await self.present([entity]))[0]

    # ── Input mapping ─────────────────────────────────────────────────────

    def _to_columns(self, payload: BaseModel) -> Dict[str, Any]:
        """
        Map a write model onto column values.

        Omitted fields come back as None; JSON list columns get [] instead
        and hold ids as strings.
        """
        python_values = payload.model_dump()
        json_values = payload.model_dump(mode="json")
        columns: Dict[str, Any] = {}
        for name in type(payload).model_fields:
            if name in self.json_fields:
                columns[name] = json_values[name] or []
            else:
                columns[name] = python_values[name]
        return columns

    async def _check_references(self, payload: BaseModel) -> None:
        """Reject writes that point at records which do not exist right now."""

    async def _require_existing(self, model: Type[Base], ids: Iterable[Optional[object]], field: str) -> None:
        wanted = {str(i) for i in ids if i is not None}
        if not wanted:
            return
        found = await self.store.get_many(model, wanted)
        missing = sorted(wanted - found.keys())
        if missing:
            raise ValidationError(
                message=f"'{field}' references {model.__tablename__} that do not exist",
                field=field,
                context={"missing": missing},
            )

    async def _require(self, entity_id: IdLike) -> ModelT:
        entity = await self.store.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=str(entity_id))
        return entity

    # ── Operations ────────────────────────────────────────────────────────

    async def create(self, payload: BaseModel) -> ResponseT:
        await self._check_references(payload)
        entity = self.model(**self._to_columns(payload))
        await self.store.add(entity)
        logger.info("Created %s %s", self.resource, entity.id)
        return await self.present_one(entity)

    async def get(self, entity_id: IdLike) -> ResponseT:
        return await self.present_one(await self._require(entity_id))

    async def list(self) -> List[ResponseT]:
        return await self.present(await self.store.list(self.model))

    async def update(self, entity_id: IdLike, payload: BaseModel) -> ResponseT:
        entity = await self._require(entity_id)
        await self._check_references(payload)
        for column, value in self._to_columns(payload).items():
            setattr(entity, column, value)
        await self.store.save(entity)
        logger.info("Replaced %s %s", self.resource, entity.id)
        return await self.present_one(entity)

    async def delete(self, entity_id: IdLike) -> bool:
        try:
            entity = await self.store.get(self.model, entity_id)
            if entity is None:
                logger.info("Delete of unknown %s %s", self.resource, entity_id)
                return False
            await self.store.delete(entity)
        except DatabaseError as e:
            logger.warning("Delete of %s %s failed: %s", self.resource, entity_id, e.context)
            await self.store.rollback()
            return False
        logger.info("Deleted %s %s", self.resource, entity_id)
        return True
