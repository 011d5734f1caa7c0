"""Base repository: row access, change application, paging and IntegrityError translation."""

from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hrms.domain.exceptions import ResourceNotFoundException
from hrms.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


def plain(value: Any) -> Any:
    """Enum members are stored by value."""
    return value.value if isinstance(value, Enum) else value


def violates(error: IntegrityError, constraint: str) -> bool:
    """True if the driver error names the given constraint or index."""
    return constraint in str(error.orig)


class BaseRepository(Generic[ModelType]):
    """Shared plumbing for the entity repositories.

    Writes run inside a SAVEPOINT so a constraint violation rolls back only
    the failed statement; subclasses map IntegrityError to domain errors in
    _translate_integrity_error.
    """

    resource_type: str = "resource"

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_row(self, entity_id: str) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _require_row(self, entity_id: str) -> ModelType:
        row = await self._get_row(entity_id)
        if row is None:
            raise ResourceNotFoundException(self.resource_type, entity_id)
        return row

    async def _insert(self, obj: ModelType) -> ModelType:
        try:
            async with self.db.begin_nested():
                self.db.add(obj)
                await self.db.flush()
        except IntegrityError as e:
            self._translate_integrity_error(e)
            raise
        await self.db.refresh(obj)
        return obj

    async def _update_row(self, entity_id: str, changes: dict[str, Any]) -> ModelType:
        row = await self._require_row(entity_id)
        try:
            async with self.db.begin_nested():
                for key, value in changes.items():
                    setattr(row, key, plain(value))
                await self.db.flush()
        except IntegrityError as e:
            self._translate_integrity_error(e)
            raise
        await self.db.refresh(row)
        return row

    async def _delete_row(self, entity_id: str) -> None:
        row = await self._require_row(entity_id)
        await self.db.delete(row)
        await self.db.flush()

    async def _page(self, stmt: Select[Any], skip: int, limit: int) -> tuple[list[ModelType], int]:
        """Run an ordered select with offset/limit and return (rows, total)."""
        total = await self.db.scalar(
            select(func.count()).select_from(stmt.order_by(None).subquery())
        )
        result = await self.db.execute(stmt.offset(skip).limit(limit))
        return list(result.scalars().all()), total or 0

    def _translate_integrity_error(self, error: IntegrityError) -> None:
        """Override to raise a domain exception for known constraints."""
