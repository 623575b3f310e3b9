"""Collection-oriented store over the async SQL session.

Each SQLModel table is exposed as a named collection of plain dict documents.
Reads go through core ``select`` on the table (no ORM identity map), so a
document is always what the database holds at the time of the call. Every
call is bounded by ``timeout`` seconds.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager, contextmanager
from typing import Any

from sqlalchemy import and_, delete, insert, select, true, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from onboarding.core.errors import ConflictError, InternalError
from onboarding.models import (
    AccessLevel,
    CostCenter,
    Department,
    Employee,
    EmploymentType,
    HardwareAsset,
    JobRole,
    Location,
    Manager,
    OnboardingBuddy,
    Team,
    Tenant,
    User,
)

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, type[SQLModel]] = {
    model.__tablename__: model
    for model in (
        Tenant,
        User,
        Employee,
        Location,
        Department,
        Manager,
        JobRole,
        EmploymentType,
        Team,
        CostCenter,
        HardwareAsset,
        OnboardingBuddy,
        AccessLevel,
    )
}

Document = dict[str, Any]


class StoreError(Exception):
    """Base class for document store failures."""


class DuplicateKeyError(StoreError):
    """A unique constraint rejected the write."""


class StoreUnavailableError(StoreError):
    """The database could not be reached or did not answer in time."""


class DocumentStore:
    def __init__(self, session: AsyncSession, timeout: float | None = None) -> None:
        self._session = session
        self._timeout = timeout

    # ── Writes ────────────────────────────────────────────────

    async def insert(self, collection: str, doc: Document) -> uuid.UUID:
        """Insert one document, filling unset columns from model defaults."""
        model = _model(collection)
        values = _with_defaults(model, doc)
        stmt = insert(model.__table__).values(**values)
        async with self._call("insert", collection):
            await self._session.execute(stmt)
            await self._session.commit()
        return values["id"]

    async def update_one(self, collection: str, filter: Document, partial: Document) -> int:
        """Set ``partial`` on the document matching ``filter``; returns matched count."""
        model = _model(collection)
        table = model.__table__
        _check_columns(model, partial)
        stmt = update(table).where(_where(model, filter)).values(**partial)
        async with self._call("update", collection):
            result = await self._session.execute(stmt)
            await self._session.commit()
        return result.rowcount

    async def delete_one(self, collection: str, filter: Document) -> int:
        model = _model(collection)
        stmt = delete(model.__table__).where(_where(model, filter))
        async with self._call("delete", collection):
            result = await self._session.execute(stmt)
            await self._session.commit()
        return result.rowcount

    # ── Reads ─────────────────────────────────────────────────

    async def find_one(self, collection: str, filter: Document) -> Document | None:
        model = _model(collection)
        stmt = select(model.__table__).where(_where(model, filter)).limit(1)
        async with self._call("find", collection):
            result = await self._session.execute(stmt)
            row = result.mappings().first()
        return dict(row) if row is not None else None

    async def find_many(self, collection: str, filter: Document) -> list[Document]:
        model = _model(collection)
        stmt = select(model.__table__).where(_where(model, filter))
        async with self._call("find", collection):
            result = await self._session.execute(stmt)
            rows = result.mappings().all()
        return [dict(row) for row in rows]

    # ── Internal ──────────────────────────────────────────────

    @asynccontextmanager
    async def _call(self, op: str, collection: str) -> AsyncIterator[None]:
        """Deadline plus error translation around one round-trip."""
        try:
            async with asyncio.timeout(self._timeout):
                yield
        except TimeoutError as exc:
            await self._session.rollback()
            logger.error("Store %s on %s exceeded its deadline", op, collection)
            raise StoreUnavailableError(f"{op} on {collection} timed out") from exc
        except IntegrityError as exc:
            await self._session.rollback()
            if "unique" in str(exc.orig).lower():
                raise DuplicateKeyError(f"duplicate key in {collection}") from exc
            raise StoreError(f"{op} on {collection} rejected: {exc.orig}") from exc
        except (SQLAlchemyError, OSError) as exc:
            await self._session.rollback()
            logger.error("Store %s on %s failed", op, collection, exc_info=exc)
            raise StoreUnavailableError(f"{op} on {collection} failed") from exc


def _model(collection: str) -> type[SQLModel]:
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection '{collection}'") from None


def _check_columns(model: type[SQLModel], doc: Document) -> None:
    unknown = set(doc) - set(model.__table__.c.keys())
    if unknown:
        raise ValueError(f"Unknown fields for {model.__tablename__}: {sorted(unknown)}")


def _with_defaults(model: type[SQLModel], doc: Document) -> Document:
    _check_columns(model, doc)
    values: Document = {}
    for name, field in model.model_fields.items():
        if name in doc:
            values[name] = doc[name]
        elif not field.is_required():
            values[name] = field.get_default(call_default_factory=True)
    return values


def _where(model: type[SQLModel], filter: Document):
    _check_columns(model, filter)
    columns = model.__table__.c
    return and_(true(), *(columns[key] == value for key, value in filter.items()))


@contextmanager
def store_errors(conflict_detail: str = "Resource already exists") -> Iterator[None]:
    """Translate store failures into the application error taxonomy."""
    try:
        yield
    except DuplicateKeyError as exc:
        raise ConflictError(conflict_detail) from exc
    except StoreError as exc:
        raise InternalError("The data store is unavailable") from exc
