"""Persistence store primitives shared by the services.

Every write here is a single statement evaluated by the database, so
conditions and arithmetic see the committed row, never a value the caller
read earlier.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col

from hr_ledger.exceptions import AppError, PersistenceError
from hr_ledger.models.employee import Employee

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import ColumnElement
    from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


@asynccontextmanager
async def unit_of_work(session: AsyncSession, action: str) -> AsyncIterator[None]:
    """Commit everything done inside the block, or roll all of it back.

    Application errors are re-raised unchanged; database errors become
    PersistenceError.
    """
    try:
        yield
        await session.commit()
    except AppError:
        await session.rollback()
        raise
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Persistence failure while %s", action)
        raise PersistenceError from exc


async def get_employee(session: AsyncSession, employee_id: str) -> Employee | None:
    """Fetch an employee by id, bypassing any stale copy in the session."""
    result = await session.execute(
        select(Employee).where(col(Employee.id) == employee_id).execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def insert(session: AsyncSession, record: SQLModel) -> Any:
    """Add a record and flush so store-assigned fields are populated. Returns its id."""
    session.add(record)
    await session.flush()
    return record.id  # type: ignore[attr-defined]


async def update_where(
    session: AsyncSession,
    model: type[SQLModel],
    record_id: Any,
    *conditions: ColumnElement[bool],
    values: dict[str, Any],
) -> int:
    """UPDATE model SET values WHERE id = record_id AND conditions. Returns affected rows."""
    stmt = (
        update(model)
        .where(col(model.id) == record_id, *conditions)  # type: ignore[attr-defined]
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]


async def decrement_column(
    session: AsyncSession,
    model: type[SQLModel],
    record_id: Any,
    column: str,
    amount: int,
    floor: int | None = None,
) -> int:
    """UPDATE model SET column = column - amount WHERE id = record_id.

    With a floor, the row is only touched when the result stays at or above it.
    Returns affected rows.
    """
    target = getattr(model, column)
    stmt = update(model).where(col(model.id) == record_id)  # type: ignore[attr-defined]
    if floor is not None:
        stmt = stmt.where(target - amount >= floor)
    stmt = stmt.values({column: target - amount}).execution_options(synchronize_session=False)
    result = await session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]


async def delete_where(session: AsyncSession, model: type[SQLModel], *conditions: ColumnElement[bool]) -> int:
    """DELETE FROM model WHERE conditions. Returns affected rows."""
    stmt = delete(model).where(*conditions).execution_options(synchronize_session=False)
    result = await session.execute(stmt)
    return result.rowcount  # type: ignore[attr-defined]
