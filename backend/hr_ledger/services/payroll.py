from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_ledger.exceptions import NotFoundError
from hr_ledger.models.payroll import PayrollPost
from hr_ledger.services import store

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def list_posted_months(session: AsyncSession) -> list[str]:
    """Months whose payroll has been posted, oldest first."""
    result = await session.execute(select(PayrollPost.month_year).order_by(col(PayrollPost.month_year).asc()))
    return list(result.scalars().all())


async def post_payroll(session: AsyncSession, month: str) -> str:
    """Mark a month as posted. Posting an already-posted month is a no-op."""
    inserted = False
    async with store.unit_of_work(session, f"posting payroll {month}"):
        existing = await session.execute(select(PayrollPost.id).where(col(PayrollPost.month_year) == month))
        if existing.scalar_one_or_none() is None:
            try:
                await store.insert(session, PayrollPost(month_year=month))
                inserted = True
            except IntegrityError:
                # Another writer posted the same month first.
                await session.rollback()

    if inserted:
        logger.info("Payroll posted for %s", month)
    else:
        logger.info("Payroll for %s already posted", month)
    return month


async def unpost_payroll(session: AsyncSession, month: str) -> None:
    """Clear the posted flag for a month."""
    async with store.unit_of_work(session, f"unposting payroll {month}"):
        affected = await store.delete_where(session, PayrollPost, col(PayrollPost.month_year) == month)
        if affected == 0:
            raise NotFoundError(f"Payroll for {month} is not posted")

    logger.info("Payroll unposted for %s", month)
