"""Post-seed sanity counts. A shortfall is reported, never fatal."""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import (
    AdminLedgerEntry,
    Base,
    BulkPurchase,
    Company,
    CompanyUser,
    EmailTemplate,
    Permission,
    Plan,
    Product,
    PromotionalMaterial,
    Role,
    Setting,
    User,
    Wallet,
)
from preiposip.schemas.seeding import CountCheck

logger = logging.getLogger(__name__)

MINIMUM_COUNTS: dict[type[Base], int] = {
    Setting: 50,
    Permission: 70,
    Role: 5,
    User: 8,
    Company: 5,
    CompanyUser: 5,
    Product: 5,
    Plan: 3,
    BulkPurchase: 5,
    EmailTemplate: 10,
    PromotionalMaterial: 10,
    Wallet: 5,
    AdminLedgerEntry: 2,
}


async def count_rows(session: AsyncSession, model: type[Base]) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def run_count_checks(
    session: AsyncSession,
    tables: set[str] | None = None,
) -> list[CountCheck]:
    """Compare row counts with :data:`MINIMUM_COUNTS` and print one line per table.

    *tables* limits the checks to the given table names; ``None`` checks all.
    """
    checks: list[CountCheck] = []
    for model, minimum in MINIMUM_COUNTS.items():
        table = model.__tablename__
        if tables is not None and table not in tables:
            continue
        check = CountCheck(table=table, minimum=minimum, actual=await count_rows(session, model))
        checks.append(check)
        if check.passed:
            print(f"  ✅ {table}: {check.actual}")
        else:
            print(f"  ❌ {table}: {check.actual} (expected at least {minimum})")
            logger.warning("Only %d rows in %s, expected >= %d", check.actual, table, minimum)
    return checks
