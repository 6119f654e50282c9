"""Building blocks shared by every seeder.

Seeders are idempotent: each row is looked up by its natural key and either
left alone (:func:`first_or_create`) or brought up to date
(:func:`update_or_create`). Fixture values that look random are derived from
a SHA-256 hash of a stable string so that every run produces the same data.
"""

import datetime
import hashlib
import re
import unicodedata
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.exceptions import MissingDependencyError
from preiposip.models.base import Base

# Fixture dates are anchored here rather than on today's date so that
# re-running a seeder never shifts an existing row.
REFERENCE_DATE = datetime.date(2026, 1, 1)
REFERENCE_TIME = datetime.datetime(2026, 1, 1, 10, 0, tzinfo=datetime.UTC)

M = TypeVar("M", bound=Base)


def det_int(seed_str: str, lo: int, hi: int) -> int:
    """Return a deterministic int in [lo, hi] derived from seed_str via SHA-256."""
    h = int(hashlib.sha256(seed_str.encode()).hexdigest(), 16)
    return lo + (h % (hi - lo + 1))


def det_digits(seed_str: str, length: int) -> str:
    """Return *length* deterministic decimal digits, first digit non-zero."""
    return str(det_int(seed_str, 10 ** (length - 1), 10**length - 1))


def det_letters(seed_str: str, length: int) -> str:
    """Return *length* deterministic uppercase ASCII letters."""
    return "".join(chr(ord("A") + det_int(f"{seed_str}:{i}", 0, 25)) for i in range(length))


def months_before(day: datetime.date, months: int) -> datetime.date:
    """Return *day* shifted back by *months* calendar months, clamped to month end."""
    total = day.year * 12 + day.month - 1 - months
    year, month = divmod(total, 12)
    month += 1
    for candidate in (day.day, 30, 29, 28):
        try:
            return datetime.date(year, month, candidate)
        except ValueError:
            continue
    raise ValueError(f"Cannot shift {day} by {months} months")


def months_after(day: datetime.date, months: int) -> datetime.date:
    return months_before(day, -months)


def slugify(text: str) -> str:
    """Return a lowercase, hyphen-separated ASCII slug for *text*."""
    normalized = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = normalized.replace("&", " and ")
    slug = re.sub(r"[^a-zA-Z0-9]+", "-", normalized).strip("-").lower()
    return slug or "item"


async def find(session: AsyncSession, model: type[M], lookup: dict[str, Any]) -> M | None:
    """Return the row of *model* matching every column in *lookup*, if any."""
    stmt = select(model).filter_by(**lookup)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def first_or_create(
    session: AsyncSession,
    model: type[M],
    lookup: dict[str, Any],
    values: dict[str, Any] | None = None,
) -> tuple[M, bool]:
    """Return the existing row matched by *lookup*, or insert ``lookup | values``.

    An existing row is returned untouched. The session is flushed after an
    insert so the new primary key is available.
    """
    instance = await find(session, model, lookup)
    if instance is not None:
        return instance, False

    instance = model(**(lookup | (values or {})))
    session.add(instance)
    await session.flush()
    return instance, True


async def update_or_create(
    session: AsyncSession,
    model: type[M],
    lookup: dict[str, Any],
    values: dict[str, Any] | None = None,
) -> tuple[M, bool]:
    """Return the row matched by *lookup* with *values* assigned, inserting it if absent."""
    values = values or {}
    instance = await find(session, model, lookup)
    if instance is None:
        instance = model(**(lookup | values))
        session.add(instance)
        await session.flush()
        return instance, True

    for key, value in values.items():
        setattr(instance, key, value)
    await session.flush()
    return instance, False


async def require(
    session: AsyncSession,
    model: type[M],
    seeder: str,
    **lookup: Any,
) -> M:
    """Return the row of *model* matching *lookup* or raise :exc:`MissingDependencyError`.

    *seeder* names the seeder responsible for creating the row; it is quoted
    in the error so the operator knows what to run first.
    """
    instance = await find(session, model, lookup)
    if instance is None:
        raise MissingDependencyError(model.__name__, lookup, seeder)
    return instance
