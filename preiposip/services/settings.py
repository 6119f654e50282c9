"""Typed access to the platform ``settings`` rows written by the foundation seeder."""

import json
from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.exceptions import MissingDependencyError
from preiposip.models.foundation import Setting


def cast_setting(value: str, type_: str) -> Any:
    """Convert a stored setting string to its declared type."""
    if type_ == "boolean":
        return value.strip().lower() in ("1", "true", "yes", "on")
    if type_ == "integer":
        return int(value)
    if type_ in ("float", "number"):
        return Decimal(value)
    if type_ == "json":
        return json.loads(value)
    return value


async def setting_value(session: AsyncSession, key: str) -> Any:
    """Return the typed value of setting *key*, or raise if it was never seeded."""
    result = await session.execute(select(Setting).where(Setting.key == key))
    setting = result.scalar_one_or_none()
    if setting is None:
        raise MissingDependencyError("Setting", {"key": key}, "foundation")
    return cast_setting(setting.value, setting.type)
