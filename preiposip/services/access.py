"""Role and permission assignment on the plain association tables."""

import uuid
from collections.abc import Iterable

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models.foundation import Permission, role_permissions
from preiposip.models.identity import user_roles


async def sync_role_permissions(
    session: AsyncSession,
    role_id: uuid.UUID,
    permission_names: Iterable[str],
) -> int:
    """Replace the permission set of a role with *permission_names*.

    Returns the number of permissions the role holds afterwards. Unknown
    names are ignored.
    """
    names = list(permission_names)
    await session.execute(delete(role_permissions).where(role_permissions.c.role_id == role_id))
    if not names:
        return 0

    result = await session.execute(select(Permission.id).where(Permission.name.in_(names)))
    permission_ids = list(result.scalars().all())
    if permission_ids:
        await session.execute(
            insert(role_permissions),
            [{"role_id": role_id, "permission_id": pid} for pid in permission_ids],
        )
    return len(permission_ids)


async def assign_role(session: AsyncSession, user_id: uuid.UUID, role_id: uuid.UUID) -> bool:
    """Attach a role to a user. Returns False if the user already had it."""
    result = await session.execute(
        select(user_roles.c.role_id).where(
            user_roles.c.user_id == user_id,
            user_roles.c.role_id == role_id,
        )
    )
    if result.first() is not None:
        return False
    await session.execute(insert(user_roles).values(user_id=user_id, role_id=role_id))
    return True
