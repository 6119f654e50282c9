"""Phase 3: one company portal admin per seeded company."""

import re

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.config import settings
from preiposip.models import Company, CompanyUser
from preiposip.seeders.base import REFERENCE_TIME, require, update_or_create
from preiposip.seeders.catalog import COMPANIES
from preiposip.services.auth import hash_password


def portal_email(company_name: str) -> str:
    """``TechCorp India`` -> ``admin@techcorpindia.com``."""
    return "admin@" + re.sub(r"[^a-z0-9]", "", company_name.lower()) + ".com"


def portal_credentials() -> list[tuple[str, str]]:
    return [("Company", portal_email(company["name"])) for company in COMPANIES]


async def run(session: AsyncSession) -> None:
    password_hash = hash_password(settings.seed_password)
    for data in COMPANIES:
        company = await require(session, Company, "catalog", slug=data["slug"])
        await update_or_create(
            session,
            CompanyUser,
            {"email": portal_email(data["name"])},
            {
                "company_id": company.id,
                "name": "Admin " + data["name"].split()[0],
                "password_hash": password_hash,
                "role": "admin",
                "status": "active",
                "email_verified_at": REFERENCE_TIME,
            },
        )
    print(f"  ✓ Company portal users seeded: {len(COMPANIES)} records")
