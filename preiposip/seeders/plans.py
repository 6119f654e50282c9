"""Phase 4: SIP plans with their features and configs, plus the navigation menus."""

from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import Menu, MenuItem, Plan, PlanConfig, PlanFeature
from preiposip.seeders.base import update_or_create

PLANS: list[dict[str, Any]] = [
    {
        "name": "Plan A - Starter",
        "slug": "plan-a-starter",
        "description": (
            "Entry-level SIP plan ideal for first-time investors with monthly investments "
            "starting at ₹5,000."
        ),
        "monthly_amount": Decimal("5000"),
        "is_featured": False,
        "features": [
            "Monthly SIP of ₹5,000",
            "0.5% Progressive Bonus",
            "Standard allocation priority",
            "12-month commitment period",
        ],
        "configs": {
            "progressive_bonus_rate": 0.5,
            "milestone_bonus_enabled": True,
            "milestone_bonus_6_months": 500,
            "milestone_bonus_12_months": 1000,
            "allocation_priority": "standard",
        },
    },
    {
        "name": "Plan B - Growth",
        "slug": "plan-b-growth",
        "description": (
            "Mid-tier SIP plan with priority allocation and enhanced bonus rates for "
            "committed investors."
        ),
        "monthly_amount": Decimal("10000"),
        "is_featured": True,
        "features": [
            "Monthly SIP of ₹10,000",
            "0.75% Progressive Bonus",
            "Priority allocation on oversubscribed shares",
            "12-month commitment with flexibility",
        ],
        "configs": {
            "progressive_bonus_rate": 0.75,
            "milestone_bonus_enabled": True,
            "milestone_bonus_6_months": 1000,
            "milestone_bonus_12_months": 2500,
            "allocation_priority": "priority",
        },
    },
    {
        "name": "Plan C - Premium",
        "slug": "plan-c-premium",
        "description": (
            "Premium SIP plan with guaranteed allocation, highest bonus rates, and exclusive "
            "benefits."
        ),
        "monthly_amount": Decimal("25000"),
        "is_featured": True,
        "features": [
            "Monthly SIP of ₹25,000",
            "1.0% Progressive Bonus",
            "Guaranteed allocation on all deals",
            "Dedicated relationship manager",
        ],
        "configs": {
            "progressive_bonus_rate": 1.0,
            "milestone_bonus_enabled": True,
            "milestone_bonus_6_months": 2500,
            "milestone_bonus_12_months": 6000,
            "allocation_priority": "guaranteed",
        },
    },
]

PLAN_DURATION_MONTHS = 12

# slug -> (name, [(label, url), ...])
MENUS: dict[str, tuple[str, list[tuple[str, str]]]] = {
    "header": (
        "Header Menu",
        [
            ("Home", "/"),
            ("Companies", "/companies"),
            ("Plans", "/plans"),
            ("About Us", "/about"),
            ("Contact", "/contact"),
        ],
    ),
    "footer": (
        "Footer Menu",
        [
            ("Privacy Policy", "/privacy-policy"),
            ("Terms & Conditions", "/terms"),
            ("Risk Disclosure", "/risk-disclosure"),
            ("Refund Policy", "/refund-policy"),
            ("Help Center", "/help-center"),
        ],
    ),
    "user-sidebar": (
        "User Dashboard Menu",
        [
            ("Dashboard", "/dashboard"),
            ("My Investments", "/portfolio"),
            ("Wallet", "/wallet"),
            ("KYC", "/kyc"),
            ("Referrals", "/referrals"),
        ],
    ),
    "admin-sidebar": (
        "Admin Panel Menu",
        [
            ("Dashboard", "/admin/dashboard"),
            ("Users", "/admin/users"),
            ("KYC Queue", "/admin/kyc-queue"),
            ("Investments", "/admin/investments"),
            ("Settings", "/admin/settings"),
        ],
    ),
}


async def seed_plans(session: AsyncSession) -> None:
    for order, data in enumerate(PLANS, start=1):
        plan, _ = await update_or_create(
            session,
            Plan,
            {"slug": data["slug"]},
            {
                "name": data["name"],
                "description": data["description"],
                "monthly_amount": data["monthly_amount"],
                "duration_months": PLAN_DURATION_MONTHS,
                "is_active": True,
                "is_featured": data["is_featured"],
                "display_order": order,
            },
        )
        for feature_order, text in enumerate(data["features"], start=1):
            await update_or_create(
                session,
                PlanFeature,
                {"plan_id": plan.id, "feature_text": text},
                {"display_order": feature_order},
            )
        for key, value in data["configs"].items():
            await update_or_create(
                session,
                PlanConfig,
                {"plan_id": plan.id, "config_key": key},
                {"value": value},
            )
    print(f"  ✓ Plans seeded: {len(PLANS)} records (with features and configs)")


async def seed_menus(session: AsyncSession) -> None:
    for slug, (name, items) in MENUS.items():
        menu, _ = await update_or_create(session, Menu, {"slug": slug}, {"name": name})
        for order, (label, url) in enumerate(items, start=1):
            await update_or_create(
                session,
                MenuItem,
                {"menu_id": menu.id, "label": label},
                {"url": url, "display_order": order},
            )
    print(f"  ✓ Menus seeded: {len(MENUS)} records")


async def run(session: AsyncSession) -> None:
    await seed_plans(session)
    await seed_menus(session)
