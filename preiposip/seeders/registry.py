"""Seeder registry: CLI names, phase order and the tables each seeder writes."""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.exceptions import UnknownSeederError
from preiposip.seeders import (
    catalog,
    communication,
    company_users,
    disclosures,
    engagement,
    foundation,
    identity,
    investments,
    knowledge_base,
    legal,
    plans,
    promotions,
)

ALL = "all"

PHASES: dict[int, str] = {
    1: "Foundation",
    2: "Identity & Access",
    3: "Companies & Products",
    4: "Plans",
    5: "Communication & Campaigns",
    6: "Test data (optional)",
}


@dataclass(frozen=True)
class SeederSpec:
    name: str
    phase: int
    run: Callable[[AsyncSession], Awaitable[None]]
    description: str
    tables: frozenset[str]
    test_data: bool = False


SEEDERS: list[SeederSpec] = [
    SeederSpec(
        name="foundation",
        phase=1,
        run=foundation.run,
        description="Settings, permissions, roles, sectors, feature flags, KYC templates",
        tables=frozenset(
            {
                "settings",
                "permissions",
                "roles",
                "role_permissions",
                "sectors",
                "feature_flags",
                "kyc_rejection_templates",
            }
        ),
    ),
    SeederSpec(
        name="legal",
        phase=1,
        run=legal.run,
        description="Terms, privacy, cookie, risk, refund, AML and SEBI agreements",
        tables=frozenset({"legal_agreements"}),
    ),
    SeederSpec(
        name="identity",
        phase=2,
        run=identity.run,
        description="Staff and test users, KYC, wallets, admin ledger genesis",
        tables=frozenset(
            {
                "users",
                "user_roles",
                "user_profiles",
                "user_kyc",
                "user_settings",
                "wallets",
                "transactions",
                "admin_ledger_entries",
            }
        ),
    ),
    SeederSpec(
        name="catalog",
        phase=3,
        run=catalog.run,
        description="Companies, products, price history, bulk purchases, share listings",
        tables=frozenset(
            {
                "companies",
                "products",
                "product_highlights",
                "product_founders",
                "product_funding_rounds",
                "product_key_metrics",
                "product_risk_disclosures",
                "product_price_history",
                "bulk_purchases",
                "company_share_listings",
            }
        ),
    ),
    SeederSpec(
        name="company-users",
        phase=3,
        run=company_users.run,
        description="Company portal admin logins, one per company",
        tables=frozenset({"company_users"}),
    ),
    SeederSpec(
        name="disclosures",
        phase=3,
        run=disclosures.run,
        description="Disclosure module definitions with JSON schemas",
        tables=frozenset({"disclosure_modules"}),
    ),
    SeederSpec(
        name="plans",
        phase=4,
        run=plans.run,
        description="SIP plans, plan features and configs, navigation menus",
        tables=frozenset({"plans", "plan_features", "plan_configs", "menus", "menu_items"}),
    ),
    SeederSpec(
        name="communication",
        phase=5,
        run=communication.run,
        description="Email/SMS templates, canned responses, KB categories, campaigns",
        tables=frozenset(
            {
                "email_templates",
                "sms_templates",
                "canned_responses",
                "kb_categories",
                "referral_campaigns",
                "campaigns",
                "lucky_draws",
            }
        ),
    ),
    SeederSpec(
        name="knowledge-base",
        phase=5,
        run=knowledge_base.run,
        description="Published help articles",
        tables=frozenset({"kb_articles"}),
    ),
    SeederSpec(
        name="promotions",
        phase=5,
        run=promotions.run,
        description="Banners, videos and documents for users to share",
        tables=frozenset({"promotional_materials"}),
    ),
    SeederSpec(
        name="investments",
        phase=6,
        run=investments.run,
        description="Subscriptions, allocations, bonuses, referrals, withdrawals",
        tables=frozenset(
            {
                "subscriptions",
                "investments",
                "payments",
                "user_investments",
                "bonus_transactions",
                "referrals",
                "withdrawals",
                "transactions",
                "bulk_purchases",
            }
        ),
        test_data=True,
    ),
    SeederSpec(
        name="engagement",
        phase=6,
        run=engagement.run,
        description="Support tickets, lucky draw entries and winners, profit shares",
        tables=frozenset(
            {
                "support_tickets",
                "support_messages",
                "lucky_draw_entries",
                "profit_shares",
                "user_profit_shares",
            }
        ),
        test_data=True,
    ),
]

_BY_NAME: dict[str, SeederSpec] = {spec.name: spec for spec in SEEDERS}


def seeder_names() -> list[str]:
    return [spec.name for spec in SEEDERS]


def get_seeder(name: str) -> SeederSpec:
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownSeederError(name) from None


def select_seeders(names: Iterable[str] | None = None) -> list[SeederSpec]:
    """Resolve CLI names to seeders in phase order.

    ``None``, an empty selection or ``"all"`` anywhere in *names* selects
    every seeder. Duplicates are collapsed; unknown names raise
    :exc:`UnknownSeederError` before anything runs.
    """
    requested = list(names or [])
    if not requested or ALL in requested:
        return list(SEEDERS)

    wanted = {get_seeder(name).name for name in requested}
    return [spec for spec in SEEDERS if spec.name in wanted]
