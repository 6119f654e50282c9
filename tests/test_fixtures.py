"""Consistency checks on the fixture data the seeders write.

Covers:
- natural keys are unique within every fixture list
- cross-seeder references (roles, sectors, plans, companies, KB categories,
  test users) point at rows another seeder creates
- fixture volumes meet the post-seed minimum row counts
- bonus, TDS and withdrawal fee arithmetic
- opening balances and seeded withdrawals stay within what the wallets hold
- portal logins, promotional materials, support tickets, lucky draws and
  profit-share eligibility
"""

from collections import Counter
from decimal import Decimal

import pytest

from preiposip.config import settings
from preiposip.models import (
    Company,
    CompanyUser,
    EmailTemplate,
    Permission,
    Plan,
    PromotionalMaterial,
    Role,
    Setting,
)
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
from preiposip.seeders.base import slugify
from preiposip.services.settings import cast_setting
from preiposip.services.validation import MINIMUM_COUNTS

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _duplicates(values) -> list:
    return [value for value, count in Counter(values).items() if count > 1]


def _setting(key: str):
    for _, setting_key, value, type_, _ in foundation.SETTINGS:
        if setting_key == key:
            return cast_setting(value, type_)
    raise KeyError(key)


# ---------------------------------------------------------------------------
# Foundation
# ---------------------------------------------------------------------------


def test_setting_keys_are_unique():
    assert _duplicates(key for _, key, _, _, _ in foundation.SETTINGS) == []


def test_every_setting_value_casts():
    for _, key, value, type_, _ in foundation.SETTINGS:
        cast_setting(value, type_)


def test_foundation_meets_minimum_counts():
    assert len(foundation.SETTINGS) >= MINIMUM_COUNTS[Setting]
    assert len(foundation.PERMISSIONS) >= MINIMUM_COUNTS[Permission]
    assert len(foundation.ROLE_PERMISSIONS) >= MINIMUM_COUNTS[Role]


def test_permissions_are_unique_and_role_grants_exist():
    assert _duplicates(foundation.PERMISSIONS) == []
    known = set(foundation.PERMISSIONS)
    for role, names in foundation.ROLE_PERMISSIONS.items():
        assert set(names) <= known, role


def test_admin_lacks_only_developer_tools():
    missing = set(foundation.PERMISSIONS) - set(foundation.ROLE_PERMISSIONS["Admin"])
    assert missing == {"system.developer.tools"}


def test_settings_read_by_investment_seeder_exist():
    for key in (
        "referral_bonus_amount",
        "tds_rate_percentage",
        "tds_threshold_amount",
        "enable_tds_deduction",
        "withdrawal_processing_fee_percentage",
    ):
        _setting(key)


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


def test_usernames_emails_and_referral_codes_are_unique():
    accounts = identity.STAFF_USERS + identity.TEST_USERS
    for field in ("username", "email", "mobile", "referral_code"):
        assert _duplicates(account[field] for account in accounts) == [], field


def test_staff_roles_exist():
    for account in identity.STAFF_USERS:
        assert account["role"] in foundation.ROLE_PERMISSIONS


def test_only_verified_users_get_opening_balances():
    for account in identity.TEST_USERS:
        if account["kyc_status"] != "verified":
            assert account["opening_balance_paise"] == 0


def test_genesis_covers_opening_balances():
    total = sum(account["opening_balance_paise"] for account in identity.TEST_USERS)
    assert 0 < total < settings.genesis_balance_paise


def test_login_credentials_list_verified_users_only():
    emails = [email for _, email in identity.login_credentials()]
    assert "admin@preiposip.com" in emails
    pending = [a["email"] for a in identity.TEST_USERS if a["kyc_status"] != "verified"]
    assert not set(pending) & set(emails)


# ---------------------------------------------------------------------------
# Catalog, plans, content
# ---------------------------------------------------------------------------


def test_companies_reference_seeded_sectors():
    sectors = {sector["slug"] for sector in foundation.SECTORS}
    for company in catalog.COMPANIES:
        assert company["sector"] in sectors, company["slug"]
    assert len(catalog.COMPANIES) >= MINIMUM_COUNTS[Company]


def test_product_slug():
    assert catalog.product_slug("techcorp-india") == "techcorp-india-shares"


def test_plans_meet_minimum_and_carry_bonus_rate():
    assert len(plans.PLANS) >= MINIMUM_COUNTS[Plan]
    assert _duplicates(plan["slug"] for plan in plans.PLANS) == []
    for plan in plans.PLANS:
        assert "progressive_bonus_rate" in plan["configs"]


def test_email_templates_meet_minimum():
    slugs = [template[1] for template in communication.EMAIL_TEMPLATES]
    assert len(slugs) >= MINIMUM_COUNTS[EmailTemplate]
    assert _duplicates(slugs) == []


def test_articles_are_filed_under_seeded_categories():
    categories = {slug for _, slug, _, _ in communication.KB_CATEGORIES}
    assert set(knowledge_base.ARTICLES) <= categories
    titles = [title for articles in knowledge_base.ARTICLES.values() for title, *_ in articles]
    assert _duplicates(slugify(title) for title in titles) == []


def test_legal_agreement_types_are_unique():
    assert _duplicates(agreement["type"] for agreement in legal.AGREEMENTS) == []
    assert len(legal.AGREEMENTS) == 7


def test_render_document_escapes_html():
    content = legal.render_document("Terms & Conditions", "1.0.0", [("A <b>", ["x & y"])])
    assert "<h1>Terms &amp; Conditions</h1>" in content
    assert "<h2>1. A &lt;b&gt;</h2>" in content
    assert "<p>x &amp; y</p>" in content
    assert "Version 1.0.0" in content


def test_disclosure_module_codes_are_unique():
    assert _duplicates(module["code"] for module in disclosures.MODULES) == []


def test_campaign_codes_are_unique():
    codes = [c["code"] for c in communication.referral_campaigns()]
    codes += [c["code"] for c in communication.promotional_campaigns()]
    assert _duplicates(codes) == []
    assert investments.REFERRAL_CAMPAIGN_CODE in codes


def test_campaign_windows_are_ordered():
    for campaign in communication.referral_campaigns():
        assert campaign["start_date"] < campaign["end_date"]


# ---------------------------------------------------------------------------
# Investments
# ---------------------------------------------------------------------------


def test_subscription_flows_reference_seeded_rows():
    users = {account["username"]: account for account in identity.TEST_USERS}
    plan_amounts = {plan["slug"]: plan["monthly_amount"] for plan in plans.PLANS}
    companies = {company["slug"] for company in catalog.COMPANIES}
    for username, plan_slug, company_slug, payments, amount in investments.SUBSCRIPTION_FLOWS:
        assert users[username]["kyc_status"] == "verified"
        assert plan_amounts[plan_slug] == amount
        assert company_slug in companies
        assert payments >= 1


def test_referrals_pair_distinct_users():
    usernames = {account["username"] for account in identity.TEST_USERS}
    for referrer, referred, days in investments.REFERRALS:
        assert referrer != referred
        assert {referrer, referred} <= usernames
        assert days > 0


def test_withdrawals_fit_opening_balances():
    balances = {a["username"]: a["opening_balance_paise"] for a in identity.TEST_USERS}
    minimum = _setting("min_withdrawal_amount")
    for reference, username, amount, status, _ in investments.WITHDRAWALS:
        assert reference.startswith(f"WD-{username.upper()}-")
        assert status in ("pending", "completed")
        assert amount >= minimum
        assert amount * 100 <= balances[username]


@pytest.mark.parametrize(
    ("total", "rate", "expected"),
    [
        (Decimal("10000"), Decimal("0.5"), Decimal("50")),
        (Decimal("20000"), Decimal("0.75"), Decimal("150")),
        (Decimal("50000"), Decimal("1.0"), Decimal("500")),
        (Decimal("5100"), Decimal("0.5"), Decimal("26")),
    ],
)
def test_progressive_bonus(total, rate, expected):
    assert investments.progressive_bonus(total, rate) == expected


def test_tds_is_zero_below_threshold():
    assert investments.tds_on(Decimal("9999.99"), Decimal("10"), Decimal("10000")) == 0


def test_tds_applies_at_threshold():
    assert investments.tds_on(Decimal("10000"), Decimal("10"), Decimal("10000")) == Decimal(
        "1000.00"
    )
    assert investments.tds_on(Decimal("12345.67"), Decimal("10"), Decimal("10000")) == Decimal(
        "1234.57"
    )


@pytest.mark.parametrize(
    ("amount_paise", "pct", "expected"),
    [
        (500_000, Decimal("1"), 5_000),
        (12_345, Decimal("1"), 123),
        (12_350, Decimal("1"), 124),
        (100_000, Decimal("0"), 0),
    ],
)
def test_withdrawal_fee_paise(amount_paise, pct, expected):
    assert investments.withdrawal_fee_paise(amount_paise, pct) == expected


# ---------------------------------------------------------------------------
# Company portal and promotions
# ---------------------------------------------------------------------------


def test_portal_email_strips_spaces_and_case():
    assert company_users.portal_email("TechCorp India") == "admin@techcorpindia.com"
    assert company_users.portal_email("HealthPlus Solutions") == "admin@healthplussolutions.com"


def test_one_portal_login_per_company():
    emails = [email for _, email in company_users.portal_credentials()]
    assert len(emails) == len(catalog.COMPANIES) >= MINIMUM_COUNTS[CompanyUser]
    assert _duplicates(emails) == []
    investor_emails = {a["email"] for a in identity.STAFF_USERS + identity.TEST_USERS}
    assert not set(emails) & investor_emails


def test_promotional_materials_meet_minimum_and_categories():
    titles = [material[0] for material in promotions.MATERIALS]
    assert len(titles) >= MINIMUM_COUNTS[PromotionalMaterial]
    assert _duplicates(titles) == []
    assert {material[2] for material in promotions.MATERIALS} == set(promotions.CATEGORIES)


def test_material_values_only_preview_media():
    video = promotions.material_values(*promotions.MATERIALS[5])
    assert video["type"] == "video"
    assert video["file_url"] == "/storage/materials/videos/preipo-explainer-60s.mp4"
    assert video["preview_url"] == video["file_url"]
    assert video["thumbnail_url"].endswith("/preipo-sip-explainer-video-thumb.jpg")

    guide = promotions.material_values(*promotions.MATERIALS[8])
    assert guide["type"] == "document"
    assert guide["preview_url"] is None


# ---------------------------------------------------------------------------
# Engagement
# ---------------------------------------------------------------------------


def test_support_tickets_reference_seeded_users_and_staff():
    usernames = {account["username"] for account in identity.TEST_USERS}
    staff = {account["username"] for account in identity.STAFF_USERS}
    assert set(engagement.TICKET_ASSIGNEES.values()) <= staff
    for username, category, priority, status, _, _ in engagement.SUPPORT_TICKETS:
        assert username in usernames
        assert category in engagement.TICKET_ASSIGNEES
        assert priority in ("low", "medium", "high", "urgent")
        assert status in ("open", "in_progress", "resolved", "closed")


def test_ticket_codes_are_unique_and_stable():
    codes = [engagement.ticket_code(ticket[0]) for ticket in engagement.SUPPORT_TICKETS]
    assert _duplicates(codes) == []
    assert all(code.startswith("TKT-") and len(code) == 12 for code in codes)
    assert engagement.ticket_code("testuser1") == codes[0]


def test_lucky_draws_include_a_completed_draw():
    draws = communication.lucky_draws()
    assert [draw["code"] for draw in draws] == ["MONTHLY_DEC2025", "MONTHLY_JAN2026"]
    completed = draws[0]
    assert completed["status"] == "completed"
    assert completed["is_active"] is False
    assert completed["end_date"] < completed["draw_date"] < draws[1]["start_date"]
    prize_total = sum(prize["amount"] for prize in completed["prizes"])
    assert prize_total == completed["prize_pool"]


def test_rank_winners_is_stable_and_bounded():
    usernames = [flow[0] for flow in investments.SUBSCRIPTION_FLOWS]
    winners = engagement.rank_winners("MONTHLY_DEC2025", usernames, 3)
    assert len(winners) == len(set(winners)) == 3
    assert set(winners) <= set(usernames)
    assert engagement.rank_winners("MONTHLY_DEC2025", list(reversed(usernames)), 3) == winners


def test_rank_winners_with_fewer_entries_than_prizes():
    assert engagement.rank_winners("MONTHLY_DEC2025", ["testuser1"], 3) == ["testuser1"]
    assert engagement.rank_winners("MONTHLY_DEC2025", [], 3) == []


def test_some_subscription_flows_qualify_for_profit_share():
    eligible = [
        flow[0]
        for flow in investments.SUBSCRIPTION_FLOWS
        if flow[3] >= engagement.PROFIT_SHARE_MIN_PAYMENTS
    ]
    assert eligible == ["testuser1", "testuser2", "testuser3"]
