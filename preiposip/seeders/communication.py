"""Phase 5: message templates, support macros, KB categories and campaigns.

Everything here is admin-editable configuration. Templates carry ``{{var}}``
placeholders and list the variables they expect; campaign dates are fixed
offsets from :data:`REFERENCE_DATE`.
"""

import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import (
    Campaign,
    CannedResponse,
    EmailTemplate,
    KbCategory,
    LuckyDraw,
    ReferralCampaign,
    SmsTemplate,
)
from preiposip.seeders.base import REFERENCE_DATE, months_after, months_before, update_or_create

# (name, slug, subject, body, variables)
EMAIL_TEMPLATES: list[tuple[str, str, str, str, list[str]]] = [
    (
        "Welcome Email",
        "welcome_email",
        "Welcome to PreIPOsip - Start Your Investment Journey",
        "<p>Hello {{user_name}},</p><p>Welcome to PreIPOsip! We are excited to have you on "
        "board.</p><p>Get started by completing your KYC verification and exploring our "
        "Pre-IPO investment opportunities.</p>",
        ["user_name", "email", "referral_code"],
    ),
    (
        "KYC Approved",
        "kyc_approved",
        "KYC Verification Successful - Start Investing",
        "<p>Hello {{user_name}},</p><p>Congratulations! Your KYC verification has been "
        "approved.</p><p>You can now start investing in Pre-IPO companies.</p>",
        ["user_name", "kyc_verified_at"],
    ),
    (
        "KYC Rejected",
        "kyc_rejected",
        "KYC Verification - Action Required",
        "<p>Hello {{user_name}},</p><p>Your KYC submission was rejected for the following "
        "reason:</p><p>{{rejection_reason}}</p><p>Please resubmit your documents.</p>",
        ["user_name", "rejection_reason"],
    ),
    (
        "Payment Success",
        "payment_success",
        "Payment Received - ₹{{amount}}",
        "<p>Hello {{user_name}},</p><p>We have received your payment of ₹{{amount}} for "
        "{{plan_name}}.</p><p>Transaction ID: {{transaction_id}}</p>",
        ["user_name", "amount", "plan_name", "transaction_id", "payment_date"],
    ),
    (
        "Investment Allocation",
        "investment_allocation",
        "Shares Allocated - {{company_name}}",
        "<p>Hello {{user_name}},</p><p>You have been allocated {{quantity}} shares of "
        "{{company_name}} worth ₹{{amount}}.</p>",
        ["user_name", "company_name", "quantity", "amount"],
    ),
    (
        "Withdrawal Approved",
        "withdrawal_approved",
        "Withdrawal Request Approved - ₹{{amount}}",
        "<p>Hello {{user_name}},</p><p>Your withdrawal request of ₹{{amount}} has been approved "
        "and will be processed within 24-48 hours.</p>",
        ["user_name", "amount", "bank_account"],
    ),
    (
        "Bonus Credited",
        "bonus_credited",
        "Bonus Credited - ₹{{amount}}",
        "<p>Hello {{user_name}},</p><p>A bonus of ₹{{amount}} has been credited to your wallet "
        "for {{bonus_type}}.</p>",
        ["user_name", "amount", "bonus_type"],
    ),
    (
        "Referral Bonus",
        "referral_bonus",
        "Referral Bonus Earned - ₹{{amount}}",
        "<p>Hello {{user_name}},</p><p>You earned ₹{{amount}} as referral bonus for referring "
        "{{referred_user}}!</p>",
        ["user_name", "amount", "referred_user"],
    ),
    (
        "Lucky Draw Winner",
        "lucky_draw_winner",
        "Congratulations! You Won ₹{{prize_amount}}",
        "<p>Hello {{user_name}},</p><p>Congratulations! You are a winner in our {{draw_name}}. "
        "You won ₹{{prize_amount}}!</p>",
        ["user_name", "draw_name", "prize_amount", "prize_rank"],
    ),
    (
        "Password Reset",
        "password_reset",
        "Reset Your Password",
        "<p>Hello {{user_name}},</p><p>Click the link below to reset your password:</p>"
        "<p>{{reset_link}}</p>",
        ["user_name", "reset_link"],
    ),
]

# (name, slug, body, variables)
SMS_TEMPLATES: list[tuple[str, str, str, list[str]]] = [
    (
        "OTP Verification",
        "otp_verification",
        "Your PreIPOsip OTP is {{otp}}. Valid for 10 minutes. Do not share this with anyone.",
        ["otp"],
    ),
    (
        "Payment Success",
        "payment_success",
        "Payment of Rs.{{amount}} received for {{plan_name}}. "
        "Thank you for investing with PreIPOsip!",
        ["amount", "plan_name"],
    ),
    (
        "KYC Approved",
        "kyc_approved",
        "Your KYC has been approved! You can now start investing in Pre-IPO companies. "
        "- PreIPOsip",
        [],
    ),
    (
        "Withdrawal Approved",
        "withdrawal_approved",
        "Withdrawal of Rs.{{amount}} approved. Funds will be transferred within 24-48 hours. "
        "- PreIPOsip",
        ["amount"],
    ),
    (
        "Bonus Credited",
        "bonus_credited",
        "Bonus of Rs.{{amount}} credited to your wallet for {{bonus_type}}. "
        "Check your account now! - PreIPOsip",
        ["amount", "bonus_type"],
    ),
]

CANNED_RESPONSES: dict[str, str] = {
    "Welcome Message": "Hello! Welcome to PreIPOsip support. How can I help you today?",
    "KYC Under Review": (
        "Your KYC documents are currently under review. "
        "You will receive an update within 24-48 hours."
    ),
    "Payment Processing": (
        "Your payment is being processed. "
        "You will receive a confirmation email once it is completed."
    ),
    "Withdrawal Timeline": (
        "Withdrawal requests are typically processed within 24-48 business hours."
    ),
    "Investment Allocation": (
        "Share allocations are done on a priority basis according to your plan tier. "
        "You will be notified once shares are allocated."
    ),
    "Bonus Eligibility": (
        "Bonuses are calculated based on your investment plan and tenure. "
        "Please refer to your plan details for more information."
    ),
    "Referral Program": (
        "You can earn referral bonuses by sharing your unique referral code. "
        "Your referee must complete KYC and invest at least ₹5,000."
    ),
    "Account Security": (
        "For account security, we recommend enabling two-factor authentication "
        "and using a strong password."
    ),
    "Technical Issue": (
        "I apologize for the technical issue you are facing. "
        "Our team is looking into this and will resolve it shortly."
    ),
    "Escalation": (
        "I am escalating your query to our senior support team. "
        "You will receive a response within 4 hours."
    ),
}

# (name, slug, description, icon)
KB_CATEGORIES: list[tuple[str, str, str, str]] = [
    ("Getting Started", "getting-started", "Basic guides for new users", "rocket"),
    ("KYC Verification", "kyc-verification", "KYC submission and verification help", "id-card"),
    (
        "Investment & Plans",
        "investment-plans",
        "Understanding investment plans and SIPs",
        "trending-up",
    ),
    ("Payments & Wallet", "payments-wallet", "Payment methods and wallet management", "wallet"),
    ("Withdrawals", "withdrawals", "Withdrawal process and timelines", "bank"),
]


def _month_end(day: datetime.date) -> datetime.date:
    return months_after(day.replace(day=1), 1) - datetime.timedelta(days=1)


def referral_campaigns() -> list[dict[str, Any]]:
    return [
        {
            "name": "Standard Referral Program",
            "code": "STANDARD_REFERRAL",
            "description": (
                "Earn ₹500 for each successful referral who completes KYC "
                "and invests ₹5,000 or more."
            ),
            "bonus_amount": Decimal("500"),
            "min_investment_required": Decimal("5000"),
            "start_date": months_before(REFERENCE_DATE, 6),
            "end_date": months_after(REFERENCE_DATE, 12),
            "is_active": True,
            "max_redemptions": None,
        },
        {
            "name": "Premium Referral Campaign",
            "code": "PREMIUM_REFERRAL",
            "description": (
                "Earn ₹1,000 for each referral who invests ₹25,000 or more in Plan C."
            ),
            "bonus_amount": Decimal("1000"),
            "min_investment_required": Decimal("25000"),
            "start_date": months_before(REFERENCE_DATE, 1),
            "end_date": months_after(REFERENCE_DATE, 3),
            "is_active": True,
            "max_redemptions": 1000,
        },
    ]


def promotional_campaigns() -> list[dict[str, Any]]:
    year_start = REFERENCE_DATE.replace(month=1, day=1)
    return [
        {
            "name": "New Year Investment Offer",
            "code": "NEWYEAR2026",
            "description": "Get 10% discount on your first investment in any plan.",
            "discount_type": "percentage",
            "discount_value": Decimal("10"),
            "min_investment": Decimal("5000"),
            "max_discount_amount": Decimal("2500"),
            "start_date": year_start,
            "end_date": months_after(year_start, 2),
            "is_active": True,
            "max_redemptions": 500,
            "terms": ["Valid for first investment only", "Cannot be combined with other offers"],
            "features": ["10% instant discount", "No upper limit", "Auto-applied"],
        },
        {
            "name": "First Investment Cashback",
            "code": "FIRST500",
            "description": "Get ₹500 cashback on your first investment of ₹10,000 or more.",
            "discount_type": "fixed_amount",
            "discount_value": Decimal("500"),
            "min_investment": Decimal("10000"),
            "max_discount_amount": Decimal("500"),
            "start_date": months_before(REFERENCE_DATE, 1),
            "end_date": months_after(REFERENCE_DATE, 6),
            "is_active": True,
            "max_redemptions": None,
            "terms": ["Valid for investments ₹10,000+", "Credited within 24 hours"],
            "features": ["₹500 instant cashback", "One-time offer", "No code required"],
        },
        {
            "name": "Festival Bonus Campaign",
            "code": "FESTIVAL2026",
            "description": "Special bonus on investments during festival season.",
            "discount_type": "percentage",
            "discount_value": Decimal("5"),
            "min_investment": Decimal("5000"),
            "max_discount_amount": Decimal("1000"),
            "start_date": months_after(REFERENCE_DATE, 3),
            "end_date": months_after(REFERENCE_DATE, 4),
            "is_active": False,
            "max_redemptions": 1000,
            "terms": ["Limited period offer", "Valid on all plans"],
            "features": ["5% bonus", "Festival special", "Auto-applied"],
        },
    ]


def _monthly_draw(
    month_start: datetime.date,
    end_date: datetime.date,
    draw_date: datetime.date,
    status: str,
) -> dict[str, Any]:
    label = month_start.strftime("%B %Y")
    return {
        "name": f"Monthly Lucky Draw - {label}",
        "code": "MONTHLY_" + month_start.strftime("%b%Y").upper(),
        "description": "Monthly lucky draw for all active investors",
        "prize_pool": Decimal("50000"),
        "min_investment_required": Decimal("5000"),
        "start_date": month_start,
        "end_date": end_date,
        "draw_date": draw_date,
        "is_active": status == "active",
        "status": status,
        "prizes": [
            {"rank": 1, "amount": 25000, "quantity": 1},
            {"rank": 2, "amount": 15000, "quantity": 1},
            {"rank": 3, "amount": 10000, "quantity": 1},
        ],
        "entry_rules": {
            "min_investment": 5000,
            "min_active_months": 1,
            "entries_per_investment": 1,
        },
    }


def lucky_draws() -> list[dict[str, Any]]:
    """Last month's completed draw and the current month's open one."""
    month_start = REFERENCE_DATE.replace(day=1)
    month_end = _month_end(REFERENCE_DATE)
    last_start = months_before(month_start, 1)
    last_end = month_start - datetime.timedelta(days=1)
    return [
        _monthly_draw(
            last_start, last_end - datetime.timedelta(days=3), last_end, "completed"
        ),
        _monthly_draw(
            month_start, month_end, month_end + datetime.timedelta(days=3), "active"
        ),
    ]


async def seed_templates(session: AsyncSession) -> None:
    for name, slug, subject, body, variables in EMAIL_TEMPLATES:
        await update_or_create(
            session,
            EmailTemplate,
            {"slug": slug},
            {
                "name": name,
                "subject": subject,
                "body": body,
                "variables": variables,
                "is_active": True,
            },
        )
    print(f"  ✓ Email templates seeded: {len(EMAIL_TEMPLATES)} records")

    for name, slug, body, variables in SMS_TEMPLATES:
        await update_or_create(
            session,
            SmsTemplate,
            {"slug": slug},
            {"name": name, "body": body, "variables": variables, "is_active": True},
        )
    print(f"  ✓ SMS templates seeded: {len(SMS_TEMPLATES)} records")

    for title, content in CANNED_RESPONSES.items():
        await update_or_create(
            session,
            CannedResponse,
            {"title": title},
            {"content": content, "is_active": True},
        )
    print(f"  ✓ Canned responses seeded: {len(CANNED_RESPONSES)} records")


async def seed_kb_categories(session: AsyncSession) -> None:
    for order, (name, slug, description, icon) in enumerate(KB_CATEGORIES, start=1):
        await update_or_create(
            session,
            KbCategory,
            {"slug": slug},
            {
                "name": name,
                "description": description,
                "icon": icon,
                "display_order": order,
                "is_active": True,
            },
        )
    print(f"  ✓ KB categories seeded: {len(KB_CATEGORIES)} records")


async def seed_campaigns(session: AsyncSession) -> None:
    # Redemption counters are runtime state; only set them on insert.
    referral = referral_campaigns()
    for data in referral:
        instance, created = await update_or_create(
            session, ReferralCampaign, {"code": data["code"]}, data
        )
        if created:
            instance.current_redemptions = 0
    print(f"  ✓ Referral campaigns seeded: {len(referral)} records")

    promos = promotional_campaigns()
    for data in promos:
        instance, created = await update_or_create(session, Campaign, {"code": data["code"]}, data)
        if created:
            instance.current_redemptions = 0
    print(f"  ✓ Promotional campaigns seeded: {len(promos)} records")

    draws = lucky_draws()
    for data in draws:
        await update_or_create(session, LuckyDraw, {"code": data["code"]}, data)
    print(f"  ✓ Lucky draws seeded: {len(draws)} records")


async def run(session: AsyncSession) -> None:
    await seed_templates(session)
    await seed_kb_categories(session)
    await seed_campaigns(session)
