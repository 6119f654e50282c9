"""Phase 1: platform settings, permissions and roles, sectors, flags and KYC templates.

Nothing here depends on another table, so this seeder always runs first.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import FeatureFlag, KycRejectionTemplate, Permission, Role, Sector, Setting
from preiposip.seeders.base import first_or_create, update_or_create
from preiposip.services.access import sync_role_permissions

logger = logging.getLogger(__name__)

# (group, key, value, type, description)
SETTINGS: list[tuple[str, str, str, str, str]] = [
    ("system", "platform_name", "PreIPOsip", "string", "Platform display name"),
    ("system", "platform_url", "https://preiposip.com", "string", "Primary platform URL"),
    ("system", "support_email", "support@preiposip.com", "string", "Support contact email"),
    ("system", "support_phone", "+91-9876543210", "string", "Support contact phone"),
    ("system", "maintenance_mode", "false", "boolean", "Enable maintenance mode"),
    ("system", "timezone", "Asia/Kolkata", "string", "Platform timezone"),
    ("system", "currency", "INR", "string", "Platform currency"),
    ("system", "currency_symbol", "₹", "string", "Currency symbol"),
    ("investment", "min_investment_amount", "5000", "integer", "Minimum investment amount in INR"),
    (
        "investment",
        "max_investment_amount",
        "1000000",
        "integer",
        "Maximum investment amount in INR",
    ),
    ("investment", "allow_partial_exits", "true", "boolean", "Allow partial investment exits"),
    ("investment", "exit_penalty_percentage", "2.0", "float", "Early exit penalty percentage"),
    (
        "investment",
        "allocation_priority",
        "plan_tier",
        "string",
        "Allocation priority logic (plan_tier, fcfs, proportional)",
    ),
    (
        "investment",
        "enable_auto_allocation",
        "true",
        "boolean",
        "Enable automatic share allocation",
    ),
    ("bonus", "enable_progressive_bonus", "true", "boolean", "Enable progressive monthly bonuses"),
    ("bonus", "enable_milestone_bonus", "true", "boolean", "Enable milestone bonuses"),
    ("bonus", "enable_referral_bonus", "true", "boolean", "Enable referral bonuses"),
    ("bonus", "enable_consistency_bonus", "true", "boolean", "Enable consistency streak bonuses"),
    (
        "bonus",
        "progressive_bonus_calculation",
        "monthly",
        "string",
        "Progressive bonus frequency (monthly, quarterly)",
    ),
    (
        "bonus",
        "bonus_credit_timing",
        "immediate",
        "string",
        "When to credit bonuses (immediate, month_end)",
    ),
    (
        "kyc",
        "kyc_required_for_investment",
        "true",
        "boolean",
        "Require KYC verification before investment",
    ),
    ("kyc", "kyc_auto_approval_enabled", "false", "boolean", "Enable automatic KYC approval"),
    ("kyc", "kyc_document_expiry_days", "365", "integer", "KYC document validity in days"),
    (
        "kyc",
        "kyc_required_documents",
        '["aadhaar", "pan", "bank_statement"]',
        "json",
        "Required KYC documents",
    ),
    ("kyc", "kyc_min_age", "18", "integer", "Minimum age for KYC approval"),
    ("kyc", "kyc_max_age", "75", "integer", "Maximum age for KYC approval"),
    ("withdrawal", "min_withdrawal_amount", "500", "integer", "Minimum withdrawal amount in INR"),
    ("withdrawal", "max_withdrawal_per_day", "100000", "integer", "Maximum daily withdrawal limit"),
    (
        "withdrawal",
        "withdrawal_processing_fee_percentage",
        "1.0",
        "float",
        "Withdrawal processing fee percentage",
    ),
    (
        "withdrawal",
        "withdrawal_auto_approval_threshold",
        "10000",
        "integer",
        "Auto-approve withdrawals below this amount",
    ),
    (
        "withdrawal",
        "withdrawal_processing_time_hours",
        "24",
        "integer",
        "Expected withdrawal processing time",
    ),
    ("payment", "razorpay_enabled", "true", "boolean", "Enable Razorpay gateway"),
    ("payment", "payment_timeout_minutes", "15", "integer", "Payment session timeout in minutes"),
    ("payment", "enable_upi", "true", "boolean", "Enable UPI payments"),
    ("payment", "enable_cards", "true", "boolean", "Enable card payments"),
    ("payment", "enable_netbanking", "true", "boolean", "Enable netbanking payments"),
    ("referral", "referral_bonus_amount", "500", "integer", "Referral bonus amount in INR"),
    (
        "referral",
        "referral_minimum_investment",
        "5000",
        "integer",
        "Minimum investment to earn referral bonus",
    ),
    ("referral", "referral_max_level", "3", "integer", "Maximum referral levels (multi-level)"),
    ("referral", "enable_referral_system", "true", "boolean", "Enable referral system"),
    ("lucky_draw", "enable_lucky_draws", "true", "boolean", "Enable lucky draw feature"),
    (
        "lucky_draw",
        "lucky_draw_frequency",
        "monthly",
        "string",
        "Lucky draw frequency (monthly, quarterly)",
    ),
    (
        "lucky_draw",
        "lucky_draw_min_investment",
        "5000",
        "integer",
        "Minimum investment for lucky draw entry",
    ),
    (
        "lucky_draw",
        "lucky_draw_entries_per_investment",
        "1",
        "integer",
        "Draw entries per investment",
    ),
    ("profit_sharing", "enable_profit_sharing", "true", "boolean", "Enable profit sharing feature"),
    ("profit_sharing", "profit_share_frequency", "quarterly", "string", "Profit sharing frequency"),
    (
        "profit_sharing",
        "profit_share_min_months",
        "6",
        "integer",
        "Minimum active months for profit sharing eligibility",
    ),
    ("notification", "enable_email_notifications", "true", "boolean", "Enable email notifications"),
    ("notification", "enable_sms_notifications", "true", "boolean", "Enable SMS notifications"),
    ("notification", "enable_push_notifications", "true", "boolean", "Enable push notifications"),
    ("notification", "sms_provider", "msg91", "string", "SMS provider (msg91, twilio)"),
    ("notification", "email_provider", "smtp", "string", "Email provider"),
    ("security", "enable_2fa", "false", "boolean", "Require 2FA for all users"),
    ("security", "session_timeout_minutes", "60", "integer", "Session timeout in minutes"),
    ("security", "max_login_attempts", "5", "integer", "Maximum login attempts before lockout"),
    ("security", "lockout_duration_minutes", "30", "integer", "Account lockout duration"),
    ("security", "password_expiry_days", "90", "integer", "Password expiry in days (0 = never)"),
    (
        "security",
        "require_password_history",
        "5",
        "integer",
        "Number of previous passwords to prevent reuse",
    ),
    ("tds", "tds_rate_percentage", "10", "float", "TDS deduction rate percentage"),
    ("tds", "tds_threshold_amount", "10000", "integer", "Minimum amount for TDS deduction"),
    ("tds", "enable_tds_deduction", "true", "boolean", "Enable TDS deductions"),
]

# module -> actions; flattened to "module.action" names in this order.
PERMISSION_GROUPS: list[tuple[str, list[str]]] = [
    ("users", ["view", "create", "edit", "delete", "suspend", "activate"]),
    ("kyc", ["view", "approve", "reject", "edit"]),
    ("investments", ["view", "create", "edit", "delete", "allocate"]),
    ("payments", ["view", "process", "refund"]),
    ("withdrawals", ["view", "approve", "reject", "process"]),
    ("plans", ["view", "create", "edit", "delete"]),
    ("products", ["view", "create", "edit", "delete"]),
    ("companies", ["view", "create", "edit", "delete"]),
    ("bulk_purchases", ["view", "create", "edit", "delete"]),
    ("bonuses", ["view", "create", "edit", "delete", "calculate"]),
    ("campaigns", ["view", "create", "edit", "delete"]),
    ("lucky_draws", ["view", "create", "execute", "edit"]),
    ("profit_shares", ["view", "create", "distribute", "edit"]),
    ("support", ["view", "respond", "assign", "close"]),
    ("content", ["view", "create", "edit", "delete", "publish"]),
    ("settings", ["view", "edit"]),
    ("reports", ["view", "generate", "export"]),
    ("audit", ["view"]),
    ("system.developer", ["tools"]),
]

PERMISSIONS: list[str] = [
    f"{module}.{action}" for module, actions in PERMISSION_GROUPS for action in actions
]

ROLE_PERMISSIONS: dict[str, list[str]] = {
    "Super Admin": PERMISSIONS,
    "Admin": [name for name in PERMISSIONS if not name.startswith("system.developer")],
    "Support Agent": [
        "users.view",
        "kyc.view",
        "support.view",
        "support.respond",
        "support.assign",
        "support.close",
        "investments.view",
        "payments.view",
        "withdrawals.view",
    ],
    "KYC Reviewer": ["users.view", "kyc.view", "kyc.approve", "kyc.reject", "kyc.edit"],
    "User": [],
}

SECTORS: list[dict[str, str]] = [
    {"name": "Technology", "slug": "technology", "description": "Software, Hardware, IT Services"},
    {
        "name": "Healthcare",
        "slug": "healthcare",
        "description": "Medical, Pharmaceuticals, Biotech",
    },
    {
        "name": "Financial Services",
        "slug": "financial-services",
        "description": "Banking, FinTech, Insurance",
    },
    {"name": "E-commerce", "slug": "ecommerce", "description": "Online Retail, Marketplaces"},
    {"name": "Education", "slug": "education", "description": "EdTech, Online Learning, Training"},
    {"name": "Real Estate", "slug": "real-estate", "description": "PropTech, Real Estate Services"},
    {
        "name": "Manufacturing",
        "slug": "manufacturing",
        "description": "Industrial, Automotive, Consumer Goods",
    },
    {"name": "Energy", "slug": "energy", "description": "Renewable Energy, CleanTech, Power"},
    {
        "name": "Consumer Services",
        "slug": "consumer-services",
        "description": "Food, Hospitality, Lifestyle",
    },
    {
        "name": "Logistics",
        "slug": "logistics",
        "description": "Supply Chain, Transportation, Delivery",
    },
    {
        "name": "Agriculture",
        "slug": "agriculture",
        "description": "AgriTech, Farming, Food Production",
    },
    {
        "name": "Media & Entertainment",
        "slug": "media-entertainment",
        "description": "Content, Gaming, Streaming",
    },
    {
        "name": "Telecommunications",
        "slug": "telecommunications",
        "description": "Telecom, Networking, Communication",
    },
    {
        "name": "Travel & Tourism",
        "slug": "travel-tourism",
        "description": "Hospitality, Travel Tech, Tourism",
    },
    {"name": "Others", "slug": "others", "description": "Miscellaneous sectors"},
]

# (key, name, description); every flag is active and enabled unless listed in DISABLED_FLAGS.
FEATURE_FLAGS: list[tuple[str, str, str]] = [
    ("enable_user_registration", "Enable User Registration", "Allow new user registrations"),
    ("enable_user_login", "Enable User Login", "Allow user login"),
    ("enable_investment", "Enable Investment", "Allow new investments"),
    ("enable_withdrawal", "Enable Withdrawal", "Allow withdrawal requests"),
    ("enable_kyc_submission", "Enable KYC Submission", "Allow KYC document submission"),
    ("enable_referral_system", "Enable Referral System", "Enable referral functionality"),
    ("enable_lucky_draws", "Enable Lucky Draws", "Enable lucky draw participation"),
    ("enable_profit_sharing", "Enable Profit Sharing", "Enable profit sharing distributions"),
    ("enable_bonuses", "Enable Bonuses", "Enable bonus calculations"),
    ("enable_support_tickets", "Enable Support Tickets", "Allow support ticket creation"),
    ("enable_live_chat", "Enable Live Chat", "Enable live chat support"),
    ("enable_company_portal", "Enable Company Portal", "Allow company user access"),
    ("enable_blog", "Enable Blog", "Display blog posts"),
    (
        "enable_promotional_campaigns",
        "Enable Promotional Campaigns",
        "Enable promotional campaigns",
    ),
    ("enable_mobile_app", "Enable Mobile App", "Enable mobile app API access"),
    ("enable_notifications", "Enable Notifications", "Send notifications to users"),
    ("enable_email_verification", "Enable Email Verification", "Require email verification"),
    ("enable_mobile_verification", "Enable Mobile Verification", "Require mobile verification"),
    ("enable_2fa", "Enable 2FA", "Enable two-factor authentication"),
    ("maintenance_mode", "Maintenance Mode", "Enable maintenance mode"),
]

DISABLED_FLAGS = frozenset({"enable_2fa", "maintenance_mode"})

KYC_REJECTION_TEMPLATES: list[dict[str, str]] = [
    {
        "name": "blurred_document",
        "title": "Blurred Document",
        "category": "document_quality",
        "reason": (
            "The submitted document is blurred or unclear. "
            "Please upload a clear, high-resolution image."
        ),
        "message": "Your document could not be verified due to poor image quality.",
    },
    {
        "name": "incomplete_document",
        "title": "Incomplete Document",
        "category": "document_quality",
        "reason": (
            "The document appears to be incomplete or cut off. Please upload the complete document."
        ),
        "message": "Please provide the complete document without any parts cut off.",
    },
    {
        "name": "expired_document",
        "title": "Expired Document",
        "category": "document_validity",
        "reason": "The submitted document has expired. Please upload a valid, unexpired document.",
        "message": "Please upload an unexpired document.",
    },
    {
        "name": "name_mismatch",
        "title": "Name Mismatch",
        "category": "identity_mismatch",
        "reason": (
            "The name on the document does not match your registered name. "
            "Please ensure all documents have consistent information."
        ),
        "message": "Name mismatch detected across documents.",
    },
    {
        "name": "address_mismatch",
        "title": "Address Mismatch",
        "category": "identity_mismatch",
        "reason": (
            "The address on the document does not match your registered address. "
            "Please submit documents with matching address details."
        ),
        "message": "Address mismatch detected across documents.",
    },
    {
        "name": "invalid_document_type",
        "title": "Invalid Document Type",
        "category": "document_type",
        "reason": (
            "The submitted document type is not accepted. "
            "Please upload a valid government-issued ID (Aadhaar, PAN, Passport, etc.)."
        ),
        "message": "This document type is not accepted for KYC verification.",
    },
    {
        "name": "not_readable",
        "title": "Document Not Readable",
        "category": "document_quality",
        "reason": (
            "The text on the document is not readable. "
            "Please upload a clearer image with visible text."
        ),
        "message": "Document text is not readable.",
    },
    {
        "name": "minor_age",
        "title": "Minor Age",
        "category": "eligibility",
        "reason": (
            "Your age is below the minimum requirement of 18 years. "
            "Unfortunately, we cannot process your KYC at this time."
        ),
        "message": "Minimum age requirement not met.",
    },
    {
        "name": "bank_details_mismatch",
        "title": "Bank Details Mismatch",
        "category": "financial_mismatch",
        "reason": (
            "The bank account details do not match your KYC information. "
            "Please verify and resubmit."
        ),
        "message": "Bank account information does not match KYC details.",
    },
    {
        "name": "suspected_fraud",
        "title": "Suspected Fraud",
        "category": "security",
        "reason": (
            "We detected potential discrepancies in your submission. "
            "Please contact support for further assistance."
        ),
        "message": "Verification could not be completed. Please contact support.",
    },
]


async def seed_settings(session: AsyncSession) -> None:
    for group, key, value, type_, description in SETTINGS:
        values: dict[str, Any] = {
            "group": group,
            "value": value,
            "type": type_,
            "description": description,
        }
        await update_or_create(session, Setting, {"key": key}, values)
    print(f"  ✓ Settings seeded: {len(SETTINGS)} records")


async def seed_permissions_and_roles(session: AsyncSession) -> None:
    for name in PERMISSIONS:
        await first_or_create(session, Permission, {"name": name})

    for role_name, permission_names in ROLE_PERMISSIONS.items():
        role, _ = await first_or_create(session, Role, {"name": role_name})
        granted = await sync_role_permissions(session, role.id, permission_names)
        logger.debug("Role %s holds %d permissions", role_name, granted)

    print(f"  ✓ Permissions seeded: {len(PERMISSIONS)} records")
    print(f"  ✓ Roles seeded: {len(ROLE_PERMISSIONS)} records")


async def seed_sectors(session: AsyncSession) -> None:
    for sector in SECTORS:
        values = {"name": sector["name"], "description": sector["description"], "is_active": True}
        await update_or_create(session, Sector, {"slug": sector["slug"]}, values)
    print(f"  ✓ Sectors seeded: {len(SECTORS)} records")


async def seed_feature_flags(session: AsyncSession) -> None:
    for key, name, description in FEATURE_FLAGS:
        enabled = key not in DISABLED_FLAGS
        values = {
            "name": name,
            "description": description,
            "is_active": enabled,
            "is_enabled": enabled,
        }
        await update_or_create(session, FeatureFlag, {"key": key}, values)
    print(f"  ✓ Feature flags seeded: {len(FEATURE_FLAGS)} records")


async def seed_kyc_rejection_templates(session: AsyncSession) -> None:
    for template in KYC_REJECTION_TEMPLATES:
        values = {k: v for k, v in template.items() if k != "name"} | {"is_active": True}
        await update_or_create(session, KycRejectionTemplate, {"name": template["name"]}, values)
    print(f"  ✓ KYC rejection templates seeded: {len(KYC_REJECTION_TEMPLATES)} records")


async def run(session: AsyncSession) -> None:
    await seed_settings(session)
    await seed_permissions_and_roles(session)
    await seed_sectors(session)
    await seed_feature_flags(session)
    await seed_kyc_rejection_templates(session)
