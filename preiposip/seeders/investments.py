"""Phase 6 (test data only): SIP subscriptions, allocations, bonuses, referrals, withdrawals.

Every rupee that moves is posted through :mod:`preiposip.services.wallet`
under a deterministic transaction id, and every share allocated is drawn
from the product's bulk purchase, so the ledger checks hold after each run.
"""

import datetime
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.exceptions import SeedingError
from preiposip.models import (
    BonusTransaction,
    BulkPurchase,
    Company,
    Investment,
    Payment,
    Plan,
    PlanConfig,
    Product,
    Referral,
    ReferralCampaign,
    Subscription,
    User,
    UserInvestment,
    Wallet,
    Withdrawal,
)
from preiposip.seeders.base import (
    REFERENCE_DATE,
    REFERENCE_TIME,
    det_digits,
    det_letters,
    first_or_create,
    months_after,
    months_before,
    require,
    update_or_create,
)
from preiposip.seeders.catalog import product_slug, refresh_share_listing
from preiposip.services.settings import setting_value
from preiposip.services.wallet import (
    GENESIS_ACCOUNT_USERNAME,
    format_rupees,
    get_or_create_wallet,
    post_transaction,
    rupees_to_paise,
    transfer,
)

logger = logging.getLogger(__name__)

# (username, plan slug, company slug, payments, amount per payment)
SUBSCRIPTION_FLOWS: list[tuple[str, str, str, int, Decimal]] = [
    ("testuser1", "plan-a-starter", "techcorp-india", 2, Decimal("5000")),
    ("testuser2", "plan-b-growth", "financehub-technologies", 2, Decimal("10000")),
    ("testuser3", "plan-c-premium", "greenenergy-innovations", 2, Decimal("25000")),
    ("testuser4", "plan-a-starter", "healthplus-solutions", 1, Decimal("5000")),
    ("testuser5", "plan-b-growth", "edutech-academy", 1, Decimal("10000")),
]

# (referrer, referred, days before REFERENCE_TIME the referral completed)
REFERRALS: list[tuple[str, str, int]] = [
    ("testuser1", "testuser4", 10),
    ("testuser2", "testuser5", 8),
]

REFERRAL_CAMPAIGN_CODE = "STANDARD_REFERRAL"

# (reference, username, amount, status, days before REFERENCE_TIME requested)
WITHDRAWALS: list[tuple[str, str, Decimal, str, int]] = [
    ("WD-TESTUSER2-0001", "testuser2", Decimal("5000"), "completed", 5),
    ("WD-TESTUSER1-0001", "testuser1", Decimal("2000"), "pending", 1),
]


def _at_reference_time(day: datetime.date) -> datetime.datetime:
    return datetime.datetime.combine(day, REFERENCE_TIME.timetz())


def progressive_bonus(total: Decimal, rate_percentage: Decimal) -> Decimal:
    """Return ``total * rate / 100`` rounded half up to the whole rupee."""
    return (total * rate_percentage / 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def tds_on(gross: Decimal, rate_percentage: Decimal, threshold: Decimal) -> Decimal:
    """Return the TDS deducted from *gross*, zero below *threshold*."""
    if gross < threshold:
        return Decimal("0")
    return (gross * rate_percentage / 100).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def withdrawal_fee_paise(amount_paise: int, fee_percentage: Decimal) -> int:
    fee = Decimal(amount_paise) * fee_percentage / 100
    return int(fee.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


async def _plan_config(session: AsyncSession, plan: Plan, key: str) -> Any:
    config = await require(session, PlanConfig, "plans", plan_id=plan.id, config_key=key)
    return config.value


async def _allocate(
    session: AsyncSession,
    payment: Payment,
    user: User,
    product: Product,
    paid_at: datetime.datetime,
) -> UserInvestment | None:
    """Allocate whole shares for *payment* from the product's bulk purchase."""
    units = int(payment.amount // product.price_per_share)
    if units <= 0:
        return None

    purchase = await require(session, BulkPurchase, "catalog", product_id=product.id)
    value = product.price_per_share * units
    allocation, created = await first_or_create(
        session,
        UserInvestment,
        {"payment_id": payment.id},
        {
            "user_id": user.id,
            "product_id": product.id,
            "bulk_purchase_id": purchase.id,
            "units": units,
            "price_per_unit": product.price_per_share,
            "value_allocated": value,
            "allocated_at": paid_at,
        },
    )
    if created:
        available = purchase.total_quantity - purchase.quantity_allocated
        if units > available:
            raise SeedingError(
                f"Bulk purchase for {product.slug} has {available} units left, "
                f"cannot allocate {units}"
            )
        purchase.quantity_allocated += units
        purchase.value_remaining -= value
        await session.flush()
    return allocation


async def seed_subscription_flow(
    session: AsyncSession,
    flow: tuple[str, str, str, int, Decimal],
    admin: User,
    admin_wallet: Wallet,
) -> None:
    username, plan_slug, company_slug, payments, amount = flow
    user = await require(session, User, "identity", username=username)
    plan = await require(session, Plan, "plans", slug=plan_slug)
    company = await require(session, Company, "catalog", slug=company_slug)
    product = await require(session, Product, "catalog", slug=product_slug(company_slug))
    wallet, _ = await get_or_create_wallet(session, user)

    code = "SUB" + det_letters(f"subscription:{username}:{plan_slug}", 8)
    subscription, _ = await update_or_create(
        session,
        Subscription,
        {"user_id": user.id, "plan_id": plan.id},
        {
            "subscription_code": code,
            "amount": amount,
            "status": "active",
            "start_date": months_before(REFERENCE_DATE, payments),
            "end_date": months_after(REFERENCE_DATE, plan.duration_months - payments),
            "next_payment_date": REFERENCE_DATE,
            "consecutive_payments_count": payments,
        },
    )
    total = amount * payments
    await update_or_create(
        session,
        Investment,
        {"subscription_id": subscription.id},
        {
            "user_id": user.id,
            "product_id": product.id,
            "company_id": company.id,
            "investment_code": "INV" + det_digits(f"investment:{code}", 10),
            "total_amount": total,
            "status": "active",
            "invested_at": _at_reference_time(subscription.start_date),
        },
    )

    for installment in range(1, payments + 1):
        paid_at = _at_reference_time(months_before(REFERENCE_DATE, payments - installment + 1))
        payment, _ = await first_or_create(
            session,
            Payment,
            {"subscription_id": subscription.id, "installment_number": installment},
            {
                "user_id": user.id,
                "amount": amount,
                "status": "paid",
                "gateway": "razorpay",
                "gateway_payment_id": (
                    "pay_test_" + det_digits(f"payment:{code}:{installment}", 14)
                ),
                "paid_at": paid_at,
            },
        )
        txn_prefix = f"SIP-{code}-{installment:02d}"
        await post_transaction(
            session,
            wallet,
            transaction_id=f"{txn_prefix}-DEPOSIT",
            type="deposit",
            amount_paise=rupees_to_paise(amount),
            description=f"Payment received for {plan.name}",
            reference_type="Payment",
            reference_id=payment.id,
            owner=username,
        )
        allocation = await _allocate(session, payment, user, product, paid_at)
        if allocation is not None:
            await post_transaction(
                session,
                wallet,
                transaction_id=f"{txn_prefix}-ALLOCATION",
                type="debit",
                amount_paise=rupees_to_paise(allocation.value_allocated),
                description=f"Investment in {product.name} ({allocation.units} shares)",
                reference_type="UserInvestment",
                reference_id=allocation.id,
                owner=username,
            )
    await refresh_share_listing(session, company, product, admin)

    rate = Decimal(str(await _plan_config(session, plan, "progressive_bonus_rate")))
    gross = progressive_bonus(total, rate)
    if gross <= 0:
        return

    tds = Decimal("0")
    if await setting_value(session, "enable_tds_deduction"):
        tds = tds_on(
            gross,
            await setting_value(session, "tds_rate_percentage"),
            Decimal(await setting_value(session, "tds_threshold_amount")),
        )
    description = f"Progressive bonus for {plan.name} ({payments} months)"
    bonus, _ = await update_or_create(
        session,
        BonusTransaction,
        {"subscription_id": subscription.id, "bonus_type": "progressive"},
        {
            "user_id": user.id,
            "base_amount": total,
            "rate_percentage": rate,
            "gross_amount": gross,
            "tds_amount": tds,
            "net_amount": gross - tds,
            "description": description,
        },
    )
    await transfer(
        session,
        admin_wallet,
        wallet,
        transaction_id=f"BONUS-{code}-PROGRESSIVE",
        amount_paise=rupees_to_paise(gross),
        description=description,
        credit_type="bonus",
        reference_type="BonusTransaction",
        reference_id=bonus.id,
        source_owner=GENESIS_ACCOUNT_USERNAME,
    )
    if tds > 0:
        await post_transaction(
            session,
            wallet,
            transaction_id=f"BONUS-{code}-PROGRESSIVE-TDS",
            type="tds",
            amount_paise=rupees_to_paise(tds),
            description=f"TDS on {description.lower()}",
            reference_type="BonusTransaction",
            reference_id=bonus.id,
            owner=username,
        )
    logger.debug("Progressive bonus %s (TDS %s) for %s", gross, tds, username)


async def seed_subscriptions(session: AsyncSession, admin: User, admin_wallet: Wallet) -> None:
    for flow in SUBSCRIPTION_FLOWS:
        await seed_subscription_flow(session, flow, admin, admin_wallet)
    print(f"  ✓ Test subscriptions and investments seeded: {len(SUBSCRIPTION_FLOWS)} flows")


async def seed_referrals(session: AsyncSession, admin_wallet: Wallet) -> None:
    campaign = await require(
        session, ReferralCampaign, "communication", code=REFERRAL_CAMPAIGN_CODE
    )
    bonus_amount = Decimal(await setting_value(session, "referral_bonus_amount"))
    for referrer_name, referred_name, days_ago in REFERRALS:
        referrer = await require(session, User, "identity", username=referrer_name)
        referred = await require(session, User, "identity", username=referred_name)
        referrer_wallet, _ = await get_or_create_wallet(session, referrer)
        referral, _ = await update_or_create(
            session,
            Referral,
            {"referrer_id": referrer.id, "referred_id": referred.id},
            {
                "referral_campaign_id": campaign.id,
                "status": "completed",
                "bonus_amount": bonus_amount,
                "completed_at": REFERENCE_TIME - datetime.timedelta(days=days_ago),
            },
        )
        await transfer(
            session,
            admin_wallet,
            referrer_wallet,
            transaction_id=f"REFERRAL-{referrer_name.upper()}-{referred_name.upper()}",
            amount_paise=rupees_to_paise(bonus_amount),
            description=f"Referral bonus for referring {referred_name}",
            credit_type="bonus",
            reference_type="Referral",
            reference_id=referral.id,
            source_owner=GENESIS_ACCOUNT_USERNAME,
        )
    print(f"  ✓ Referrals seeded: {len(REFERRALS)} records")


async def seed_withdrawals(session: AsyncSession) -> None:
    fee_percentage = await setting_value(session, "withdrawal_processing_fee_percentage")
    for reference, username, amount, status, days_ago in WITHDRAWALS:
        user = await require(session, User, "identity", username=username)
        wallet, _ = await get_or_create_wallet(session, user)
        amount_paise = rupees_to_paise(amount)
        fee_paise = withdrawal_fee_paise(amount_paise, fee_percentage)
        requested_at = REFERENCE_TIME - datetime.timedelta(days=days_ago)
        withdrawal, _ = await first_or_create(
            session,
            Withdrawal,
            {"reference": reference},
            {
                "user_id": user.id,
                "wallet_id": wallet.id,
                "amount_paise": amount_paise,
                "fee_paise": fee_paise,
                "net_amount_paise": amount_paise - fee_paise,
                "status": status,
                "bank_details": {
                    "account_holder": username,
                    "account_number": "XXXXXX" + det_digits(f"bank:{username}", 4),
                    "ifsc": "HDFC0" + det_digits(f"ifsc:{username}", 6),
                },
                "requested_at": requested_at,
                "processed_at": (
                    requested_at + datetime.timedelta(days=1) if status == "completed" else None
                ),
            },
        )
        # Pending requests hold no money yet.
        if withdrawal.status != "completed":
            continue
        await post_transaction(
            session,
            wallet,
            transaction_id=f"{reference}-PAYOUT",
            type="withdrawal",
            amount_paise=withdrawal.net_amount_paise,
            description=f"Withdrawal {reference} to bank",
            reference_type="Withdrawal",
            reference_id=withdrawal.id,
            owner=username,
        )
        if withdrawal.fee_paise > 0:
            await post_transaction(
                session,
                wallet,
                transaction_id=f"{reference}-FEE",
                type="fee",
                amount_paise=withdrawal.fee_paise,
                description=f"Processing fee for withdrawal {reference}",
                reference_type="Withdrawal",
                reference_id=withdrawal.id,
                owner=username,
            )
        logger.debug(
            "Withdrawal %s paid %s", reference, format_rupees(withdrawal.net_amount_paise)
        )
    print(f"  ✓ Withdrawals seeded: {len(WITHDRAWALS)} records")


async def run(session: AsyncSession) -> None:
    admin = await require(session, User, "identity", username=GENESIS_ACCOUNT_USERNAME)
    admin_wallet = await require(session, Wallet, "identity", user_id=admin.id)
    await seed_subscriptions(session, admin, admin_wallet)
    await seed_referrals(session, admin_wallet)
    await seed_withdrawals(session)
