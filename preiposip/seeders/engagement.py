"""Phase 6 (test data only): support tickets, lucky-draw entries and profit shares.

Nothing here moves money. Lucky-draw prizes and profit shares are recorded
as won or calculated; paying them out is an admin action, so wallets and the
ledger checks are unaffected. Winners are ranked by a hash of the draw code
and username, so every run picks the same three.
"""

import datetime
import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.models import (
    LuckyDraw,
    LuckyDrawEntry,
    Payment,
    ProfitShare,
    Subscription,
    SupportMessage,
    SupportTicket,
    User,
    UserProfitShare,
)
from preiposip.seeders.base import (
    REFERENCE_DATE,
    det_int,
    det_letters,
    first_or_create,
    months_before,
    require,
    update_or_create,
)
from preiposip.services.wallet import GENESIS_ACCOUNT_USERNAME

logger = logging.getLogger(__name__)

# (username, category, priority, status, subject, first message)
SUPPORT_TICKETS: list[tuple[str, str, str, str, str, str]] = [
    (
        "testuser1",
        "payment",
        "high",
        "open",
        "SIP payment debited but not shown in wallet",
        "My bank shows the January instalment as debited, but my wallet has not updated.",
    ),
    (
        "testuser2",
        "withdrawal",
        "medium",
        "resolved",
        "When will my withdrawal reach my bank?",
        "I requested a withdrawal last week. How long does the bank transfer take?",
    ),
    (
        "testuser3",
        "subscription",
        "low",
        "in_progress",
        "Upgrading from Plan C to a higher amount",
        "Can I increase my monthly SIP amount without starting a new subscription?",
    ),
    (
        "testuser4",
        "kyc",
        "medium",
        "closed",
        "PAN card upload keeps failing",
        "The upload stops at 90% every time I try to attach my PAN card.",
    ),
    (
        "testuser5",
        "general",
        "low",
        "open",
        "How are share prices updated?",
        "How often is the price per share of a pre-IPO company revised?",
    ),
    (
        "companyrep1",
        "kyc",
        "urgent",
        "open",
        "KYC documents pending review",
        "I submitted my KYC documents five days ago and the status still says pending.",
    ),
]

# Staff member who picks up each ticket category.
TICKET_ASSIGNEES: dict[str, str] = {
    "payment": "supportmanager",
    "withdrawal": "supportmanager",
    "subscription": "supportmanager",
    "general": "supportmanager",
    "kyc": "kycreviewer",
}

ADMIN_REPLY = (
    "Thank you for reaching out. We have looked into this and it is now sorted. "
    "Reply to this ticket if you need anything else."
)

PROFIT_SHARE_PERIOD = "Q4 2025"
# Subscriptions need this many consecutive payments to share in the profit pool.
PROFIT_SHARE_MIN_PAYMENTS = 2


def ticket_code(username: str) -> str:
    return "TKT-" + det_letters(f"ticket:{username}", 8)


def rank_winners(draw_code: str, usernames: list[str], prizes: int) -> list[str]:
    """Return the first *prizes* usernames in a stable, hash-derived order."""
    ranked = sorted(
        usernames,
        key=lambda name: (det_int(f"lucky-draw:{draw_code}:{name}", 0, 10**9), name),
    )
    return ranked[:prizes]


async def _active_subscriptions(session: AsyncSession) -> list[tuple[Subscription, User]]:
    result = await session.execute(
        select(Subscription, User)
        .join(User, User.id == Subscription.user_id)
        .where(Subscription.status == "active")
        .order_by(User.username, Subscription.start_date)
    )
    return [(subscription, user) for subscription, user in result.all()]


async def seed_support_tickets(session: AsyncSession) -> None:
    for username, category, priority, status, subject, message in SUPPORT_TICKETS:
        user = await require(session, User, "identity", username=username)
        assignee = await require(
            session, User, "identity", username=TICKET_ASSIGNEES[category]
        )
        ticket, _ = await update_or_create(
            session,
            SupportTicket,
            {"ticket_code": ticket_code(username)},
            {
                "user_id": user.id,
                "subject": subject,
                "category": category,
                "priority": priority,
                "status": status,
                "assigned_to_id": assignee.id,
            },
        )
        await first_or_create(
            session,
            SupportMessage,
            {"support_ticket_id": ticket.id, "is_admin_reply": False},
            {"user_id": user.id, "message": message},
        )
        if status in ("resolved", "closed"):
            await first_or_create(
                session,
                SupportMessage,
                {"support_ticket_id": ticket.id, "is_admin_reply": True},
                {"user_id": assignee.id, "message": ADMIN_REPLY},
            )
    print(f"  ✓ Support tickets seeded: {len(SUPPORT_TICKETS)} records")


async def seed_lucky_draw_entries(session: AsyncSession) -> None:
    draw = (
        await session.execute(
            select(LuckyDraw).where(LuckyDraw.status == "completed").order_by(LuckyDraw.code)
        )
    ).scalars().first()
    if draw is None:
        print("  ⚠ No completed lucky draw, skipping entries")
        return

    per_payment = int(draw.entry_rules.get("entries_per_investment", 1))
    entries: dict[str, LuckyDrawEntry] = {}
    for subscription, user in await _active_subscriptions(session):
        if user.username in entries or subscription.amount < draw.min_investment_required:
            continue
        first_payment = await require(
            session, Payment, "investments", subscription_id=subscription.id, installment_number=1
        )
        entry, _ = await first_or_create(
            session,
            LuckyDrawEntry,
            {"lucky_draw_id": draw.id, "user_id": user.id},
            {
                "payment_id": first_payment.id,
                "base_entries": max(subscription.consecutive_payments_count, 1) * per_payment,
                "bonus_entries": det_int(f"lucky-draw:{draw.code}:{user.username}:bonus", 0, 3),
            },
        )
        entries[user.username] = entry

    prizes = sorted(draw.prizes, key=lambda prize: prize["rank"])
    winners = rank_winners(draw.code, list(entries), len(prizes))
    won = dict(zip(winners, prizes))
    for username, entry in entries.items():
        prize = won.get(username)
        entry.is_winner = prize is not None
        entry.prize_rank = prize["rank"] if prize else None
        entry.prize_amount = Decimal(prize["amount"]) if prize else None
    await session.flush()
    print(f"  ✓ Lucky draw entries seeded: {len(entries)} records ({len(winners)} winners)")


async def seed_profit_shares(session: AsyncSession) -> None:
    admin = await require(session, User, "identity", username=GENESIS_ACCOUNT_USERNAME)
    quarter_start = months_before(REFERENCE_DATE, 3)
    profit_share, _ = await update_or_create(
        session,
        ProfitShare,
        {"period_name": PROFIT_SHARE_PERIOD},
        {
            "start_date": quarter_start,
            "end_date": REFERENCE_DATE - datetime.timedelta(days=1),
            "total_pool": Decimal("5000000"),
            "net_profit": Decimal("10000000"),
            "status": "calculated",
            "admin_id": admin.id,
        },
    )

    shared: set[str] = set()
    for subscription, user in await _active_subscriptions(session):
        if user.username in shared:
            continue
        if subscription.consecutive_payments_count < PROFIT_SHARE_MIN_PAYMENTS:
            continue
        amount = det_int(f"profit-share:{PROFIT_SHARE_PERIOD}:{user.username}", 5000, 25000)
        await first_or_create(
            session,
            UserProfitShare,
            {"profit_share_id": profit_share.id, "user_id": user.id},
            {"amount": Decimal(amount)},
        )
        shared.add(user.username)
    print(f"  ✓ Profit shares seeded: 1 period, {len(shared)} user shares")


async def run(session: AsyncSession) -> None:
    await seed_support_tickets(session)
    await seed_lucky_draw_entries(session)
    await seed_profit_shares(session)
    logger.info("Engagement data seeded")
