"""Seeder runs against an ``AsyncMock`` session.

Covers:
- company_users.run: one portal admin per company, hashed seed password
- engagement.seed_support_tickets: assignee by category, admin reply on
  resolved and closed tickets only
- engagement.seed_lucky_draw_entries: minimum investment filter, entries per
  payment, three ranked winners with their prizes
"""

import uuid
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from preiposip.models import (
    Company,
    CompanyUser,
    LuckyDraw,
    LuckyDrawEntry,
    Payment,
    Subscription,
    SupportMessage,
    SupportTicket,
    User,
)
from preiposip.seeders import company_users, engagement
from preiposip.seeders.catalog import COMPANIES
from preiposip.services.auth import verify_password

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _added(session, model) -> list:
    return [
        call.args[0] for call in session.add.call_args_list if isinstance(call.args[0], model)
    ]


def _user(username: str) -> User:
    return User(id=uuid.uuid4(), username=username, email=f"{username}@test.com")


# ---------------------------------------------------------------------------
# Company portal users
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_company_users_one_admin_per_company(mock_session, result_of):
    company = Company(id=uuid.uuid4(), name="TechCorp India", slug="techcorp-india")
    mock_session.execute.side_effect = [result_of(company), result_of(None)] * len(COMPANIES)

    await company_users.run(mock_session)

    users = _added(mock_session, CompanyUser)
    assert [user.email for user in users] == [
        company_users.portal_email(data["name"]) for data in COMPANIES
    ]
    assert users[0].name == "Admin TechCorp"
    assert all(user.company_id == company.id for user in users)
    assert all(user.role == "admin" for user in users)
    assert verify_password("password", users[0].password_hash)


# ---------------------------------------------------------------------------
# Support tickets
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_support_tickets_are_assigned_by_category(mock_session, result_of):
    users: dict[str, User] = {}

    def execute(stmt):
        entity = stmt.column_descriptions[0]["entity"]
        if entity is not User:
            return result_of(None)
        username = next(iter(stmt.compile().params.values()))
        return result_of(users.setdefault(username, _user(username)))

    mock_session.execute.side_effect = execute

    await engagement.seed_support_tickets(mock_session)

    tickets = {ticket.ticket_code: ticket for ticket in _added(mock_session, SupportTicket)}
    assert len(tickets) == len(engagement.SUPPORT_TICKETS)
    kyc_ticket = tickets[engagement.ticket_code("testuser4")]
    assert kyc_ticket.assigned_to_id == users["kycreviewer"].id
    payment_ticket = tickets[engagement.ticket_code("testuser1")]
    assert payment_ticket.assigned_to_id == users["supportmanager"].id

    messages = _added(mock_session, SupportMessage)
    replies = [message for message in messages if message.is_admin_reply]
    answered = [t for t in engagement.SUPPORT_TICKETS if t[3] in ("resolved", "closed")]
    assert len(messages) == len(engagement.SUPPORT_TICKETS) + len(answered)
    assert len(replies) == len(answered)
    assert {reply.user_id for reply in replies} <= {u.id for u in users.values()}


# ---------------------------------------------------------------------------
# Lucky draw entries
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_lucky_draw_entries_rank_three_winners(mock_session, result_of):
    draw = LuckyDraw(
        id=uuid.uuid4(),
        code="MONTHLY_DEC2025",
        status="completed",
        min_investment_required=Decimal("5000"),
        prizes=[
            {"rank": 2, "amount": 15000, "quantity": 1},
            {"rank": 1, "amount": 25000, "quantity": 1},
            {"rank": 3, "amount": 10000, "quantity": 1},
        ],
        entry_rules={"entries_per_investment": 1},
    )
    draw_result = MagicMock()
    draw_result.scalars.return_value.first.return_value = draw

    eligible = ["testuser1", "testuser2", "testuser3", "testuser5"]
    rows = [
        (
            Subscription(
                id=uuid.uuid4(), amount=Decimal("5000"), consecutive_payments_count=2
            ),
            _user(name),
        )
        for name in eligible
    ]
    # Below the draw's minimum investment.
    rows.insert(
        3,
        (
            Subscription(id=uuid.uuid4(), amount=Decimal("1000"), consecutive_payments_count=5),
            _user("testuser4"),
        ),
    )
    rows_result = MagicMock()
    rows_result.all.return_value = rows

    mock_session.execute.side_effect = [draw_result, rows_result] + [
        result
        for _ in eligible
        for result in (result_of(Payment(id=uuid.uuid4())), result_of(None))
    ]

    await engagement.seed_lucky_draw_entries(mock_session)

    entries = _added(mock_session, LuckyDrawEntry)
    assert len(entries) == len(eligible)
    assert all(entry.base_entries == 2 for entry in entries)
    assert all(0 <= entry.bonus_entries <= 3 for entry in entries)

    by_user = {user.id: user.username for _, user in rows}
    winners = sorted(
        (entry for entry in entries if entry.is_winner), key=lambda entry: entry.prize_rank
    )
    assert [by_user[entry.user_id] for entry in winners] == engagement.rank_winners(
        draw.code, eligible, 3
    )
    assert [entry.prize_amount for entry in winners] == [
        Decimal("25000"),
        Decimal("15000"),
        Decimal("10000"),
    ]
    losers = [entry for entry in entries if not entry.is_winner]
    assert len(losers) == 1
    assert losers[0].prize_rank is None


@pytest.mark.asyncio
async def test_lucky_draw_entries_skip_without_completed_draw(mock_session, capsys):
    draw_result = MagicMock()
    draw_result.scalars.return_value.first.return_value = None
    mock_session.execute.side_effect = [draw_result]

    await engagement.seed_lucky_draw_entries(mock_session)

    mock_session.add.assert_not_called()
    assert "No completed lucky draw" in capsys.readouterr().out
