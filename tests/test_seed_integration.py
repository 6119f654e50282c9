"""End-to-end seeding against a real PostgreSQL database.

Covers:
- a full run commits and leaves a clean ledger
- a second full run inserts nothing new and moves no money
- a failing run rolls back every write
- a partial run with a missing dependency names the seeder to run first
- postings outside the credit and debit types leave wallet conservation clean
- lucky draw winners stay the same across runs

Requires ``PREIPOSIP_DB_TESTS=1`` and a reachable server (see conftest).
"""

import pytest
from sqlalchemy import func, select, text

from preiposip.exceptions import InvariantViolationError, MissingDependencyError
from preiposip.models import (
    Base,
    BulkPurchase,
    CompanyUser,
    LuckyDrawEntry,
    Product,
    PromotionalMaterial,
    Setting,
    Subscription,
    SupportTicket,
    Transaction,
    User,
    UserProfitShare,
    Wallet,
    Withdrawal,
)
from preiposip.seeders import runner
from preiposip.services.ledger import build_ledger_report

pytestmark = pytest.mark.integration

COUNTED = (
    Setting,
    User,
    Wallet,
    Transaction,
    Product,
    BulkPurchase,
    CompanyUser,
    PromotionalMaterial,
    Subscription,
    Withdrawal,
    SupportTicket,
    LuckyDrawEntry,
    UserProfitShare,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _counts(session_factory) -> dict[str, int]:
    async with session_factory() as session:
        counts = {}
        for model in COUNTED:
            result = await session.execute(select(func.count()).select_from(model))
            counts[model.__tablename__] = result.scalar_one()
        return counts


async def _balances(session_factory) -> dict[str, int]:
    async with session_factory() as session:
        result = await session.execute(
            select(User.username, Wallet.balance_paise).join(Wallet, Wallet.user_id == User.id)
        )
        return dict(result.all())


@pytest.fixture
async def empty_db(session_factory):
    """Start every test from empty tables; the schema itself is session-scoped."""
    names = ", ".join(f'"{table.name}"' for table in Base.metadata.sorted_tables)
    async with session_factory() as session, session.begin():
        await session.execute(text(f"TRUNCATE {names} CASCADE"))
    return session_factory


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_full_seed_leaves_clean_ledger(empty_db):
    summary = await runner.seed_database(environment="testing", session_factory=empty_db)

    assert summary.seeders_run[-1] == "engagement"
    assert summary.ledger is not None and summary.ledger.is_clean
    assert summary.warnings == 0

    async with empty_db() as session:
        report = await build_ledger_report(session, tolerance_paise=0)
    assert report.is_clean
    assert report.solvency.checked


@pytest.mark.asyncio
async def test_second_run_is_idempotent(empty_db):
    await runner.seed_database(environment="testing", session_factory=empty_db)
    counts = await _counts(empty_db)
    balances = await _balances(empty_db)

    await runner.seed_database(environment="testing", session_factory=empty_db)

    assert await _counts(empty_db) == counts
    assert await _balances(empty_db) == balances


@pytest.mark.asyncio
async def test_production_run_skips_test_data(empty_db):
    summary = await runner.seed_database(environment="production", session_factory=empty_db)
    assert summary.seeders_skipped == ["investments", "engagement"]
    counts = await _counts(empty_db)
    assert counts["subscriptions"] == 0
    assert counts["withdrawals"] == 0
    assert counts["support_tickets"] == 0
    assert counts["company_users"] == 5
    assert counts["promotional_materials"] == 15


@pytest.mark.asyncio
async def test_failed_run_rolls_back(empty_db, monkeypatch):
    async def fail(session, tolerance_paise=None):
        raise InvariantViolationError("admin_solvency", "forced failure")

    monkeypatch.setattr(runner, "verify_financial_invariants", fail)
    with pytest.raises(InvariantViolationError):
        await runner.seed_database(environment="testing", session_factory=empty_db)

    counts = await _counts(empty_db)
    assert set(counts.values()) == {0}


@pytest.mark.asyncio
async def test_missing_dependency_names_seeder(empty_db):
    with pytest.raises(MissingDependencyError) as exc_info:
        await runner.seed_database(["catalog"], environment="testing", session_factory=empty_db)
    assert exc_info.value.seeder in ("foundation", "identity")
    assert await _counts(empty_db) == {model.__tablename__: 0 for model in COUNTED}


@pytest.mark.asyncio
async def test_hold_postings_do_not_count_toward_balance(empty_db):
    await runner.seed_database(
        ["foundation", "identity"], environment="testing", session_factory=empty_db
    )
    async with empty_db() as session, session.begin():
        wallet = (
            await session.execute(
                select(Wallet).join(User, User.id == Wallet.user_id).where(
                    User.email == "user1@test.com"
                )
            )
        ).scalar_one()
        session.add(
            Transaction(
                transaction_id="HOLD-TESTUSER1",
                wallet_id=wallet.id,
                user_id=wallet.user_id,
                type="hold",
                status="completed",
                amount_paise=50_000,
                balance_before_paise=wallet.balance_paise,
                balance_after_paise=wallet.balance_paise,
                description="Funds on hold",
            )
        )

    async with empty_db() as session:
        report = await build_ledger_report(session, tolerance_paise=100)
    assert report.wallet_discrepancies == []
    assert report.is_clean


@pytest.mark.asyncio
async def test_lucky_draw_winners_are_stable(empty_db):
    async def winners() -> list[tuple[str, int]]:
        async with empty_db() as session:
            result = await session.execute(
                select(User.username, LuckyDrawEntry.prize_rank)
                .join(User, User.id == LuckyDrawEntry.user_id)
                .where(LuckyDrawEntry.is_winner.is_(True))
                .order_by(LuckyDrawEntry.prize_rank)
            )
            return [tuple(row) for row in result.all()]

    await runner.seed_database(environment="testing", session_factory=empty_db)
    first = await winners()
    await runner.seed_database(environment="testing", session_factory=empty_db)

    assert [rank for _, rank in first] == [1, 2, 3]
    assert await winners() == first
