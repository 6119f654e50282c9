"""Tests for wallet postings.

Covers:
- format_rupees / rupees_to_paise — rupee formatting and paise rounding
- post_transaction — credit and debit arithmetic, balance_before/after snapshot,
  idempotent re-post, unknown type, non-positive amount, overdraft
- transfer — debit/credit legs, already-posted transfer, funds checked before
  either leg is written
"""

import uuid
from decimal import Decimal

import pytest

from preiposip.exceptions import InsufficientFundsError
from preiposip.models.ledger import Transaction, Wallet
from preiposip.services.wallet import (
    CREDIT_TYPES,
    DEBIT_TYPES,
    ensure_funds,
    format_rupees,
    post_transaction,
    rupees_to_paise,
    transfer,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _wallet(balance_paise: int) -> Wallet:
    return Wallet(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        balance_paise=balance_paise,
        locked_balance_paise=0,
    )


def _added_transactions(session) -> list[Transaction]:
    return [
        call.args[0]
        for call in session.add.call_args_list
        if isinstance(call.args[0], Transaction)
    ]


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------


def test_credit_and_debit_types_are_disjoint():
    assert CREDIT_TYPES.isdisjoint(DEBIT_TYPES)
    assert "tds" in DEBIT_TYPES
    assert "bonus" in CREDIT_TYPES


@pytest.mark.parametrize(
    ("paise", "expected"),
    [
        (0, "₹0.00"),
        (50, "₹0.50"),
        (500_000, "₹5,000.00"),
        (1_000_000_000, "₹10,000,000.00"),
    ],
)
def test_format_rupees(paise, expected):
    assert format_rupees(paise) == expected


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (Decimal("5000"), 500_000),
        (Decimal("12.345"), 1235),
        (Decimal("0.004"), 0),
        (250, 25_000),
    ],
)
def test_rupees_to_paise(amount, expected):
    assert rupees_to_paise(amount) == expected


def test_ensure_funds_reports_owner():
    with pytest.raises(InsufficientFundsError) as exc_info:
        ensure_funds(_wallet(100), 101, owner="testuser1")
    assert exc_info.value.wallet_owner == "testuser1"
    assert exc_info.value.balance_paise == 100
    assert exc_info.value.amount_paise == 101


def test_ensure_funds_allows_exact_balance():
    ensure_funds(_wallet(100), 100)


# ---------------------------------------------------------------------------
# post_transaction
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_credit_raises_balance(mock_session):
    wallet = _wallet(1_000)
    txn, created = await post_transaction(
        mock_session,
        wallet,
        transaction_id="SIP-TEST-01-DEPOSIT",
        type="deposit",
        amount_paise=500,
        description="Deposit",
    )
    assert created is True
    assert wallet.balance_paise == 1_500
    assert txn.balance_before_paise == 1_000
    assert txn.balance_after_paise == 1_500
    assert txn.status == "completed"
    assert txn.wallet_id == wallet.id
    assert txn.user_id == wallet.user_id
    mock_session.flush.assert_awaited()


@pytest.mark.asyncio
async def test_debit_lowers_balance(mock_session):
    wallet = _wallet(1_000)
    txn, _ = await post_transaction(
        mock_session,
        wallet,
        transaction_id="WD-1-FEE",
        type="fee",
        amount_paise=400,
        description="Withdrawal fee",
    )
    assert wallet.balance_paise == 600
    assert txn.balance_after_paise == 600


@pytest.mark.asyncio
async def test_existing_transaction_id_is_not_posted_again(mock_session, result_of):
    wallet = _wallet(1_000)
    existing = Transaction(transaction_id="SIP-TEST-01-DEPOSIT", amount_paise=500)
    mock_session.execute.return_value = result_of(existing)

    txn, created = await post_transaction(
        mock_session,
        wallet,
        transaction_id="SIP-TEST-01-DEPOSIT",
        type="deposit",
        amount_paise=500,
        description="Deposit",
    )
    assert created is False
    assert txn is existing
    assert wallet.balance_paise == 1_000
    mock_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_unknown_type_is_rejected(mock_session):
    with pytest.raises(ValueError, match="Unknown transaction type"):
        await post_transaction(
            mock_session,
            _wallet(1_000),
            transaction_id="X-1",
            type="gift",
            amount_paise=100,
            description="?",
        )


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [0, -100])
async def test_non_positive_amount_is_rejected(mock_session, amount):
    with pytest.raises(ValueError, match="must be positive"):
        await post_transaction(
            mock_session,
            _wallet(1_000),
            transaction_id="X-1",
            type="deposit",
            amount_paise=amount,
            description="?",
        )


@pytest.mark.asyncio
async def test_overdraft_is_rejected_without_writing(mock_session):
    wallet = _wallet(100)
    with pytest.raises(InsufficientFundsError):
        await post_transaction(
            mock_session,
            wallet,
            transaction_id="X-1",
            type="withdrawal",
            amount_paise=101,
            description="Too much",
            owner="testuser1",
        )
    assert wallet.balance_paise == 100
    mock_session.add.assert_not_called()


# ---------------------------------------------------------------------------
# transfer
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_transfer_posts_both_legs(mock_session):
    admin = _wallet(1_000_000)
    user = _wallet(0)

    posted = await transfer(
        mock_session,
        admin,
        user,
        transaction_id="OPENING-TESTUSER1",
        amount_paise=250_000,
        description="Opening balance",
    )

    assert posted is True
    assert admin.balance_paise == 750_000
    assert user.balance_paise == 250_000
    legs = _added_transactions(mock_session)
    assert [leg.transaction_id for leg in legs] == [
        "OPENING-TESTUSER1_out",
        "OPENING-TESTUSER1_in",
    ]
    assert [leg.type for leg in legs] == ["debit", "credit"]


@pytest.mark.asyncio
async def test_transfer_uses_given_credit_type(mock_session):
    admin = _wallet(1_000_000)
    user = _wallet(0)
    await transfer(
        mock_session,
        admin,
        user,
        transaction_id="BONUS-SUBX-PROGRESSIVE",
        amount_paise=10_000,
        description="Progressive bonus",
        credit_type="bonus",
    )
    legs = _added_transactions(mock_session)
    assert legs[1].type == "bonus"


@pytest.mark.asyncio
async def test_transfer_already_posted_returns_false(mock_session, result_of):
    admin = _wallet(1_000_000)
    user = _wallet(0)
    mock_session.execute.return_value = result_of(
        Transaction(transaction_id="OPENING-TESTUSER1_out", amount_paise=100)
    )

    posted = await transfer(
        mock_session,
        admin,
        user,
        transaction_id="OPENING-TESTUSER1",
        amount_paise=100,
        description="Opening balance",
    )
    assert posted is False
    assert admin.balance_paise == 1_000_000
    assert user.balance_paise == 0
    mock_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_transfer_checks_funds_before_any_leg(mock_session):
    admin = _wallet(50)
    user = _wallet(0)
    with pytest.raises(InsufficientFundsError):
        await transfer(
            mock_session,
            admin,
            user,
            transaction_id="REFERRAL-A-B",
            amount_paise=100,
            description="Referral bonus",
            source_owner="superadmin",
        )
    assert admin.balance_paise == 50
    assert user.balance_paise == 0
    mock_session.add.assert_not_called()
