"""Wallet postings: idempotent transactions and admin-funded transfers.

Every posting is keyed by a deterministic ``transaction_id``. Posting an id
that already exists is a no-op, so re-running a seeder never moves money
twice.
"""

import logging
import uuid
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.exceptions import InsufficientFundsError
from preiposip.models.identity import User
from preiposip.models.ledger import Transaction, Wallet

logger = logging.getLogger(__name__)

CREDIT_TYPES = frozenset({"deposit", "credit", "bonus", "refund"})
DEBIT_TYPES = frozenset({"debit", "withdrawal", "fee", "tds"})

# Owner of the genesis wallet every other balance is funded from.
GENESIS_ACCOUNT_USERNAME = "superadmin"


def format_rupees(paise: int) -> str:
    return f"₹{Decimal(paise) / 100:,.2f}"


def rupees_to_paise(amount: Decimal | int) -> int:
    """Convert a rupee amount to integer paise, rounding half up to the paisa."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ensure_funds(wallet: Wallet, amount_paise: int, owner: str | None = None) -> None:
    """Raise :exc:`InsufficientFundsError` if *wallet* cannot cover *amount_paise*."""
    if wallet.balance_paise < amount_paise:
        raise InsufficientFundsError(
            owner or str(wallet.user_id),
            wallet.balance_paise,
            amount_paise,
        )


async def get_wallet(session: AsyncSession, user_id: uuid.UUID) -> Wallet | None:
    result = await session.execute(select(Wallet).where(Wallet.user_id == user_id))
    return result.scalar_one_or_none()


async def get_or_create_wallet(session: AsyncSession, user: User) -> tuple[Wallet, bool]:
    """Return the wallet of *user*, creating an empty one if needed."""
    wallet = await get_wallet(session, user.id)
    if wallet is not None:
        return wallet, False
    wallet = Wallet(user_id=user.id, balance_paise=0, locked_balance_paise=0)
    session.add(wallet)
    await session.flush()
    return wallet, True


async def get_transaction(session: AsyncSession, transaction_id: str) -> Transaction | None:
    result = await session.execute(
        select(Transaction).where(Transaction.transaction_id == transaction_id)
    )
    return result.scalar_one_or_none()


async def post_transaction(
    session: AsyncSession,
    wallet: Wallet,
    *,
    transaction_id: str,
    type: str,
    amount_paise: int,
    description: str,
    reference_type: str | None = None,
    reference_id: uuid.UUID | None = None,
    owner: str | None = None,
) -> tuple[Transaction, bool]:
    """Apply one completed posting to *wallet* and record it.

    Credit types raise the balance and debit types lower it. Returns the
    ``(transaction, created)`` pair; an already recorded *transaction_id* is
    returned untouched with ``created=False``.

    Raises :exc:`ValueError` for an unknown type or a non-positive amount and
    :exc:`InsufficientFundsError` if a debit would overdraw the wallet.
    """
    existing = await get_transaction(session, transaction_id)
    if existing is not None:
        return existing, False

    if type not in CREDIT_TYPES and type not in DEBIT_TYPES:
        raise ValueError(f"Unknown transaction type: {type!r}")
    if amount_paise <= 0:
        raise ValueError(f"Transaction amount must be positive, got {amount_paise}")

    before = wallet.balance_paise
    if type in DEBIT_TYPES:
        ensure_funds(wallet, amount_paise, owner)
        after = before - amount_paise
    else:
        after = before + amount_paise

    txn = Transaction(
        transaction_id=transaction_id,
        wallet_id=wallet.id,
        user_id=wallet.user_id,
        type=type,
        status="completed",
        amount_paise=amount_paise,
        balance_before_paise=before,
        balance_after_paise=after,
        description=description,
        reference_type=reference_type,
        reference_id=reference_id,
    )
    wallet.balance_paise = after
    session.add(txn)
    await session.flush()
    logger.debug("Posted %s %s to wallet %s (%s)", type, amount_paise, wallet.id, transaction_id)
    return txn, True


async def transfer(
    session: AsyncSession,
    source: Wallet,
    target: Wallet,
    *,
    transaction_id: str,
    amount_paise: int,
    description: str,
    credit_type: str = "credit",
    debit_type: str = "debit",
    reference_type: str | None = None,
    reference_id: uuid.UUID | None = None,
    source_owner: str | None = None,
) -> bool:
    """Move *amount_paise* from *source* to *target* as a debit/credit pair.

    The legs are recorded as ``{transaction_id}_out`` and ``{transaction_id}_in``.
    Funds are checked before either leg is written. Returns False when the
    transfer had already been posted.
    """
    out_id = f"{transaction_id}_out"
    in_id = f"{transaction_id}_in"
    if await get_transaction(session, out_id) is not None:
        return False

    ensure_funds(source, amount_paise, source_owner)
    await post_transaction(
        session,
        source,
        transaction_id=out_id,
        type=debit_type,
        amount_paise=amount_paise,
        description=description,
        reference_type=reference_type,
        reference_id=reference_id,
        owner=source_owner,
    )
    await post_transaction(
        session,
        target,
        transaction_id=in_id,
        type=credit_type,
        amount_paise=amount_paise,
        description=description,
        reference_type=reference_type,
        reference_id=reference_id,
    )
    return True
