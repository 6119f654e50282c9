"""Ledger reconciliation for seeded data.

Three accounting identities must hold once seeding is finished:

* admin solvency: the genesis wallet covers every other wallet's balance
  plus locked balance;
* wallet conservation: each balance equals its completed credits minus its
  completed debits, and postings of any other type (holds) are ignored;
* inventory conservation: each bulk purchase's ``value_remaining`` equals
  ``total_value_received`` minus the value of its non-reversed allocations.

The evaluators are pure functions over already fetched rows; the async
helpers below run the grouped queries and either build a report
(:func:`build_ledger_report`) or raise on the first failed identity
(:func:`verify_financial_invariants`).
"""

import logging
import uuid
from collections.abc import Iterable, Mapping
from decimal import Decimal

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.config import settings
from preiposip.exceptions import InvariantViolationError
from preiposip.models.activity import UserInvestment
from preiposip.models.catalog import BulkPurchase
from preiposip.models.identity import User
from preiposip.models.ledger import Transaction, Wallet
from preiposip.schemas.ledger import (
    InventoryDiscrepancy,
    LedgerReport,
    SolvencyResult,
    WalletDiscrepancy,
)
from preiposip.services.wallet import (
    CREDIT_TYPES,
    DEBIT_TYPES,
    GENESIS_ACCOUNT_USERNAME,
    format_rupees,
)

logger = logging.getLogger(__name__)

# (wallet_id, owner email, balance_paise)
WalletRow = tuple[uuid.UUID, str, int]
# (bulk_purchase_id, total_value_received, value_remaining)
BulkPurchaseRow = tuple[uuid.UUID, Decimal, Decimal]


# ---------------------------------------------------------------------------
# Evaluators
# ---------------------------------------------------------------------------


def evaluate_solvency(admin_balance_paise: int | None, liabilities_paise: int) -> SolvencyResult:
    """Compare the admin balance with the total owed to everyone else.

    ``admin_balance_paise=None`` means no admin wallet exists; the result is
    then marked unchecked.
    """
    if admin_balance_paise is None:
        return SolvencyResult(checked=False)
    return SolvencyResult(
        checked=True,
        admin_balance_paise=admin_balance_paise,
        liabilities_paise=liabilities_paise,
    )


def find_wallet_discrepancies(
    wallets: Iterable[WalletRow],
    net_postings: Mapping[uuid.UUID, int],
    tolerance_paise: int,
) -> list[WalletDiscrepancy]:
    """Return wallets whose balance drifts from their postings by more than the tolerance."""
    found: list[WalletDiscrepancy] = []
    for wallet_id, email, balance_paise in wallets:
        expected = net_postings.get(wallet_id, 0)
        if abs(balance_paise - expected) > tolerance_paise:
            found.append(
                WalletDiscrepancy(
                    wallet_id=wallet_id,
                    email=email,
                    balance_paise=balance_paise,
                    expected_paise=expected,
                )
            )
    return found


def find_inventory_discrepancies(
    purchases: Iterable[BulkPurchaseRow],
    allocated: Mapping[uuid.UUID, Decimal],
    tolerance_paise: int,
) -> list[InventoryDiscrepancy]:
    """Return bulk purchases whose remaining value disagrees with their allocations."""
    tolerance = Decimal(tolerance_paise) / 100
    found: list[InventoryDiscrepancy] = []
    for purchase_id, total_value_received, value_remaining in purchases:
        allocated_value = Decimal(allocated.get(purchase_id, 0))
        expected = Decimal(total_value_received) - allocated_value
        if abs(Decimal(value_remaining) - expected) > tolerance:
            found.append(
                InventoryDiscrepancy(
                    bulk_purchase_id=purchase_id,
                    total_value_received=total_value_received,
                    allocated_value=allocated_value,
                    value_remaining=value_remaining,
                )
            )
    return found


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def _admin_wallet(session: AsyncSession) -> Wallet | None:
    result = await session.execute(
        select(Wallet).join(User, User.id == Wallet.user_id).where(
            User.username == GENESIS_ACCOUNT_USERNAME
        )
    )
    return result.scalar_one_or_none()


async def _solvency(session: AsyncSession) -> SolvencyResult:
    admin_wallet = await _admin_wallet(session)
    if admin_wallet is None:
        return evaluate_solvency(None, 0)

    result = await session.execute(
        select(
            func.coalesce(func.sum(Wallet.balance_paise + Wallet.locked_balance_paise), 0)
        ).where(Wallet.id != admin_wallet.id)
    )
    return evaluate_solvency(admin_wallet.balance_paise, int(result.scalar_one()))


async def _wallet_rows(session: AsyncSession, user_email: str | None) -> list[WalletRow]:
    stmt = (
        select(Wallet.id, User.email, Wallet.balance_paise)
        .join(User, User.id == Wallet.user_id)
        .order_by(User.email)
    )
    if user_email is not None:
        stmt = stmt.where(User.email == user_email)
    result = await session.execute(stmt)
    return [(row[0], row[1], int(row[2])) for row in result.all()]


def signed_amount():
    """Posting amount signed by type. Holds and other unlisted types count as zero."""
    return case(
        (Transaction.type.in_(sorted(CREDIT_TYPES)), Transaction.amount_paise),
        (Transaction.type.in_(sorted(DEBIT_TYPES)), -Transaction.amount_paise),
        else_=0,
    )


async def _net_postings(session: AsyncSession) -> dict[uuid.UUID, int]:
    result = await session.execute(
        select(Transaction.wallet_id, func.sum(signed_amount()))
        .where(Transaction.status == "completed")
        .group_by(Transaction.wallet_id)
    )
    return {wallet_id: int(total or 0) for wallet_id, total in result.all()}


async def _bulk_purchase_rows(session: AsyncSession) -> list[BulkPurchaseRow]:
    result = await session.execute(
        select(BulkPurchase.id, BulkPurchase.total_value_received, BulkPurchase.value_remaining)
    )
    return [(row[0], row[1], row[2]) for row in result.all()]


async def _allocated_values(session: AsyncSession) -> dict[uuid.UUID, Decimal]:
    result = await session.execute(
        select(UserInvestment.bulk_purchase_id, func.sum(UserInvestment.value_allocated))
        .where(UserInvestment.is_reversed.is_(False))
        .group_by(UserInvestment.bulk_purchase_id)
    )
    return {purchase_id: Decimal(total or 0) for purchase_id, total in result.all()}


async def build_ledger_report(
    session: AsyncSession,
    tolerance_paise: int | None = None,
    user_email: str | None = None,
) -> LedgerReport:
    """Run every reconciliation query and return the findings without raising.

    *user_email* restricts the wallet conservation check to one account;
    solvency and inventory are always checked platform-wide.
    """
    if tolerance_paise is None:
        tolerance_paise = settings.ledger_tolerance_paise

    solvency = await _solvency(session)
    wallets = await _wallet_rows(session, user_email)
    net_postings = await _net_postings(session)
    purchases = await _bulk_purchase_rows(session)
    allocated = await _allocated_values(session)

    return LedgerReport(
        tolerance_paise=tolerance_paise,
        solvency=solvency,
        wallets_checked=len(wallets),
        bulk_purchases_checked=len(purchases),
        wallet_discrepancies=find_wallet_discrepancies(wallets, net_postings, tolerance_paise),
        inventory_discrepancies=find_inventory_discrepancies(
            purchases, allocated, tolerance_paise
        ),
    )


def raise_for_report(report: LedgerReport) -> None:
    """Raise :exc:`InvariantViolationError` for the first failed identity in *report*."""
    solvency = report.solvency
    if not solvency.is_solvent:
        raise InvariantViolationError(
            "admin_solvency",
            f"Admin wallet balance {format_rupees(solvency.admin_balance_paise)} is below "
            f"total user liabilities {format_rupees(solvency.liabilities_paise)}",
        )

    if report.wallet_discrepancies:
        first = report.wallet_discrepancies[0]
        raise InvariantViolationError(
            "wallet_conservation",
            f"{len(report.wallet_discrepancies)} wallet(s) do not match their transactions; "
            f"{first.email} has {format_rupees(first.balance_paise)}, "
            f"transactions add up to {format_rupees(first.expected_paise)}",
        )

    if report.inventory_discrepancies:
        first_inv = report.inventory_discrepancies[0]
        raise InvariantViolationError(
            "inventory_conservation",
            f"{len(report.inventory_discrepancies)} bulk purchase(s) do not match their "
            f"allocations; {first_inv.bulk_purchase_id} has ₹{first_inv.value_remaining} "
            f"remaining, expected ₹{first_inv.expected_remaining}",
        )


async def verify_financial_invariants(
    session: AsyncSession,
    tolerance_paise: int | None = None,
) -> LedgerReport:
    """Check the three ledger identities, raising on the first violation."""
    report = await build_ledger_report(session, tolerance_paise=tolerance_paise)

    if not report.solvency.checked:
        logger.warning("Admin wallet not found; solvency check skipped")
        print("  ⚠ Admin wallet not found, skipping solvency check")

    raise_for_report(report)

    if report.solvency.checked:
        print(
            f"  ✓ Admin solvency: {format_rupees(report.solvency.admin_balance_paise)} covers "
            f"{format_rupees(report.solvency.liabilities_paise)} of user balances"
        )
    print(f"  ✓ Wallet conservation: {report.wallets_checked} wallets reconcile")
    print(f"  ✓ Inventory conservation: {report.bulk_purchases_checked} bulk purchases reconcile")
    logger.info(
        "Ledger invariants hold (wallets=%d, bulk_purchases=%d)",
        report.wallets_checked,
        report.bulk_purchases_checked,
    )
    return report
