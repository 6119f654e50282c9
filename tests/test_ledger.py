"""Tests for ledger reconciliation.

Covers:
- evaluate_solvency — missing admin wallet, solvent, insolvent
- find_wallet_discrepancies — tolerance boundary, wallets without postings
- find_inventory_discrepancies — rupee tolerance derived from paise
- raise_for_report — check order and error details
- LedgerReport.is_clean
- signed_amount / build_ledger_report: only listed credit and debit types
  count toward a wallet, wiring of the grouped query results into the report

The grouped queries also run against PostgreSQL in the integration tests.
"""

import uuid
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from preiposip.exceptions import InvariantViolationError
from preiposip.models.ledger import Wallet
from preiposip.schemas.ledger import LedgerReport, SolvencyResult
from preiposip.services.ledger import (
    build_ledger_report,
    evaluate_solvency,
    find_inventory_discrepancies,
    find_wallet_discrepancies,
    raise_for_report,
    signed_amount,
)
from preiposip.services.wallet import CREDIT_TYPES, DEBIT_TYPES

WALLET_A = uuid.uuid4()
WALLET_B = uuid.uuid4()
PURCHASE = uuid.uuid4()


def _report(**overrides) -> LedgerReport:
    values = {
        "tolerance_paise": 100,
        "solvency": SolvencyResult(
            checked=True, admin_balance_paise=1_000, liabilities_paise=500
        ),
        "wallets_checked": 2,
        "bulk_purchases_checked": 1,
    }
    return LedgerReport(**(values | overrides))


# ---------------------------------------------------------------------------
# Solvency
# ---------------------------------------------------------------------------


def test_solvency_unchecked_without_admin_wallet():
    result = evaluate_solvency(None, 10_000)
    assert result.checked is False
    assert result.is_solvent is True


def test_solvency_holds_when_balance_covers_liabilities():
    result = evaluate_solvency(10_000, 10_000)
    assert result.checked is True
    assert result.is_solvent is True


def test_solvency_fails_when_liabilities_exceed_balance():
    assert evaluate_solvency(9_999, 10_000).is_solvent is False


# ---------------------------------------------------------------------------
# Wallet conservation
# ---------------------------------------------------------------------------


def test_wallet_within_tolerance_is_not_reported():
    wallets = [(WALLET_A, "a@example.com", 10_100)]
    assert find_wallet_discrepancies(wallets, {WALLET_A: 10_000}, 100) == []


def test_wallet_beyond_tolerance_is_reported():
    wallets = [
        (WALLET_A, "a@example.com", 10_101),
        (WALLET_B, "b@example.com", 5_000),
    ]
    found = find_wallet_discrepancies(wallets, {WALLET_A: 10_000, WALLET_B: 5_000}, 100)
    assert len(found) == 1
    assert found[0].email == "a@example.com"
    assert found[0].difference_paise == 101


def test_wallet_without_postings_expects_zero():
    found = find_wallet_discrepancies([(WALLET_A, "a@example.com", 500)], {}, 100)
    assert found[0].expected_paise == 0


# ---------------------------------------------------------------------------
# Inventory conservation
# ---------------------------------------------------------------------------


def test_inventory_matching_allocations_is_clean():
    purchases = [(PURCHASE, Decimal("100000.00"), Decimal("95200.00"))]
    found = find_inventory_discrepancies(purchases, {PURCHASE: Decimal("4800.00")}, 100)
    assert found == []


def test_inventory_tolerance_is_one_rupee_for_100_paise():
    purchases = [(PURCHASE, Decimal("100000.00"), Decimal("95201.00"))]
    assert find_inventory_discrepancies(purchases, {PURCHASE: Decimal("4800")}, 100) == []

    purchases = [(PURCHASE, Decimal("100000.00"), Decimal("95201.01"))]
    found = find_inventory_discrepancies(purchases, {PURCHASE: Decimal("4800")}, 100)
    assert len(found) == 1
    assert found[0].expected_remaining == Decimal("95200.00")
    assert found[0].difference == Decimal("1.01")


def test_inventory_without_allocations_expects_full_value():
    purchases = [(PURCHASE, Decimal("50000"), Decimal("40000"))]
    found = find_inventory_discrepancies(purchases, {}, 100)
    assert found[0].allocated_value == Decimal("0")


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def test_clean_report_does_not_raise():
    report = _report()
    assert report.is_clean is True
    raise_for_report(report)


def test_insolvency_is_raised_first():
    report = _report(
        solvency=SolvencyResult(checked=True, admin_balance_paise=1, liabilities_paise=2),
        wallet_discrepancies=find_wallet_discrepancies(
            [(WALLET_A, "a@example.com", 999)], {}, 100
        ),
    )
    assert report.is_clean is False
    with pytest.raises(InvariantViolationError) as exc_info:
        raise_for_report(report)
    assert exc_info.value.check == "admin_solvency"
    assert str(exc_info.value).startswith("INVARIANT VIOLATION:")


def test_wallet_discrepancy_names_the_wallet():
    report = _report(
        wallet_discrepancies=find_wallet_discrepancies(
            [(WALLET_A, "a@example.com", 50_000)], {WALLET_A: 40_000}, 100
        )
    )
    with pytest.raises(InvariantViolationError) as exc_info:
        raise_for_report(report)
    assert exc_info.value.check == "wallet_conservation"
    assert "a@example.com" in exc_info.value.detail
    assert "₹500.00" in exc_info.value.detail


def test_inventory_discrepancy_is_raised():
    report = _report(
        inventory_discrepancies=find_inventory_discrepancies(
            [(PURCHASE, Decimal("1000"), Decimal("1000"))], {PURCHASE: Decimal("200")}, 100
        )
    )
    with pytest.raises(InvariantViolationError) as exc_info:
        raise_for_report(report)
    assert exc_info.value.check == "inventory_conservation"
    assert str(PURCHASE) in exc_info.value.detail


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def _rows(*rows) -> MagicMock:
    result = MagicMock()
    result.all.return_value = list(rows)
    return result


def test_signed_amount_only_counts_listed_types():
    sql = str(
        select(signed_amount()).compile(
            dialect=postgresql.dialect(), compile_kwargs={"literal_binds": True}
        )
    )
    for type_ in CREDIT_TYPES | DEBIT_TYPES:
        assert f"'{type_}'" in sql
    assert "THEN transactions.amount_paise" in sql
    assert "THEN -transactions.amount_paise" in sql
    assert "ELSE 0 END" in sql


@pytest.mark.asyncio
async def test_build_ledger_report_reconciles_fetched_rows(mock_session, result_of):
    admin = Wallet(id=uuid.uuid4(), user_id=uuid.uuid4(), balance_paise=900_000)
    liabilities = MagicMock()
    liabilities.scalar_one.return_value = 150_000
    mock_session.execute.side_effect = [
        result_of(admin),
        liabilities,
        _rows((WALLET_A, "a@example.com", 100_000), (WALLET_B, "b@example.com", 50_000)),
        _rows((WALLET_A, 100_000), (WALLET_B, 40_000)),
        _rows((PURCHASE, Decimal("1000"), Decimal("800"))),
        _rows((PURCHASE, Decimal("200"))),
    ]

    report = await build_ledger_report(mock_session, tolerance_paise=100)

    assert report.solvency.is_solvent
    assert report.wallets_checked == 2
    assert report.bulk_purchases_checked == 1
    assert [d.email for d in report.wallet_discrepancies] == ["b@example.com"]
    assert report.wallet_discrepancies[0].expected_paise == 40_000
    assert report.inventory_discrepancies == []


@pytest.mark.asyncio
async def test_build_ledger_report_without_admin_wallet(mock_session, result_of):
    mock_session.execute.side_effect = [
        result_of(None),
        _rows(),
        _rows(),
        _rows(),
        _rows(),
    ]
    report = await build_ledger_report(mock_session, tolerance_paise=0)
    assert report.solvency.checked is False
    assert report.is_clean
