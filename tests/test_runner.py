"""Tests for the composite seed runner.

Covers:
- run_seeders — phase banners, order, test-data skipping outside local/testing/
  development, verification toggle, count checks limited to touched tables
- seed_database — commit on success, rollback + report + re-raise on failure,
  credentials only after a full run

Seeders, ledger verification and count checks are replaced with fakes so no
database is needed.
"""

from unittest.mock import AsyncMock

import pytest

from preiposip.exceptions import InvariantViolationError, SeedingError
from preiposip.schemas.ledger import LedgerReport, SolvencyResult
from preiposip.schemas.seeding import CountCheck
from preiposip.seeders import runner
from preiposip.seeders.registry import SeederSpec

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeTransaction:
    def __init__(self, session: "FakeSession") -> None:
        self.session = session

    async def __aenter__(self) -> "FakeTransaction":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.session.committed = True
        else:
            self.session.rolled_back = True
        return False


class FakeSession:
    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def begin(self) -> FakeTransaction:
        return FakeTransaction(self)

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.closed = True
        return False


def _spec(name: str, phase: int, *, test_data: bool = False, tables=("t",)) -> SeederSpec:
    return SeederSpec(
        name=name,
        phase=phase,
        run=AsyncMock(),
        description=name,
        tables=frozenset(tables),
        test_data=test_data,
    )


def _clean_report() -> LedgerReport:
    return LedgerReport(
        tolerance_paise=100,
        solvency=SolvencyResult(checked=True, admin_balance_paise=10, liabilities_paise=5),
        wallets_checked=1,
        bulk_purchases_checked=0,
    )


@pytest.fixture
def specs(monkeypatch):
    """Three fake seeders in phases 1, 4 and 6; the last one is test data."""
    fakes = [
        _spec("alpha", 1, tables=("settings",)),
        _spec("beta", 4, tables=("plans",)),
        _spec("gamma", 6, test_data=True, tables=("subscriptions",)),
    ]

    def select(names=None):
        requested = list(names or [])
        if not requested:
            return list(fakes)
        return [spec for spec in fakes if spec.name in requested]

    monkeypatch.setattr(runner, "select_seeders", select)
    monkeypatch.setattr(runner, "SEEDERS", fakes)
    return fakes


@pytest.fixture
def verify(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=_clean_report())
    monkeypatch.setattr(runner, "verify_financial_invariants", mock)
    return mock


@pytest.fixture
def counts(monkeypatch) -> AsyncMock:
    mock = AsyncMock(return_value=[CountCheck(table="settings", minimum=1, actual=5)])
    monkeypatch.setattr(runner, "run_count_checks", mock)
    return mock


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("environment", "allowed"),
    [
        ("local", True),
        ("testing", True),
        ("Development", True),
        ("staging", False),
        ("production", False),
    ],
)
def test_allows_test_data(environment, allowed):
    assert runner.allows_test_data(environment) is allowed


# ---------------------------------------------------------------------------
# run_seeders
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_runs_every_seeder_in_order(specs, verify, counts, capsys):
    session = FakeSession()
    summary = await runner.run_seeders(session, environment="local")

    assert summary.seeders_run == ["alpha", "beta", "gamma"]
    assert summary.seeders_skipped == []
    for spec in specs:
        spec.run.assert_awaited_once_with(session)
    out = capsys.readouterr().out
    assert "[1/3] Seeding Foundation..." in out
    assert "[2/3] Seeding Plans..." in out
    assert "[3/3] Seeding Test data (optional)..." in out


@pytest.mark.asyncio
async def test_skips_test_data_in_production(specs, verify, counts, capsys):
    summary = await runner.run_seeders(FakeSession(), environment="production")

    assert summary.seeders_run == ["alpha", "beta"]
    assert summary.seeders_skipped == ["gamma"]
    specs[2].run.assert_not_awaited()
    assert "⚠ Skipping gamma" in capsys.readouterr().out
    counts.assert_awaited_once()
    assert counts.await_args.args[1] == {"settings", "plans"}


@pytest.mark.asyncio
async def test_verification_runs_after_seeders(specs, verify, counts):
    summary = await runner.run_seeders(FakeSession(), environment="local")
    verify.assert_awaited_once()
    assert summary.ledger is not None
    assert summary.ledger.is_clean


@pytest.mark.asyncio
async def test_verification_can_be_disabled(specs, verify, counts):
    summary = await runner.run_seeders(FakeSession(), environment="local", verify=False)
    verify.assert_not_awaited()
    assert summary.ledger is None


@pytest.mark.asyncio
async def test_single_seeder_selection(specs, verify, counts, capsys):
    summary = await runner.run_seeders(FakeSession(), ["beta"], environment="local")
    assert summary.seeders_run == ["beta"]
    assert "[1/1] Seeding Plans..." in capsys.readouterr().out
    assert counts.await_args.args[1] == {"plans"}


@pytest.mark.asyncio
async def test_seeder_error_stops_the_run(specs, verify, counts):
    specs[0].run.side_effect = SeedingError("boom")
    with pytest.raises(SeedingError, match="boom"):
        await runner.run_seeders(FakeSession(), environment="local")
    specs[1].run.assert_not_awaited()
    verify.assert_not_awaited()


# ---------------------------------------------------------------------------
# seed_database
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_seed_database_commits(specs, verify, counts, capsys):
    session = FakeSession()
    summary = await runner.seed_database(environment="local", session_factory=lambda: session)

    assert session.committed is True
    assert session.rolled_back is False
    assert summary.seeders_run == ["alpha", "beta", "gamma"]
    assert "✓ Seed complete! (3 seeders" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_seed_database_rolls_back_and_reraises(specs, verify, counts, capsys):
    verify.side_effect = InvariantViolationError("admin_solvency", "admin is short")
    session = FakeSession()

    with pytest.raises(InvariantViolationError):
        await runner.seed_database(environment="local", session_factory=lambda: session)

    assert session.rolled_back is True
    assert session.committed is False
    assert session.closed is True
    out = capsys.readouterr().out
    assert "❌ Seeding failed: INVARIANT VIOLATION: admin is short" in out
    assert "Seed complete" not in out


@pytest.mark.asyncio
async def test_credentials_printed_after_full_run(specs, verify, counts, capsys):
    await runner.seed_database(
        environment="local", password="password", session_factory=FakeSession
    )
    out = capsys.readouterr().out
    assert "Login credentials:" in out
    assert "admin@preiposip.com / password" in out
    assert "admin@techcorpindia.com / password" in out


@pytest.mark.asyncio
async def test_credentials_not_printed_for_partial_run(specs, verify, counts, capsys):
    await runner.seed_database(
        ["alpha"], environment="local", password="password", session_factory=FakeSession
    )
    assert "Login credentials:" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_count_warnings_are_reported(specs, verify, counts, capsys):
    counts.return_value = [CountCheck(table="settings", minimum=50, actual=3)]
    summary = await runner.seed_database(environment="local", session_factory=FakeSession)
    assert summary.warnings == 1
    assert "1 row count check(s) below the expected minimum" in capsys.readouterr().out
