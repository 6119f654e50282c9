"""Composite runner: executes seeders phase by phase inside one transaction."""

import logging
import time
from collections.abc import Iterable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from preiposip.database import AsyncSessionLocal
from preiposip.schemas.seeding import SeedSummary
from preiposip.seeders.company_users import portal_credentials
from preiposip.seeders.identity import login_credentials
from preiposip.seeders.registry import PHASES, SEEDERS, SeederSpec, select_seeders
from preiposip.services.ledger import verify_financial_invariants
from preiposip.services.validation import run_count_checks

logger = logging.getLogger(__name__)

TEST_DATA_ENVIRONMENTS = frozenset({"local", "testing", "development"})


def allows_test_data(environment: str) -> bool:
    return environment.lower() in TEST_DATA_ENVIRONMENTS


def print_credentials(password: str) -> None:
    print("\nLogin credentials:")
    for label, email in login_credentials() + portal_credentials():
        print(f"  {label:<12} {email} / {password}")


async def run_seeders(
    session: AsyncSession,
    names: Iterable[str] | None = None,
    *,
    environment: str,
    verify: bool = True,
) -> SeedSummary:
    """Run the selected seeders in phase order on *session*.

    The caller owns the transaction. Test-data seeders are skipped outside
    :data:`TEST_DATA_ENVIRONMENTS`. With *verify* the ledger invariants are
    checked after the last seeder and a violation propagates as
    :exc:`~preiposip.exceptions.InvariantViolationError`.
    """
    started = time.monotonic()
    selected = select_seeders(names)
    summary = SeedSummary(environment=environment)
    by_phase: dict[int, list[SeederSpec]] = {}
    for spec in selected:
        by_phase.setdefault(spec.phase, []).append(spec)

    total = len(by_phase)
    for index, (phase, specs) in enumerate(sorted(by_phase.items()), start=1):
        print(f"\n[{index}/{total}] Seeding {PHASES[phase]}...")
        for spec in specs:
            if spec.test_data and not allows_test_data(environment):
                print(f"  ⚠ Skipping {spec.name}: test data is not seeded in '{environment}'")
                logger.warning(
                    "Skipped test-data seeder %s (environment=%s)", spec.name, environment
                )
                summary.seeders_skipped.append(spec.name)
                continue
            logger.info("Running seeder %s", spec.name)
            await spec.run(session)
            summary.seeders_run.append(spec.name)
            logger.info("Finished seeder %s", spec.name)

    if verify:
        print("\nVerifying ledger invariants...")
        summary.ledger = await verify_financial_invariants(session)

    touched: set[str] = set()
    for spec in selected:
        if spec.name in summary.seeders_run:
            touched |= spec.tables
    if touched:
        print("\nRow counts:")
        summary.count_checks = await run_count_checks(session, touched)

    summary.elapsed_seconds = round(time.monotonic() - started, 3)
    return summary


async def seed_database(
    names: Iterable[str] | None = None,
    *,
    environment: str,
    verify: bool = True,
    password: str | None = None,
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> SeedSummary:
    """Run :func:`run_seeders` in a fresh session and commit, or roll back on any error."""
    names = list(names or [])
    try:
        async with session_factory() as session, session.begin():
            summary = await run_seeders(session, names, environment=environment, verify=verify)
    except Exception as exc:
        print(f"\n❌ Seeding failed: {exc}")
        logger.error("Seeding failed, transaction rolled back", exc_info=True)
        raise

    print(f"\n✓ Seed complete! ({len(summary.seeders_run)} seeders, {summary.elapsed_seconds}s)")
    if summary.warnings:
        print(f"  ⚠ {summary.warnings} row count check(s) below the expected minimum")
    if password is not None and len(select_seeders(names)) == len(SEEDERS):
        print_credentials(password)
    return summary
