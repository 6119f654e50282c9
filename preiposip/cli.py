"""Command line entry point: ``preiposip-seed seed|verify|list``."""

import argparse
import asyncio
import logging
from collections.abc import Sequence

from preiposip import __version__
from preiposip.config import settings
from preiposip.database import AsyncSessionLocal, engine
from preiposip.exceptions import UnknownSeederError
from preiposip.schemas.ledger import LedgerReport
from preiposip.seeders.registry import ALL, PHASES, SEEDERS, select_seeders
from preiposip.seeders.runner import allows_test_data, seed_database
from preiposip.services.ledger import build_ledger_report
from preiposip.services.wallet import format_rupees

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="preiposip-seed",
        description="Seed the PreIPOsip database with idempotent fixture data",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    seed = subparsers.add_parser("seed", help="Run seeders inside one transaction")
    seed.add_argument(
        "--class",
        dest="seeders",
        action="append",
        metavar="NAME",
        help=f"Seeder to run; repeat for several (default: {ALL})",
    )
    seed.add_argument(
        "--env",
        default=settings.app_env,
        help="Environment name; test data is only seeded in local, testing and development",
    )
    seed.add_argument(
        "--no-verify",
        dest="verify",
        action="store_false",
        help="Skip the ledger invariant check",
    )

    verify = subparsers.add_parser("verify", help="Reconcile wallets and inventory (read-only)")
    verify.add_argument("--user", metavar="EMAIL", help="Only check this user's wallet")
    verify.add_argument(
        "--tolerance-paise",
        type=int,
        default=settings.ledger_tolerance_paise,
        help="Allowed difference per wallet or bulk purchase, in paise",
    )

    subparsers.add_parser("list", help="List seeders in phase order")
    return parser


def print_report(report: LedgerReport) -> None:
    solvency = report.solvency
    if not solvency.checked:
        print("  ⚠ Admin wallet not found, solvency not checked")
    elif solvency.is_solvent:
        print(
            f"  ✓ Admin solvency: {format_rupees(solvency.admin_balance_paise)} covers "
            f"{format_rupees(solvency.liabilities_paise)}"
        )
    else:
        print(
            f"  ✗ Admin solvency: {format_rupees(solvency.admin_balance_paise)} is below "
            f"{format_rupees(solvency.liabilities_paise)}"
        )

    for wallet in report.wallet_discrepancies:
        print(
            f"  ✗ Wallet {wallet.email}: balance {format_rupees(wallet.balance_paise)}, "
            f"transactions {format_rupees(wallet.expected_paise)} "
            f"(off by {format_rupees(wallet.difference_paise)})"
        )
    for purchase in report.inventory_discrepancies:
        print(
            f"  ✗ Bulk purchase {purchase.bulk_purchase_id}: ₹{purchase.value_remaining} "
            f"remaining, expected ₹{purchase.expected_remaining}"
        )

    print(
        f"\nChecked {report.wallets_checked} wallets and "
        f"{report.bulk_purchases_checked} bulk purchases "
        f"(tolerance {report.tolerance_paise} paise)"
    )
    print("✓ Ledger is consistent" if report.is_clean else "❌ Ledger discrepancies found")


def list_seeders() -> None:
    for phase, title in PHASES.items():
        print(f"\n[{phase}] {title}")
        for spec in SEEDERS:
            if spec.phase == phase:
                marker = " (test data)" if spec.test_data else ""
                print(f"  {spec.name:<16} {spec.description}{marker}")


async def _seed(args: argparse.Namespace) -> int:
    print(settings.app_name)
    print("=" * 50)
    if not allows_test_data(args.env):
        print(f"Environment '{args.env}': test data seeders will be skipped")
    await seed_database(
        args.seeders,
        environment=args.env,
        verify=args.verify,
        password=settings.seed_password,
    )
    return 0


async def _verify(args: argparse.Namespace) -> int:
    async with AsyncSessionLocal() as session:
        report = await build_ledger_report(
            session,
            tolerance_paise=args.tolerance_paise,
            user_email=args.user,
        )
    if args.user is not None and report.wallets_checked == 0:
        logger.warning("No wallet found for %s", args.user)
        print(f"⚠ No wallet found for {args.user}")
        return 1
    print_report(report)
    return 0 if report.is_clean else 1


async def _dispatch(args: argparse.Namespace) -> int:
    try:
        if args.command == "seed":
            return await _seed(args)
        return await _verify(args)
    finally:
        await engine.dispose()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "list":
        list_seeders()
        return 0

    if args.command == "seed":
        # Fail on a typo before connecting to the database.
        try:
            select_seeders(args.seeders)
        except UnknownSeederError as exc:
            print(f"❌ {exc}. Available: {', '.join(spec.name for spec in SEEDERS)}")
            return 1

    try:
        return asyncio.run(_dispatch(args))
    except Exception as exc:
        # The seed runner reports its own failures before re-raising.
        if args.command != "seed":
            print(f"❌ {args.command} failed: {exc}")
            logger.error("Command %s failed", args.command, exc_info=True)
        return 1
