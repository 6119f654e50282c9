"""Phase 2: staff and test accounts with profiles, KYC, settings and funded wallets.

Money enters the system exactly once: the super admin's wallet receives the
genesis credit, and every test user's opening balance is a transfer out of
that wallet. This keeps the admin solvent and every wallet reconcilable
against its own transactions.
"""

import datetime
import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from preiposip.config import settings
from preiposip.models import AdminLedgerEntry, Role, User, UserKyc, UserProfile, UserSetting
from preiposip.seeders.base import (
    REFERENCE_DATE,
    REFERENCE_TIME,
    det_digits,
    det_int,
    det_letters,
    first_or_create,
    require,
    update_or_create,
)
from preiposip.services.access import assign_role
from preiposip.services.auth import hash_password
from preiposip.services.wallet import (
    GENESIS_ACCOUNT_USERNAME,
    format_rupees,
    get_or_create_wallet,
    post_transaction,
    transfer,
)

logger = logging.getLogger(__name__)

GENESIS_TRANSACTION_ID = "GENESIS-ADMIN-WALLET"

STAFF_USERS: list[dict[str, str]] = [
    {
        "username": GENESIS_ACCOUNT_USERNAME,
        "email": "admin@preiposip.com",
        "mobile": "+919876543210",
        "referral_code": "ADMIN001",
        "role": "Super Admin",
        "first_name": "Platform",
        "last_name": "Admin",
    },
    {
        "username": "supportmanager",
        "email": "support@preiposip.com",
        "mobile": "+919876543211",
        "referral_code": "SUPPORT01",
        "role": "Support Agent",
        "first_name": "Support",
        "last_name": "Manager",
    },
    {
        "username": "kycreviewer",
        "email": "kyc@preiposip.com",
        "mobile": "+919876543212",
        "referral_code": "KYCREV01",
        "role": "KYC Reviewer",
        "first_name": "KYC",
        "last_name": "Reviewer",
    },
]

# Opening balances are in paise and funded from the genesis wallet.
TEST_USERS: list[dict[str, Any]] = [
    {
        "username": "testuser1",
        "email": "user1@test.com",
        "mobile": "+919876540001",
        "referral_code": "USER0001",
        "first_name": "Aarav",
        "last_name": "Sharma",
        "kyc_status": "verified",
        "opening_balance_paise": 5_000_000,
    },
    {
        "username": "testuser2",
        "email": "user2@test.com",
        "mobile": "+919876540002",
        "referral_code": "USER0002",
        "first_name": "Priya",
        "last_name": "Patel",
        "kyc_status": "verified",
        "opening_balance_paise": 10_000_000,
    },
    {
        "username": "testuser3",
        "email": "user3@test.com",
        "mobile": "+919876540003",
        "referral_code": "USER0003",
        "first_name": "Rohan",
        "last_name": "Mehta",
        "kyc_status": "verified",
        "opening_balance_paise": 2_500_000,
    },
    {
        "username": "testuser4",
        "email": "user4@test.com",
        "mobile": "+919876540004",
        "referral_code": "USER0004",
        "referred_by": "USER0001",
        "first_name": "Ananya",
        "last_name": "Iyer",
        "kyc_status": "verified",
        "opening_balance_paise": 0,
    },
    {
        "username": "testuser5",
        "email": "user5@test.com",
        "mobile": "+919876540005",
        "referral_code": "USER0005",
        "referred_by": "USER0002",
        "first_name": "Vikram",
        "last_name": "Singh",
        "kyc_status": "verified",
        "opening_balance_paise": 0,
    },
    {
        "username": "companyrep1",
        "email": "company1@example.com",
        "mobile": "+919876550001",
        "referral_code": "COMP0001",
        "first_name": "Neha",
        "last_name": "Gupta",
        "kyc_status": "pending",
        "opening_balance_paise": 0,
    },
    {
        "username": "companyrep2",
        "email": "company2@example.com",
        "mobile": "+919876550002",
        "referral_code": "COMP0002",
        "first_name": "Arjun",
        "last_name": "Rao",
        "kyc_status": "pending",
        "opening_balance_paise": 0,
    },
]

CITIES: list[tuple[str, str]] = [
    ("Mumbai", "Maharashtra"),
    ("Pune", "Maharashtra"),
    ("Delhi", "Delhi"),
    ("Bangalore", "Karnataka"),
    ("Hyderabad", "Telangana"),
]


def _profile_values(account: dict[str, Any]) -> dict[str, Any]:
    username = account["username"]
    years = det_int(f"{username}:age", 25, 55)
    dob = REFERENCE_DATE - datetime.timedelta(days=years * 365 + det_int(f"{username}:dob", 1, 364))
    city, state = CITIES[det_int(f"{username}:city", 0, len(CITIES) - 1)]
    return {
        "first_name": account["first_name"],
        "last_name": account["last_name"],
        "dob": dob,
        "gender": "male" if det_int(f"{username}:gender", 0, 1) else "female",
        "address_line_1": f"{det_int(f'{username}:street', 1, 999)} Test Street",
        "address_line_2": "Near Test Landmark",
        "city": city,
        "state": state,
        "pincode": f"400{det_int(f'{username}:pin', 100, 999)}",
        "country": "India",
    }


def _kyc_values(account: dict[str, Any]) -> dict[str, Any]:
    username = account["username"]
    status = account["kyc_status"]
    return {
        "pan_number": det_letters(f"{username}:pan", 5)
        + det_digits(f"{username}:pan", 4)
        + det_letters(f"{username}:pan-check", 1),
        "aadhaar_number": det_digits(f"{username}:aadhaar", 12),
        "bank_account": det_digits(f"{username}:account", 11),
        "bank_ifsc": det_letters(f"{username}:ifsc", 4) + "0" + det_digits(f"{username}:ifsc", 6),
        "status": status,
        "submitted_at": (
            REFERENCE_TIME - datetime.timedelta(days=det_int(f"{username}:submitted", 5, 30))
            if status != "pending"
            else None
        ),
        "verified_at": (
            REFERENCE_TIME - datetime.timedelta(days=det_int(f"{username}:verified", 1, 4))
            if status == "verified"
            else None
        ),
    }


def login_credentials() -> list[tuple[str, str]]:
    """Return ``(label, email)`` pairs for the accounts worth logging in as."""
    staff = [(account["role"], account["email"]) for account in STAFF_USERS]
    users = [
        ("User", account["email"])
        for account in TEST_USERS
        if account["kyc_status"] == "verified"
    ]
    return staff + users


async def _upsert_user(session: AsyncSession, account: dict[str, Any], password_hash: str) -> User:
    values = {
        "email": account["email"],
        "mobile": account["mobile"],
        "password_hash": password_hash,
        "status": "active",
        "referral_code": account["referral_code"],
        "email_verified_at": REFERENCE_TIME,
        "mobile_verified_at": REFERENCE_TIME,
    }
    user, _ = await update_or_create(session, User, {"username": account["username"]}, values)
    return user


async def seed_staff_users(session: AsyncSession, password_hash: str) -> None:
    for account in STAFF_USERS:
        role = await require(session, Role, "foundation", name=account["role"])
        user = await _upsert_user(session, account, password_hash)
        await assign_role(session, user.id, role.id)
        await first_or_create(session, UserProfile, {"user_id": user.id}, _profile_values(account))
    print(f"  ✓ Admin users seeded: {len(STAFF_USERS)} records")


async def seed_test_users(session: AsyncSession, password_hash: str) -> None:
    user_role = await require(session, Role, "foundation", name="User")
    for account in TEST_USERS:
        user = await _upsert_user(session, account, password_hash)
        await assign_role(session, user.id, user_role.id)
        await first_or_create(session, UserProfile, {"user_id": user.id}, _profile_values(account))
        await first_or_create(session, UserKyc, {"user_id": user.id}, _kyc_values(account))
        await first_or_create(session, UserSetting, {"user_id": user.id}, {})

    # Referrers exist only once every test user has been written.
    for account in TEST_USERS:
        referrer_code = account.get("referred_by")
        if referrer_code is None:
            continue
        referrer = await require(session, User, "identity", referral_code=referrer_code)
        user = await require(session, User, "identity", username=account["username"])
        user.referred_by_id = referrer.id
    await session.flush()

    print(f"  ✓ Test users seeded: {len(TEST_USERS)} records")
    print(f"  ✓ User profiles seeded: {len(STAFF_USERS) + len(TEST_USERS)} records")
    print(f"  ✓ User KYC and settings seeded: {len(TEST_USERS)} records")


async def seed_wallets(session: AsyncSession) -> int:
    """Fund the genesis wallet, then transfer opening balances to verified users.

    Returns the total of the opening balances in paise.
    """
    admin = await require(session, User, "identity", username=GENESIS_ACCOUNT_USERNAME)
    admin_wallet, _ = await get_or_create_wallet(session, admin)
    _, created = await post_transaction(
        session,
        admin_wallet,
        transaction_id=GENESIS_TRANSACTION_ID,
        type="credit",
        amount_paise=settings.genesis_balance_paise,
        description="System genesis: platform float for wallet funding",
        reference_type="SystemGenesis",
        owner=admin.username,
    )
    if created:
        print(f"  ✓ Genesis wallet funded: {format_rupees(settings.genesis_balance_paise)}")
    else:
        print("  ✓ Genesis wallet already funded")

    opening_total = 0
    wallets = 0
    for account in TEST_USERS:
        if account["kyc_status"] != "verified":
            continue
        user = await require(session, User, "identity", username=account["username"])
        wallet, _ = await get_or_create_wallet(session, user)
        wallets += 1
        amount = account["opening_balance_paise"]
        if amount <= 0:
            continue
        opening_total += amount
        await transfer(
            session,
            admin_wallet,
            wallet,
            transaction_id=f"OPENING-{account['username'].upper()}",
            amount_paise=amount,
            description=f"Opening test balance for {account['email']}",
            reference_type="SeedOpeningBalance",
            source_owner=admin.username,
        )

    print(
        f"  ✓ Wallets seeded: {wallets + 1} records "
        f"(opening balances {format_rupees(opening_total)})"
    )
    return opening_total


async def seed_admin_ledger_genesis(session: AsyncSession, opening_total_paise: int) -> None:
    result = await session.execute(
        select(AdminLedgerEntry.id).where(
            AdminLedgerEntry.category == "wallet_liability",
            AdminLedgerEntry.subcategory == "genesis",
        )
    )
    if result.first() is not None:
        print("  ⚠ Admin ledger genesis already exists, skipping")
        return

    amount = settings.genesis_balance_paise
    debit = AdminLedgerEntry(
        entry_date=REFERENCE_TIME,
        entry_type="debit",
        category="wallet_liability",
        subcategory="genesis",
        amount_paise=amount,
        balance_after_paise=amount,
        description="GENESIS: Initial Wallet Liability for Test Users",
        entry_metadata={
            "type": "genesis",
            "total_test_wallets_paise": opening_total_paise,
            "buffer_paise": amount - opening_total_paise,
        },
    )
    session.add(debit)
    await session.flush()

    credit = AdminLedgerEntry(
        entry_date=REFERENCE_TIME,
        entry_type="credit",
        category="wallet_liability",
        subcategory="genesis",
        amount_paise=amount,
        balance_after_paise=0,
        description="GENESIS: Offsetting Entry for Initial Liability",
        entry_metadata={"type": "genesis_offset"},
        entry_pair_id=debit.id,
    )
    session.add(credit)
    await session.flush()
    debit.entry_pair_id = credit.id
    await session.flush()

    print(f"  ✓ Admin ledger genesis seeded: {format_rupees(amount)}")


async def run(session: AsyncSession) -> None:
    password_hash = hash_password(settings.seed_password)
    await seed_staff_users(session, password_hash)
    await seed_test_users(session, password_hash)
    opening_total = await seed_wallets(session)
    await seed_admin_ledger_genesis(session, opening_total)
    logger.info("Identity seeded with %d accounts", len(STAFF_USERS) + len(TEST_USERS))
