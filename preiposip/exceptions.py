"""Errors raised while seeding or verifying the ledger.

Database errors (``IntegrityError`` and friends) are not wrapped; they
propagate unchanged and abort the seeding transaction the same way.
"""


class SeedingError(Exception):
    """Base class for every seeding failure."""


class UnknownSeederError(SeedingError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown seeder: {name!r}")
        self.name = name


class MissingDependencyError(SeedingError):
    """A row a seeder depends on does not exist yet."""

    def __init__(self, model: str, lookup: dict, seeder: str) -> None:
        criteria = ", ".join(f"{key}={value!r}" for key, value in lookup.items())
        super().__init__(f"{model} not found ({criteria}). Run the '{seeder}' seeder first.")
        self.model = model
        self.lookup = lookup
        self.seeder = seeder


class InsufficientFundsError(SeedingError):
    def __init__(self, wallet_owner: str, balance_paise: int, amount_paise: int) -> None:
        super().__init__(
            f"Wallet of {wallet_owner} cannot cover a debit of {amount_paise} paise "
            f"(balance {balance_paise} paise)"
        )
        self.wallet_owner = wallet_owner
        self.balance_paise = balance_paise
        self.amount_paise = amount_paise


class InvariantViolationError(SeedingError):
    """A post-seed ledger check failed; the whole run must roll back."""

    def __init__(self, check: str, detail: str) -> None:
        super().__init__(f"INVARIANT VIOLATION: {detail}")
        self.check = check
        self.detail = detail
