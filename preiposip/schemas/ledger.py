from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, computed_field


class WalletDiscrepancy(BaseModel):
    wallet_id: UUID
    email: str
    balance_paise: int
    expected_paise: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def difference_paise(self) -> int:
        return self.balance_paise - self.expected_paise


class InventoryDiscrepancy(BaseModel):
    bulk_purchase_id: UUID
    total_value_received: Decimal
    allocated_value: Decimal
    value_remaining: Decimal

    @computed_field  # type: ignore[prop-decorator]
    @property
    def expected_remaining(self) -> Decimal:
        return self.total_value_received - self.allocated_value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def difference(self) -> Decimal:
        return self.value_remaining - self.expected_remaining


class SolvencyResult(BaseModel):
    checked: bool  # False when there is no super-admin wallet
    admin_balance_paise: int = 0
    liabilities_paise: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_solvent(self) -> bool:
        return not self.checked or self.admin_balance_paise >= self.liabilities_paise


class LedgerReport(BaseModel):
    tolerance_paise: int
    solvency: SolvencyResult
    wallets_checked: int
    bulk_purchases_checked: int
    wallet_discrepancies: list[WalletDiscrepancy] = []
    inventory_discrepancies: list[InventoryDiscrepancy] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_clean(self) -> bool:
        return (
            self.solvency.is_solvent
            and not self.wallet_discrepancies
            and not self.inventory_discrepancies
        )
