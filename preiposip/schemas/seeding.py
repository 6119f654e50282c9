from pydantic import BaseModel, computed_field

from preiposip.schemas.ledger import LedgerReport


class CountCheck(BaseModel):
    table: str
    minimum: int
    actual: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def passed(self) -> bool:
        return self.actual >= self.minimum


class SeedSummary(BaseModel):
    environment: str
    seeders_run: list[str] = []
    seeders_skipped: list[str] = []
    count_checks: list[CountCheck] = []
    ledger: LedgerReport | None = None  # None when verification was disabled
    elapsed_seconds: float = 0.0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warnings(self) -> int:
        return sum(1 for check in self.count_checks if not check.passed)
