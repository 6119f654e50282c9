import datetime
import uuid
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from preiposip.models.base import Base, JSONType, Paise, TimestampMixin, UUIDMixin


class Wallet(UUIDMixin, TimestampMixin, Base):
    """A user's rupee wallet. Balances are integer paise."""

    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint("balance_paise >= 0", name="ck_wallets_balance_non_negative"),
        CheckConstraint("locked_balance_paise >= 0", name="ck_wallets_locked_non_negative"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    balance_paise: Mapped[int] = mapped_column(Paise, nullable=False, default=0)
    locked_balance_paise: Mapped[int] = mapped_column(Paise, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Wallet id={self.id!r} balance_paise={self.balance_paise!r}>"


class Transaction(UUIDMixin, TimestampMixin, Base):
    """One wallet posting. ``transaction_id`` is the idempotency key."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount_paise > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_wallet_id_status", "wallet_id", "status"),
    )

    transaction_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    wallet_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("wallets.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="completed")
    amount_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    balance_before_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    balance_after_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reference_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Transaction transaction_id={self.transaction_id!r} "
            f"type={self.type!r} amount_paise={self.amount_paise!r}>"
        )


class AdminLedgerEntry(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "admin_ledger_entries"

    entry_date: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    entry_type: Mapped[str] = mapped_column(String(10), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    subcategory: Mapped[str | None] = mapped_column(String(50), nullable=True)
    amount_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    balance_after_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reference_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_id: Mapped[uuid.UUID | None] = mapped_column(nullable=True)
    # "metadata" is reserved on declarative classes.
    entry_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata",
        JSONType,
        nullable=True,
    )
    entry_pair_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("admin_ledger_entries.id"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<AdminLedgerEntry id={self.id!r} entry_type={self.entry_type!r}>"
