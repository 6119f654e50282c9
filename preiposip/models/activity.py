import datetime
import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from preiposip.models.base import Base, JSONType, Paise, Rupees, TimestampMixin, UUIDMixin


class Subscription(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "subscriptions"
    __table_args__ = (UniqueConstraint("user_id", "plan_id"),)

    subscription_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    plan_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("plans.id"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    start_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    next_payment_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    consecutive_payments_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Subscription subscription_code={self.subscription_code!r}>"


class Investment(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "investments"

    subscription_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    product_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("products.id"), nullable=False)
    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"), nullable=False)
    investment_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    invested_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Payment(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "payments"
    __table_args__ = (
        UniqueConstraint("subscription_id", "installment_number"),
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )

    subscription_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    installment_number: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="paid")
    gateway: Mapped[str] = mapped_column(String(30), nullable=False)
    gateway_payment_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    paid_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<Payment subscription_id={self.subscription_id!r} "
            f"installment_number={self.installment_number!r}>"
        )


class UserInvestment(UUIDMixin, TimestampMixin, Base):
    """Shares allocated to a user out of a bulk purchase for one payment."""

    __tablename__ = "user_investments"
    __table_args__ = (
        CheckConstraint("units > 0", name="ck_user_investments_units_positive"),
    )

    payment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("payments.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    product_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("products.id"), nullable=False)
    bulk_purchase_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("bulk_purchases.id"),
        nullable=False,
    )
    units: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_unit: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    value_allocated: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    source: Mapped[str] = mapped_column(String(30), nullable=False, default="sip_payment")
    is_reversed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    allocated_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<UserInvestment payment_id={self.payment_id!r} units={self.units!r}>"


class BonusTransaction(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "bonus_transactions"
    __table_args__ = (UniqueConstraint("subscription_id", "bonus_type"),)

    subscription_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("subscriptions.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    bonus_type: Mapped[str] = mapped_column(String(30), nullable=False)
    base_amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    rate_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    gross_amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    tds_amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False, default=0)
    net_amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<BonusTransaction bonus_type={self.bonus_type!r} net_amount={self.net_amount!r}>"


class Referral(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "referrals"
    __table_args__ = (UniqueConstraint("referrer_id", "referred_id"),)

    referrer_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    referred_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    referral_campaign_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("referral_campaigns.id"),
        nullable=True,
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    bonus_amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False, default=0)
    completed_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )


class Withdrawal(UUIDMixin, TimestampMixin, Base):
    """Payout request. Only ``completed`` withdrawals have ledger postings."""

    __tablename__ = "withdrawals"
    __table_args__ = (
        CheckConstraint("amount_paise > 0", name="ck_withdrawals_amount_positive"),
        CheckConstraint(
            "net_amount_paise = amount_paise - fee_paise",
            name="ck_withdrawals_net_amount",
        ),
    )

    reference: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    wallet_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("wallets.id"), nullable=False)
    amount_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    fee_paise: Mapped[int] = mapped_column(Paise, nullable=False, default=0)
    net_amount_paise: Mapped[int] = mapped_column(Paise, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    bank_details: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    requested_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    processed_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Withdrawal reference={self.reference!r} status={self.status!r}>"
