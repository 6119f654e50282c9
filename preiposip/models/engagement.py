import datetime
import uuid
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from preiposip.models.base import Base, Rupees, TimestampMixin, UUIDMixin


class SupportTicket(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "support_tickets"

    ticket_code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    priority: Mapped[str] = mapped_column(String(10), nullable=False, default="medium")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="open")
    assigned_to_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<SupportTicket ticket_code={self.ticket_code!r} status={self.status!r}>"


class SupportMessage(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "support_messages"

    support_ticket_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("support_tickets.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    is_admin_reply: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)


class LuckyDrawEntry(UUIDMixin, TimestampMixin, Base):
    """A user's tickets in one draw; winners carry a rank and prize."""

    __tablename__ = "lucky_draw_entries"
    __table_args__ = (
        UniqueConstraint("lucky_draw_id", "user_id"),
        CheckConstraint("base_entries > 0", name="ck_lucky_draw_entries_base_positive"),
    )

    lucky_draw_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("lucky_draws.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    payment_id: Mapped[uuid.UUID | None] = mapped_column(ForeignKey("payments.id"), nullable=True)
    base_entries: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    bonus_entries: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_winner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    prize_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    prize_amount: Mapped[Decimal | None] = mapped_column(Rupees, nullable=True)

    def __repr__(self) -> str:
        return f"<LuckyDrawEntry user_id={self.user_id!r} is_winner={self.is_winner!r}>"


class ProfitShare(UUIDMixin, TimestampMixin, Base):
    """A quarter's profit pool. ``calculated`` shares are not yet paid out."""

    __tablename__ = "profit_shares"

    period_name: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    start_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    total_pool: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    net_profit: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    admin_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<ProfitShare period_name={self.period_name!r} status={self.status!r}>"


class UserProfitShare(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "user_profit_shares"
    __table_args__ = (UniqueConstraint("profit_share_id", "user_id"),)

    profit_share_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("profit_shares.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
