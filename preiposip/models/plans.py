import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from preiposip.models.base import Base, JSONType, Rupees, TimestampMixin, UUIDMixin


class Plan(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "plans"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    monthly_amount: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    duration_months: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Plan id={self.id!r} slug={self.slug!r}>"


class PlanFeature(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "plan_features"
    __table_args__ = (UniqueConstraint("plan_id", "feature_text"),)

    plan_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    feature_text: Mapped[str] = mapped_column(String(255), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class PlanConfig(UUIDMixin, TimestampMixin, Base):
    """Business rule for one plan; ``value`` is any JSON scalar."""

    __tablename__ = "plan_configs"
    __table_args__ = (UniqueConstraint("plan_id", "config_key"),)

    plan_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("plans.id", ondelete="CASCADE"),
        nullable=False,
    )
    config_key: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[Any] = mapped_column(JSONType, nullable=False)

    def __repr__(self) -> str:
        return f"<PlanConfig config_key={self.config_key!r} value={self.value!r}>"


class Menu(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "menus"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    items: Mapped[list["MenuItem"]] = relationship(
        "MenuItem",
        back_populates="menu",
        order_by="MenuItem.display_order",
    )

    def __repr__(self) -> str:
        return f"<Menu slug={self.slug!r}>"


class MenuItem(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "menu_items"
    __table_args__ = (UniqueConstraint("menu_id", "label"),)

    menu_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("menus.id", ondelete="CASCADE"),
        nullable=False,
    )
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    url: Mapped[str] = mapped_column(String(255), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    menu: Mapped["Menu"] = relationship(
        "Menu",
        back_populates="items",
    )
