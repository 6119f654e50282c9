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
from sqlalchemy.orm import Mapped, mapped_column, relationship

from preiposip.models.base import Base, JSONType, Rupees, TimestampMixin, UUIDMixin


class Company(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    sector_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("sectors.id"), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    founded_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    headquarters: Mapped[str | None] = mapped_column(String(150), nullable=True)
    employees_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="company",
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id!r} slug={self.slug!r}>"


class Product(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price_per_share >= 0", name="ck_products_price_non_negative"),
    )

    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default="equity")
    price_per_share: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    min_investment: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    max_investment: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    listing_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)

    company: Mapped["Company"] = relationship(
        "Company",
        back_populates="products",
    )

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} slug={self.slug!r}>"


class ProductHighlight(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "product_highlights"
    __table_args__ = (UniqueConstraint("product_id", "highlight_text"),)

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    highlight_text: Mapped[str] = mapped_column(String(255), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProductFounder(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "product_founders"
    __table_args__ = (UniqueConstraint("product_id", "name"),)

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    role: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProductFundingRound(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "product_funding_rounds"
    __table_args__ = (UniqueConstraint("product_id", "round_type"),)

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    round_type: Mapped[str] = mapped_column(String(50), nullable=False)
    amount_raised: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    valuation: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    funded_at: Mapped[datetime.date] = mapped_column(Date, nullable=False)


class ProductKeyMetric(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "product_key_metrics"
    __table_args__ = (UniqueConstraint("product_id", "metric_name"),)

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    metric_name: Mapped[str] = mapped_column(String(100), nullable=False)
    metric_value: Mapped[str] = mapped_column(String(100), nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class ProductRiskDisclosure(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "product_risk_disclosures"
    __table_args__ = (UniqueConstraint("product_id", "risk_type"),)

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    risk_type: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    severity: Mapped[str] = mapped_column(String(20), nullable=False)


class ProductPriceHistory(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "product_price_history"
    __table_args__ = (UniqueConstraint("product_id", "effective_date"),)

    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    price_per_share: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    effective_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)


class BulkPurchase(UUIDMixin, TimestampMixin, Base):
    """Platform-owned share inventory that user allocations draw down.

    ``value_remaining`` must always equal ``total_value_received`` minus the
    value of every non-reversed allocation against this purchase.
    """

    __tablename__ = "bulk_purchases"
    __table_args__ = (
        UniqueConstraint("product_id", "company_id"),
        CheckConstraint("quantity_allocated <= total_quantity", name="ck_bulk_purchases_quantity"),
        CheckConstraint("value_remaining >= 0", name="ck_bulk_purchases_value_non_negative"),
    )

    product_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("products.id"), nullable=False)
    company_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("companies.id"), nullable=False)
    admin_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)
    total_quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity_allocated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_per_unit: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    discount_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    actual_cost_paid: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    total_value_received: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    value_remaining: Mapped[Decimal] = mapped_column(Numeric(16, 2), nullable=False)
    purchase_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    source_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    approved_by_admin_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
    )
    approved_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def quantity_available(self) -> int:
        return self.total_quantity - self.quantity_allocated

    def __repr__(self) -> str:
        return (
            f"<BulkPurchase id={self.id!r} total_quantity={self.total_quantity!r} "
            f"quantity_allocated={self.quantity_allocated!r}>"
        )


class CompanyShareListing(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "company_share_listings"

    company_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("companies.id"),
        nullable=False,
        unique=True,
    )
    product_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("products.id"), nullable=False)
    share_type: Mapped[str] = mapped_column(String(20), nullable=False, default="equity")
    total_shares_available: Mapped[int] = mapped_column(Integer, nullable=False)
    shares_allocated: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    price_per_share: Mapped[Decimal] = mapped_column(Rupees, nullable=False)
    listing_status: Mapped[str] = mapped_column(String(20), nullable=False, default="approved")
    approved_by_admin_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("users.id"),
        nullable=True,
    )
    approved_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<CompanyShareListing company_id={self.company_id!r}>"


class CompanyUser(UUIDMixin, TimestampMixin, Base):
    """Login for the company portal, separate from investor accounts."""

    __tablename__ = "company_users"

    company_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="admin")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    email_verified_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<CompanyUser email={self.email!r}>"
