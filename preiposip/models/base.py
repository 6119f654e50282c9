"""Declarative base, shared mixins and column types for the PreIPOsip schema."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, BigInteger, DateTime, Numeric, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# JSON payload column, stored as JSONB on PostgreSQL.
JSONType = JSON().with_variant(JSONB(), "postgresql")

# Wallet and ledger amounts are whole paise; catalog and payment amounts are rupees.
Paise = BigInteger
Rupees = Numeric(12, 2)


class Base(DeclarativeBase):
    pass


class UUIDMixin:
    """Random UUID primary key, assigned client side so seeders can link rows before flush."""

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
