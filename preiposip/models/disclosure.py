import uuid
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from preiposip.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class DisclosureModule(UUIDMixin, TimestampMixin, Base):
    """Definition of one regulatory disclosure a company must submit.

    ``json_schema`` (draft-07) describes the structured data; the freshness
    columns say how quickly a submission goes stale: ``update_required``
    modules age after ``expected_update_days``, ``version_controlled`` modules
    become unstable after ``max_changes_per_window`` edits inside
    ``stability_window_days``.
    """

    __tablename__ = "disclosure_modules"

    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    help_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    tier: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    document_type: Mapped[str] = mapped_column(String(30), nullable=False)
    expected_update_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stability_window_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_changes_per_window: Mapped[int | None] = mapped_column(Integer, nullable=True)
    freshness_weight: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    json_schema: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    default_data: Mapped[dict[str, Any] | None] = mapped_column(JSONType, nullable=True)
    sebi_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    regulatory_references: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSONType,
        nullable=True,
    )
    requires_admin_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    min_approval_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    approval_checklist: Mapped[list[str] | None] = mapped_column(JSONType, nullable=True)
    created_by_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("users.id"), nullable=False)

    def __repr__(self) -> str:
        return f"<DisclosureModule code={self.code!r} tier={self.tier!r}>"
