"""SQLAlchemy models for the catalog tables."""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, Index, Numeric, String, Text, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from asset_catalog.core.database import Base


def _new_asset_id() -> str:
    return str(uuid.uuid4())


class AssetRecord(Base):
    """One catalog asset of any variant.

    Policies, Claims and Models share a single table keyed by ``asset_type``.
    Variant-specific columns are null for the other variants.
    """

    __tablename__ = "catalog_assets"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=_new_asset_id)
    asset_type: Mapped[str] = mapped_column(String(16), nullable=False)  # Policy | Claim | Model
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[str] = mapped_column(String, nullable=False)
    # Kept verbatim as supplied at creation
    creation_date: Mapped[str] = mapped_column(String(40), nullable=False)
    pii_tag: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    reg_tag: Mapped[str] = mapped_column(String(16), nullable=False, default="None")

    data_type: Mapped[str | None] = mapped_column(String(16), nullable=True)  # Record | Result
    claim_amount: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)
    status: Mapped[str | None] = mapped_column(String(16), nullable=True)
    policy_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    source_claim_ids: Mapped[list | None] = mapped_column(JSONB, nullable=True)

    # Insertion order is the snapshot order handed to the lineage builder
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("ix_catalog_assets_asset_type", "asset_type"),
        Index("ix_catalog_assets_policy_id", "policy_id"),
    )
