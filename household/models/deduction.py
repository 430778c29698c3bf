# household/models/deduction.py - Tax deductions claimed by a household person
from __future__ import annotations

import uuid
import datetime as dt
from decimal import Decimal

from sqlalchemy import String, Boolean, Numeric, Date, DateTime, Text, JSON, Uuid, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from household.models.base import Base


class Deduction(Base):
    __tablename__ = "deductions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    person: Mapped[str] = mapped_column(String(32), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    financial_year: Mapped[str] = mapped_column(String(7), nullable=False)
    # False while the claim is flagged for missing evidence
    is_approved: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    receipt_url: Mapped[str | None] = mapped_column(String(512))
    calculation_method: Mapped[str | None] = mapped_column(String(32))
    calculation_details: Mapped[dict | None] = mapped_column(JSON)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_deductions_amount_positive"),
        Index("ix_deductions_fy_person", "financial_year", "person"),
    )
