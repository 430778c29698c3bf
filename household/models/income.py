# household/models/income.py - Income received by a household person
from __future__ import annotations

import uuid
import datetime as dt
from decimal import Decimal

from sqlalchemy import String, Boolean, Numeric, Date, DateTime, Text, Uuid, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column

from household.models.base import Base


class Income(Base):
    __tablename__ = "income"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    person: Mapped[str] = mapped_column(String(32), nullable=False)
    source: Mapped[str] = mapped_column(String(255), nullable=False)
    income_type: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    financial_year: Mapped[str] = mapped_column(String(7), nullable=False)
    franking_credits: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    tax_withheld: Mapped[Decimal] = mapped_column(Numeric(12, 2), default=Decimal("0.00"), nullable=False)
    is_taxable: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_income_amount_positive"),
        CheckConstraint("franking_credits >= 0", name="ck_income_franking_non_negative"),
        CheckConstraint("tax_withheld >= 0", name="ck_income_withheld_non_negative"),
        Index("ix_income_fy_person", "financial_year", "person"),
    )
