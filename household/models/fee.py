# household/models/fee.py - School fees owed against an enrolment
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    String, Integer, Boolean, Numeric, Date, DateTime, Text, Uuid, ForeignKey,
    CheckConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models.base import Base


class SchoolFee(Base):
    __tablename__ = "school_fees"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    enrolment_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("school_enrolments.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    fee_type_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("fee_types.id"))
    frequency_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("frequencies.id"))
    school_term_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("school_terms.id", ondelete="SET NULL"),
        nullable=True,
    )
    description: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    is_paid: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    paid_date: Mapped[date | None] = mapped_column(Date)
    paid_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    payment_method: Mapped[str | None] = mapped_column(String(16))
    invoice_number: Mapped[str | None] = mapped_column(String(64))
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    enrolment: Mapped["SchoolEnrolment"] = relationship("SchoolEnrolment", back_populates="fees")
    fee_type: Mapped[Optional["FeeType"]] = relationship("FeeType")
    frequency: Mapped[Optional["Frequency"]] = relationship("Frequency")
    school_term: Mapped[Optional["SchoolTerm"]] = relationship("SchoolTerm")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_school_fees_amount_positive"),
        CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('bank_transfer','bpay','credit_card','direct_debit','cash','other')",
            name="ck_school_fees_payment_method",
        ),
        Index("ix_school_fees_year_due", "year", "due_date"),
        Index("ix_school_fees_unpaid_due", "is_paid", "due_date"),
    )
