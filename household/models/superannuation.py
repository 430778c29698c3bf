# household/models/superannuation.py - Super contributions and fund balances
from __future__ import annotations

import uuid
import datetime as dt
from decimal import Decimal

from sqlalchemy import (
    String, Boolean, Numeric, Date, DateTime, Text, Uuid,
    CheckConstraint, Index, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column

from household.models.base import Base


class SuperContribution(Base):
    __tablename__ = "super_contributions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    person: Mapped[str] = mapped_column(String(32), nullable=False)
    contribution_type: Mapped[str] = mapped_column(String(32), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    financial_year: Mapped[str] = mapped_column(String(7), nullable=False)
    fund_name: Mapped[str | None] = mapped_column(String(128))
    fund_abn: Mapped[str | None] = mapped_column(String(14))
    employer_name: Mapped[str | None] = mapped_column(String(128))
    is_concessional: Mapped[bool] = mapped_column(Boolean, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_super_contributions_amount_positive"),
        Index("ix_super_contributions_fy_person", "financial_year", "person"),
    )


class SuperAccount(Base):
    __tablename__ = "super_accounts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    person: Mapped[str] = mapped_column(String(32), nullable=False)
    fund_name: Mapped[str] = mapped_column(String(128), nullable=False)
    member_number: Mapped[str | None] = mapped_column(String(64))
    balance: Mapped[Decimal] = mapped_column(Numeric(14, 2), default=Decimal("0.00"), nullable=False)
    balance_date: Mapped[dt.date | None] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime, nullable=False, default=dt.datetime.utcnow, onupdate=dt.datetime.utcnow)

    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_super_accounts_balance_non_negative"),
        UniqueConstraint("person", "fund_name", name="uix_super_account_person_fund"),
    )
