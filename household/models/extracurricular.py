# household/models/extracurricular.py - Recurring activities and their costs
from __future__ import annotations

import uuid
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    String, Boolean, Numeric, Date, DateTime, Time, Text, JSON, Uuid, ForeignKey, Index
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models.base import Base


class Extracurricular(Base):
    __tablename__ = "extracurriculars"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    activity_type_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("activity_types.id"))
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    provider: Mapped[str | None] = mapped_column(String(128))
    venue: Mapped[str | None] = mapped_column(String(255))

    # Weekday names, e.g. ["Monday", "Wednesday"]
    day_of_week: Mapped[list[str] | None] = mapped_column(JSON)
    time_start: Mapped[time | None] = mapped_column(Time)
    time_end: Mapped[time | None] = mapped_column(Time)
    season_start: Mapped[date | None] = mapped_column(Date)
    season_end: Mapped[date | None] = mapped_column(Date)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    cost_amount: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    cost_frequency_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("frequencies.id"))
    registration_fee: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    equipment_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    uniform_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    other_costs: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    other_costs_description: Mapped[str | None] = mapped_column(String(255))

    contact_name: Mapped[str | None] = mapped_column(String(128))
    contact_phone: Mapped[str | None] = mapped_column(String(32))
    contact_email: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    family_member: Mapped["FamilyMember"] = relationship("FamilyMember", back_populates="extracurriculars")
    activity_type: Mapped[Optional["ActivityType"]] = relationship("ActivityType")
    cost_frequency: Mapped[Optional["Frequency"]] = relationship("Frequency")

    __table_args__ = (
        Index("ix_extracurriculars_member_active", "family_member_id", "is_active"),
    )
