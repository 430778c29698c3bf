# household/models/enrolment.py - A family member's enrolment at a school
from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import String, Boolean, Date, DateTime, Text, Uuid, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models.base import Base


class SchoolEnrolment(Base):
    __tablename__ = "school_enrolments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    school_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year_level: Mapped[str | None] = mapped_column(String(16))
    enrolment_date: Mapped[date | None] = mapped_column(Date)
    expected_graduation: Mapped[date | None] = mapped_column(Date)
    student_id: Mapped[str | None] = mapped_column(String(64))
    house: Mapped[str | None] = mapped_column(String(64))
    is_current: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    family_member: Mapped["FamilyMember"] = relationship("FamilyMember", back_populates="enrolments")
    school: Mapped["School"] = relationship("School", back_populates="enrolments")
    fees: Mapped[list["SchoolFee"]] = relationship(
        "SchoolFee",
        back_populates="enrolment",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("family_member_id", "school_id", name="uix_enrolment_member_school"),
    )
