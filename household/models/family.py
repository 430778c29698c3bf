# household/models/family.py - Family member records
from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import String, Boolean, Date, DateTime, Text, Uuid, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models.base import Base


class FamilyMember(Base):
    __tablename__ = "family_members"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    member_type: Mapped[str] = mapped_column(String(16), nullable=False)  # adult|child
    relationship_type: Mapped[str | None] = mapped_column("relationship", String(32))
    gender: Mapped[str | None] = mapped_column(String(32))
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    medicare_number: Mapped[str | None] = mapped_column(String(32))
    notes: Mapped[str | None] = mapped_column(Text)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(512))

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    enrolments: Mapped[list["SchoolEnrolment"]] = relationship(
        "SchoolEnrolment",
        back_populates="family_member",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    extracurriculars: Mapped[list["Extracurricular"]] = relationship(
        "Extracurricular",
        back_populates="family_member",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    documents: Mapped[list["MemberDocument"]] = relationship(
        "MemberDocument",
        back_populates="family_member",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("member_type IN ('adult','child')", name="ck_family_members_member_type"),
        Index("ix_family_members_type_name", "member_type", "name"),
    )

    def __repr__(self):
        return f"<FamilyMember {self.name} ({self.member_type})>"
