# household/models/school.py - Schools, school years and terms
from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import (
    String, Integer, Date, DateTime, Text, Uuid, ForeignKey,
    CheckConstraint, Index, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models.base import Base


class School(Base):
    __tablename__ = "schools"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    school_type: Mapped[str | None] = mapped_column(String(16))
    sector: Mapped[str | None] = mapped_column(String(16))
    address: Mapped[str | None] = mapped_column(String(256))
    suburb: Mapped[str | None] = mapped_column(String(64))
    state: Mapped[str] = mapped_column(String(3), default="QLD", nullable=False)
    postcode: Mapped[str | None] = mapped_column(String(8))
    phone: Mapped[str | None] = mapped_column(String(32))
    email: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(String(255))
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    years: Mapped[list["SchoolYear"]] = relationship(
        "SchoolYear",
        back_populates="school",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    enrolments: Mapped[list["SchoolEnrolment"]] = relationship(
        "SchoolEnrolment",
        back_populates="school",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("state IN ('QLD','NSW','VIC','SA','WA','TAS','NT','ACT')", name="ck_schools_state"),
    )


class SchoolYear(Base):
    __tablename__ = "school_years"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    school_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    year_start: Mapped[date | None] = mapped_column(Date)
    year_end: Mapped[date | None] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    school: Mapped["School"] = relationship("School", back_populates="years")
    terms: Mapped[list["SchoolTerm"]] = relationship(
        "SchoolTerm",
        back_populates="school_year",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SchoolTerm.term_number",
    )

    __table_args__ = (
        UniqueConstraint("school_id", "year", name="uix_school_year"),
    )


class SchoolTerm(Base):
    __tablename__ = "school_terms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    school_year_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("school_years.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    term_type: Mapped[str] = mapped_column(String(16), default="term", nullable=False)
    term_number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str | None] = mapped_column(String(64))
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    fees_due_date: Mapped[date | None] = mapped_column(Date)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    school_year: Mapped["SchoolYear"] = relationship("SchoolYear", back_populates="terms")

    __table_args__ = (
        CheckConstraint("term_type IN ('term','semester','trimester','quarter')", name="ck_school_terms_term_type"),
        CheckConstraint("end_date >= start_date", name="ck_school_terms_dates"),
        UniqueConstraint("school_year_id", "term_number", name="uix_school_term_number"),
        Index("ix_school_terms_dates", "start_date", "end_date"),
    )
