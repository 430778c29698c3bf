# household/models/document.py - Document metadata and links to family members
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    String, BigInteger, DateTime, Text, JSON, Uuid, ForeignKey,
    CheckConstraint, Index, UniqueConstraint
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from household.models.base import Base


class Document(Base):
    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    original_filename: Mapped[str | None] = mapped_column(String(255))
    storage_path: Mapped[str | None] = mapped_column(String(512))
    file_type: Mapped[str | None] = mapped_column(String(128))
    file_size: Mapped[int | None] = mapped_column(BigInteger)
    entity_type: Mapped[str] = mapped_column(String(16), default="personal", nullable=False)
    document_type: Mapped[str] = mapped_column(String(32), default="other", nullable=False)
    financial_year: Mapped[str | None] = mapped_column(String(7))
    description: Mapped[str | None] = mapped_column(Text)
    tags: Mapped[list[str] | None] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    member_links: Mapped[list["MemberDocument"]] = relationship(
        "MemberDocument",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("entity_type IN ('personal','smsf','trust')", name="ck_documents_entity_type"),
        Index("ix_documents_entity_fy", "entity_type", "financial_year"),
    )


class MemberDocument(Base):
    __tablename__ = "member_documents"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    family_member_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("family_members.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    document_category: Mapped[str] = mapped_column(String(32), default="other", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    family_member: Mapped["FamilyMember"] = relationship("FamilyMember", back_populates="documents")
    document: Mapped["Document"] = relationship("Document", back_populates="member_links")

    __table_args__ = (
        UniqueConstraint("family_member_id", "document_id", name="uix_member_document"),
    )
