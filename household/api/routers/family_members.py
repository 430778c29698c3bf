# household/api/routers/family_members.py - Family member records and per-member views
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select
from typing import List, Optional, Literal
from uuid import UUID
import logging

from household.core.db import get_db
from household.api.deps.household import commit_or_conflict
from household.api.deps.household import get_family_member
from household.models.document import Document, MemberDocument
from household.models.enrolment import SchoolEnrolment
from household.models.family import FamilyMember
from household.schemas.family import (
    FamilyMemberCreate, FamilyMemberUpdate, FamilyMemberOut, MemberSummaryOut,
)
from household.schemas.document import MemberDocumentCreate, MemberDocumentOut
from household.schemas.enrolment import EnrolmentOut
from household.schemas.extracurricular import ExtracurricularOut, ScheduleDayOut
from household.services.activity_reports import activity_query, activity_to_out, weekly_schedule
from household.services.member_summary import member_summary
from household.models.extracurricular import Extracurricular

logger = logging.getLogger(__name__)
router = APIRouter()

# Columns that cannot be cleared through an update
REQUIRED_FIELDS = ("name", "member_type", "is_primary")


@router.get("/", response_model=List[FamilyMemberOut])
async def list_family_members(
    member_type: Optional[Literal["adult", "child"]] = Query(None),
    db: Session = Depends(get_db)
):
    """Primary member first, then by member type and name"""
    query = select(FamilyMember)
    if member_type:
        query = query.where(FamilyMember.member_type == member_type)
    return db.execute(
        query.order_by(FamilyMember.is_primary.desc(), FamilyMember.member_type, FamilyMember.name)
    ).scalars().all()


@router.post("/", response_model=FamilyMemberOut, status_code=status.HTTP_201_CREATED)
async def create_family_member(data: FamilyMemberCreate, db: Session = Depends(get_db)):
    member = FamilyMember(**data.to_model_fields())

    try:
        db.add(member)
        db.commit()
        db.refresh(member)
        logger.info(f"Family member created: {member.name} ({member.member_type})")
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating family member: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating family member"
        )

    return member


@router.get("/{member_id}", response_model=FamilyMemberOut)
async def get_family_member_detail(member: FamilyMember = Depends(get_family_member)):
    return member


@router.put("/{member_id}", response_model=FamilyMemberOut)
async def update_family_member(
    data: FamilyMemberUpdate,
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    for field, value in data.to_model_fields(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(member, field, value)

    db.commit()
    db.refresh(member)
    logger.info(f"Family member updated: {member.name}")
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_family_member(
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    """Delete a member along with their enrolments, fees, activities and document links"""
    name = member.name
    db.delete(member)
    db.commit()
    logger.info(f"Family member deleted: {name}")


@router.get("/{member_id}/summary", response_model=MemberSummaryOut)
async def get_member_summary(
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    return member_summary(db, member)


@router.get("/{member_id}/enrolments", response_model=List[EnrolmentOut])
async def list_member_enrolments(
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    """Current enrolment first, then most recent"""
    return db.execute(
        select(SchoolEnrolment)
        .where(SchoolEnrolment.family_member_id == member.id)
        .options(selectinload(SchoolEnrolment.school))
        .order_by(SchoolEnrolment.is_current.desc(), SchoolEnrolment.enrolment_date.desc())
    ).scalars().all()


@router.get("/{member_id}/extracurriculars", response_model=List[ExtracurricularOut])
async def list_member_activities(
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    activities = db.execute(
        activity_query()
        .where(Extracurricular.family_member_id == member.id)
        .order_by(Extracurricular.is_active.desc(), Extracurricular.name)
    ).scalars().all()
    return [activity_to_out(activity) for activity in activities]


@router.get("/{member_id}/schedule", response_model=List[ScheduleDayOut])
async def get_member_schedule(
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    return weekly_schedule(db, member.id)


@router.get("/{member_id}/documents", response_model=List[MemberDocumentOut])
async def list_member_documents(
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    return db.execute(
        select(MemberDocument)
        .where(MemberDocument.family_member_id == member.id)
        .options(selectinload(MemberDocument.document))
        .order_by(MemberDocument.created_at.desc())
    ).scalars().all()


@router.post("/{member_id}/documents", response_model=MemberDocumentOut, status_code=status.HTTP_201_CREATED)
async def link_member_document(
    data: MemberDocumentCreate,
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    """Link an existing document record to this member"""
    document = db.execute(
        select(Document).where(Document.id == data.document_id)
    ).scalar_one_or_none()
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")

    link = MemberDocument(family_member_id=member.id, **data.model_dump())
    db.add(link)
    commit_or_conflict(db, f"Document '{document.name}' is already linked to {member.name}")
    db.refresh(link)
    logger.info(f"Document {document.name} linked to {member.name} as {link.document_category}")
    return link


@router.delete("/{member_id}/documents/{link_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_member_document(
    link_id: UUID,
    member: FamilyMember = Depends(get_family_member),
    db: Session = Depends(get_db)
):
    link = db.execute(
        select(MemberDocument).where(
            MemberDocument.id == link_id,
            MemberDocument.family_member_id == member.id,
        )
    ).scalar_one_or_none()
    if not link:
        raise HTTPException(status_code=404, detail="Document link not found")

    document_id = link.document_id
    db.delete(link)
    db.commit()
    logger.info(f"Document {document_id} unlinked from {member.name}")
