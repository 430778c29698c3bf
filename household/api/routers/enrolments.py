# household/api/routers/enrolments.py - School enrolments for family members
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select, update
from typing import List, Optional
from uuid import UUID
import logging

from household.core.db import get_db
from household.api.deps.household import commit_or_conflict
from household.models.enrolment import SchoolEnrolment
from household.models.family import FamilyMember
from household.models.school import School
from household.schemas.enrolment import EnrolmentCreate, EnrolmentUpdate, EnrolmentOut
from household.schemas.fee_schema import SchoolFeeOut
from household.services.fee_reports import fees_for_enrolment, fee_to_out

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_enrolment(db: Session, enrolment_id: UUID) -> SchoolEnrolment:
    enrolment = db.execute(
        select(SchoolEnrolment)
        .where(SchoolEnrolment.id == enrolment_id)
        .options(selectinload(SchoolEnrolment.school))
    ).scalar_one_or_none()
    if not enrolment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Enrolment not found")
    return enrolment


def _unset_other_current(db: Session, family_member_id: UUID, keep_id: Optional[UUID] = None):
    """A member has at most one current enrolment"""
    query = update(SchoolEnrolment).where(
        SchoolEnrolment.family_member_id == family_member_id,
        SchoolEnrolment.is_current == True,  # noqa: E712
    )
    if keep_id is not None:
        query = query.where(SchoolEnrolment.id != keep_id)
    db.execute(query.values(is_current=False))


@router.post("/", response_model=EnrolmentOut, status_code=status.HTTP_201_CREATED)
async def create_enrolment(data: EnrolmentCreate, db: Session = Depends(get_db)):
    member = db.execute(
        select(FamilyMember).where(FamilyMember.id == data.family_member_id)
    ).scalar_one_or_none()
    if not member:
        raise HTTPException(status_code=404, detail="Family member not found")

    school = db.execute(select(School).where(School.id == data.school_id)).scalar_one_or_none()
    if not school:
        raise HTTPException(status_code=404, detail="School not found")

    if data.is_current:
        _unset_other_current(db, member.id)

    enrolment = SchoolEnrolment(**data.model_dump())
    db.add(enrolment)
    commit_or_conflict(db, f"{member.name} is already enrolled at {school.name}")
    logger.info(f"Enrolment created: {member.name} at {school.name}")
    return _get_enrolment(db, enrolment.id)


@router.get("/{enrolment_id}", response_model=EnrolmentOut)
async def get_enrolment(enrolment_id: UUID, db: Session = Depends(get_db)):
    return _get_enrolment(db, enrolment_id)


@router.put("/{enrolment_id}", response_model=EnrolmentOut)
async def update_enrolment(enrolment_id: UUID, data: EnrolmentUpdate, db: Session = Depends(get_db)):
    enrolment = _get_enrolment(db, enrolment_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "is_current" and value is None:
            continue
        setattr(enrolment, field, value)

    if enrolment.is_current:
        _unset_other_current(db, enrolment.family_member_id, keep_id=enrolment.id)

    db.commit()
    logger.info(f"Enrolment updated: {enrolment_id}")
    return _get_enrolment(db, enrolment_id)


@router.delete("/{enrolment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_enrolment(enrolment_id: UUID, db: Session = Depends(get_db)):
    """Remove an enrolment together with its fees"""
    enrolment = _get_enrolment(db, enrolment_id)
    db.delete(enrolment)
    db.commit()
    logger.info(f"Enrolment deleted: {enrolment_id}")


@router.get("/{enrolment_id}/fees", response_model=List[SchoolFeeOut])
async def list_enrolment_fees(enrolment_id: UUID, db: Session = Depends(get_db)):
    _get_enrolment(db, enrolment_id)
    return [fee_to_out(fee) for fee in fees_for_enrolment(db, enrolment_id)]
