# household/api/routers/extracurriculars.py - Extracurricular activities, costs and the weekly schedule
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
import logging

from household.core.db import get_db
from household.models.extracurricular import Extracurricular
from household.models.family import FamilyMember
from household.models.lookups import ActivityType, Frequency
from household.schemas.extracurricular import (
    ExtracurricularCreate, ExtracurricularUpdate, ExtracurricularOut,
    ActivitySummaryOut, ScheduleDayOut,
)
from household.services.activity_reports import (
    activity_query, activity_to_out, active_activities, activity_summary, weekly_schedule,
)

logger = logging.getLogger(__name__)
router = APIRouter()

REQUIRED_FIELDS = ("name", "is_active")


def _get_activity(db: Session, activity_id: UUID) -> Extracurricular:
    activity = db.execute(
        activity_query().where(Extracurricular.id == activity_id)
    ).scalar_one_or_none()
    if not activity:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activity not found")
    return activity


def _check_lookups(db: Session, activity_type_id=None, cost_frequency_id=None):
    if activity_type_id is not None and db.execute(
        select(ActivityType.id).where(ActivityType.id == activity_type_id)
    ).scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Activity type not found")
    if cost_frequency_id is not None and db.execute(
        select(Frequency.id).where(Frequency.id == cost_frequency_id)
    ).scalar_one_or_none() is None:
        raise HTTPException(status_code=404, detail="Frequency not found")


def _check_times(activity: Extracurricular):
    if activity.time_start and activity.time_end and activity.time_end < activity.time_start:
        raise HTTPException(status_code=400, detail="End time must be after start time")


@router.get("/", response_model=List[ExtracurricularOut])
async def list_active_activities(
    member_id: Optional[UUID] = Query(None, description="Only this family member's activities"),
    db: Session = Depends(get_db)
):
    return [activity_to_out(a) for a in active_activities(db, member_id)]


@router.get("/summary", response_model=ActivitySummaryOut)
async def get_activity_summary(db: Session = Depends(get_db)):
    return activity_summary(db)


@router.get("/schedule", response_model=List[ScheduleDayOut])
async def get_weekly_schedule(
    member_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db)
):
    return weekly_schedule(db, member_id)


@router.post("/", response_model=ExtracurricularOut, status_code=status.HTTP_201_CREATED)
async def create_activity(data: ExtracurricularCreate, db: Session = Depends(get_db)):
    member = db.execute(
        select(FamilyMember).where(FamilyMember.id == data.family_member_id)
    ).scalar_one_or_none()
    if not member:
        raise HTTPException(status_code=404, detail="Family member not found")
    _check_lookups(db, data.activity_type_id, data.cost_frequency_id)

    activity = Extracurricular(**data.model_dump())
    _check_times(activity)

    db.add(activity)
    db.commit()
    logger.info(f"Activity created: {activity.name} for {member.name}")
    return activity_to_out(_get_activity(db, activity.id))


@router.get("/{activity_id}", response_model=ExtracurricularOut)
async def get_activity(activity_id: UUID, db: Session = Depends(get_db)):
    return activity_to_out(_get_activity(db, activity_id))


@router.put("/{activity_id}", response_model=ExtracurricularOut)
async def update_activity(activity_id: UUID, data: ExtracurricularUpdate, db: Session = Depends(get_db)):
    activity = _get_activity(db, activity_id)
    changes = data.model_dump(exclude_unset=True)
    _check_lookups(db, changes.get("activity_type_id"), changes.get("cost_frequency_id"))

    for field, value in changes.items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(activity, field, value)

    try:
        _check_times(activity)
    except HTTPException:
        db.rollback()
        raise

    db.commit()
    logger.info(f"Activity updated: {activity_id}")
    return activity_to_out(_get_activity(db, activity_id))


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(activity_id: UUID, db: Session = Depends(get_db)):
    activity = _get_activity(db, activity_id)
    name = activity.name
    db.delete(activity)
    db.commit()
    logger.info(f"Activity deleted: {name}")
