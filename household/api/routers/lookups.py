# household/api/routers/lookups.py - Fee types, activity types and frequencies
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List
from uuid import UUID
import logging

from household.core.db import get_db
from household.api.deps.household import commit_or_conflict
from household.models.lookups import FeeType, ActivityType, Frequency
from household.schemas.lookups import (
    FeeTypeCreate, FeeTypeUpdate, FeeTypeOut,
    ActivityTypeCreate, ActivityTypeUpdate, ActivityTypeOut,
    FrequencyCreate, FrequencyUpdate, FrequencyOut,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _list(db: Session, model):
    return db.execute(
        select(model).order_by(model.sort_order, model.name)
    ).scalars().all()


def _get_custom(db: Session, model, lookup_id: UUID, label: str):
    """Load a lookup row that the household is allowed to change"""
    row = db.execute(select(model).where(model.id == lookup_id)).scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")
    if row.is_system:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"System {label.lower()} '{row.name}' cannot be modified"
        )
    return row


def _create(db: Session, model, data, label: str):
    row = model(**data.model_dump(), is_system=False)
    db.add(row)
    commit_or_conflict(db, f"{label} '{data.name}' already exists")
    db.refresh(row)
    logger.info(f"{label} created: {row.name}")
    return row


def _update(db: Session, model, lookup_id: UUID, data, label: str):
    row = _get_custom(db, model, lookup_id, label)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("name", "sort_order") and value is None:
            continue
        setattr(row, field, value)
    commit_or_conflict(db, f"{label} '{row.name}' already exists")
    db.refresh(row)
    logger.info(f"{label} updated: {row.name}")
    return row


def _delete(db: Session, model, lookup_id: UUID, label: str):
    row = _get_custom(db, model, lookup_id, label)
    name = row.name
    db.delete(row)
    commit_or_conflict(db, f"{label} '{name}' is still in use")
    logger.info(f"{label} deleted: {name}")


# Fee types
@router.get("/fee-types", response_model=List[FeeTypeOut])
async def list_fee_types(db: Session = Depends(get_db)):
    return _list(db, FeeType)


@router.post("/fee-types", response_model=FeeTypeOut, status_code=status.HTTP_201_CREATED)
async def create_fee_type(data: FeeTypeCreate, db: Session = Depends(get_db)):
    return _create(db, FeeType, data, "Fee type")


@router.put("/fee-types/{fee_type_id}", response_model=FeeTypeOut)
async def update_fee_type(fee_type_id: UUID, data: FeeTypeUpdate, db: Session = Depends(get_db)):
    return _update(db, FeeType, fee_type_id, data, "Fee type")


@router.delete("/fee-types/{fee_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fee_type(fee_type_id: UUID, db: Session = Depends(get_db)):
    _delete(db, FeeType, fee_type_id, "Fee type")


# Activity types
@router.get("/activity-types", response_model=List[ActivityTypeOut])
async def list_activity_types(db: Session = Depends(get_db)):
    return _list(db, ActivityType)


@router.post("/activity-types", response_model=ActivityTypeOut, status_code=status.HTTP_201_CREATED)
async def create_activity_type(data: ActivityTypeCreate, db: Session = Depends(get_db)):
    return _create(db, ActivityType, data, "Activity type")


@router.put("/activity-types/{activity_type_id}", response_model=ActivityTypeOut)
async def update_activity_type(activity_type_id: UUID, data: ActivityTypeUpdate, db: Session = Depends(get_db)):
    return _update(db, ActivityType, activity_type_id, data, "Activity type")


@router.delete("/activity-types/{activity_type_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity_type(activity_type_id: UUID, db: Session = Depends(get_db)):
    _delete(db, ActivityType, activity_type_id, "Activity type")


# Frequencies
@router.get("/frequencies", response_model=List[FrequencyOut])
async def list_frequencies(db: Session = Depends(get_db)):
    return _list(db, Frequency)


@router.post("/frequencies", response_model=FrequencyOut, status_code=status.HTTP_201_CREATED)
async def create_frequency(data: FrequencyCreate, db: Session = Depends(get_db)):
    return _create(db, Frequency, data, "Frequency")


@router.put("/frequencies/{frequency_id}", response_model=FrequencyOut)
async def update_frequency(frequency_id: UUID, data: FrequencyUpdate, db: Session = Depends(get_db)):
    return _update(db, Frequency, frequency_id, data, "Frequency")


@router.delete("/frequencies/{frequency_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_frequency(frequency_id: UUID, db: Session = Depends(get_db)):
    _delete(db, Frequency, frequency_id, "Frequency")
