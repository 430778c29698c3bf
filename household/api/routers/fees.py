# household/api/routers/fees.py - School fees, payments and fee reports
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
from datetime import date
import logging

from household.core.config import settings
from household.core.db import get_db
from household.models.enrolment import SchoolEnrolment
from household.models.fee import SchoolFee
from household.models.lookups import FeeType, Frequency
from household.models.school import SchoolTerm
from household.schemas.fee_schema import (
    SchoolFeeCreate, SchoolFeeUpdate, SchoolFeeOut, MarkFeePaid,
    FeeSummaryOut, FeeCalendarOut, FamilyFeesOverview,
)
from household.services.fee_reports import (
    fee_query, fee_to_out, fees_for_year, upcoming_fees, overdue_fees,
    fee_summary, fee_calendar, family_fees_overview,
)

logger = logging.getLogger(__name__)
router = APIRouter()

# Columns that cannot be cleared through an update
REQUIRED_FIELDS = ("description", "amount", "year", "is_paid")


def _get_fee(db: Session, fee_id: UUID) -> SchoolFee:
    fee = db.execute(fee_query().where(SchoolFee.id == fee_id)).scalar_one_or_none()
    if not fee:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fee not found")
    return fee


def _check_references(db: Session, fee_type_id=None, frequency_id=None, school_term_id=None):
    """404 for any referenced lookup or term that does not exist"""
    checks = (
        (FeeType, fee_type_id, "Fee type not found"),
        (Frequency, frequency_id, "Frequency not found"),
        (SchoolTerm, school_term_id, "Term not found"),
    )
    for model, value, detail in checks:
        if value is None:
            continue
        if db.execute(select(model.id).where(model.id == value)).scalar_one_or_none() is None:
            raise HTTPException(status_code=404, detail=detail)


@router.get("/", response_model=List[SchoolFeeOut])
async def list_fees(
    year: Optional[int] = Query(None, ge=1900, le=2100, description="Defaults to the current year"),
    db: Session = Depends(get_db)
):
    year = year or date.today().year
    return [fee_to_out(fee) for fee in fees_for_year(db, year)]


@router.get("/upcoming", response_model=List[SchoolFeeOut])
async def list_upcoming_fees(
    days: Optional[int] = Query(None, ge=1, le=365),
    db: Session = Depends(get_db)
):
    """Unpaid fees due within the next `days` days"""
    window = days or settings.UPCOMING_FEES_DAYS
    return [fee_to_out(fee) for fee in upcoming_fees(db, window)]


@router.get("/overdue", response_model=List[SchoolFeeOut])
async def list_overdue_fees(db: Session = Depends(get_db)):
    return [fee_to_out(fee) for fee in overdue_fees(db)]


@router.get("/summary", response_model=FeeSummaryOut)
async def get_fee_summary(
    year: Optional[int] = Query(None, ge=1900, le=2100),
    db: Session = Depends(get_db)
):
    return fee_summary(db, year or date.today().year)


@router.get("/calendar", response_model=FeeCalendarOut)
async def get_fee_calendar(
    year: Optional[int] = Query(None, ge=1900, le=2100),
    month: Optional[int] = Query(None),
    db: Session = Depends(get_db)
):
    today = date.today()
    try:
        return fee_calendar(db, year or today.year, month or today.month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/family-overview", response_model=FamilyFeesOverview)
async def get_family_fees_overview(
    year: Optional[int] = Query(None, ge=1900, le=2100),
    db: Session = Depends(get_db)
):
    return family_fees_overview(db, year or date.today().year)


@router.post("/", response_model=SchoolFeeOut, status_code=status.HTTP_201_CREATED)
async def create_fee(data: SchoolFeeCreate, db: Session = Depends(get_db)):
    enrolment = db.execute(
        select(SchoolEnrolment).where(SchoolEnrolment.id == data.enrolment_id)
    ).scalar_one_or_none()
    if not enrolment:
        raise HTTPException(status_code=404, detail="Enrolment not found")
    _check_references(db, data.fee_type_id, data.frequency_id, data.school_term_id)

    values = data.model_dump()
    if values["year"] is None:
        values["year"] = date.today().year
    fee = SchoolFee(**values)

    try:
        db.add(fee)
        db.commit()
        logger.info(f"Fee created: {fee.description} ${fee.amount} due {fee.due_date}")
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating fee: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error creating fee"
        )

    return fee_to_out(_get_fee(db, fee.id))


@router.get("/{fee_id}", response_model=SchoolFeeOut)
async def get_fee(fee_id: UUID, db: Session = Depends(get_db)):
    return fee_to_out(_get_fee(db, fee_id))


@router.put("/{fee_id}", response_model=SchoolFeeOut)
async def update_fee(fee_id: UUID, data: SchoolFeeUpdate, db: Session = Depends(get_db)):
    fee = _get_fee(db, fee_id)
    changes = data.model_dump(exclude_unset=True)
    _check_references(db, changes.get("fee_type_id"), changes.get("frequency_id"), changes.get("school_term_id"))

    for field, value in changes.items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(fee, field, value)

    db.commit()
    logger.info(f"Fee updated: {fee_id}")
    return fee_to_out(_get_fee(db, fee_id))


@router.post("/{fee_id}/mark-paid", response_model=SchoolFeeOut)
async def mark_fee_paid(fee_id: UUID, data: Optional[MarkFeePaid] = None, db: Session = Depends(get_db)):
    """Record payment; the date defaults to today and the amount to the full fee"""
    fee = _get_fee(db, fee_id)
    data = data or MarkFeePaid()

    fee.is_paid = True
    fee.paid_date = data.paid_date or date.today()
    fee.paid_amount = data.paid_amount if data.paid_amount is not None else fee.amount
    if data.payment_method:
        fee.payment_method = data.payment_method
    if data.invoice_number:
        fee.invoice_number = data.invoice_number

    db.commit()
    logger.info(f"Fee marked paid: {fee.description} ${fee.paid_amount} on {fee.paid_date}")
    return fee_to_out(_get_fee(db, fee_id))


@router.delete("/{fee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fee(fee_id: UUID, db: Session = Depends(get_db)):
    fee = _get_fee(db, fee_id)
    db.delete(fee)
    db.commit()
    logger.info(f"Fee deleted: {fee_id}")
