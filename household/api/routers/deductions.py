# household/api/routers/deductions.py - Deductions, evidence flags and the WFH/vehicle calculators
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
import logging

from household.core.db import get_db
from household.api.deps.household import get_financial_year, optional_income_person
from household.models.deduction import Deduction
from household.schemas.deduction import (
    DeductionCreate, DeductionUpdate, DeductionOut, DeductionResult, DeductionSummaryOut,
    WFHCalculationIn, WFHCalculationOut, WFHDeductionCreate,
    VehicleCalculationIn, VehicleCalculationOut, VehicleDeductionCreate,
)
from household.services.deduction_rules import (
    check_deduction, calculate_wfh, wfh_description, wfh_period_notes,
    calculate_vehicle, vehicle_description,
)
from household.services.financial_year import financial_year_for
from household.services.tax_tracker import deductions_for_year, summarise_deductions

logger = logging.getLogger(__name__)
router = APIRouter()

REQUIRED_FIELDS = ("person", "category", "description", "amount", "date")


def _get_deduction(db: Session, deduction_id: UUID) -> Deduction:
    deduction = db.execute(select(Deduction).where(Deduction.id == deduction_id)).scalar_one_or_none()
    if not deduction:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Deduction not found")
    return deduction


def _save_checked(db: Session, deduction: Deduction) -> DeductionResult:
    """Apply the evidence rules, persist, and report any flags"""
    check = check_deduction(deduction.category, deduction.amount, deduction.receipt_url)
    deduction.is_approved = not check.flagged
    deduction.financial_year = financial_year_for(deduction.date)

    db.add(deduction)
    db.commit()
    db.refresh(deduction)

    if check.flagged:
        logger.warning(f"Deduction flagged: {deduction.person} {deduction.category} ${deduction.amount} - {'; '.join(check.reasons)}")
    return DeductionResult(
        deduction=DeductionOut.model_validate(deduction),
        flagged=check.flagged,
        flag_reasons=check.reasons,
    )


@router.get("/", response_model=List[DeductionOut])
async def list_deductions(
    financial_year: str = Depends(get_financial_year),
    person: Optional[str] = Depends(optional_income_person),
    db: Session = Depends(get_db)
):
    return deductions_for_year(db, financial_year, person)


@router.get("/summary", response_model=DeductionSummaryOut)
async def get_deduction_summary(
    financial_year: str = Depends(get_financial_year),
    person: Optional[str] = Depends(optional_income_person),
    db: Session = Depends(get_db)
):
    return summarise_deductions(financial_year, deductions_for_year(db, financial_year, person), person)


@router.post("/", response_model=DeductionResult, status_code=status.HTTP_201_CREATED)
async def create_deduction(data: DeductionCreate, db: Session = Depends(get_db)):
    result = _save_checked(db, Deduction(**data.model_dump()))
    logger.info(f"Deduction added: {data.person} {data.category} ${data.amount}")
    return result


# Calculators
@router.post("/calculate/wfh", response_model=WFHCalculationOut)
async def calculate_wfh_deduction(data: WFHCalculationIn):
    """Fixed rate method: hours worked at home x 67 cents"""
    return calculate_wfh(data.hours_per_week, data.weeks)


@router.post("/calculate/vehicle", response_model=VehicleCalculationOut)
async def calculate_vehicle_deduction(data: VehicleCalculationIn):
    """Cents per kilometre method, capped at 5,000 km"""
    return calculate_vehicle(data.kilometres)


@router.post("/wfh", response_model=DeductionResult, status_code=status.HTTP_201_CREATED)
async def add_wfh_deduction(data: WFHDeductionCreate, db: Session = Depends(get_db)):
    calc = calculate_wfh(data.hours_per_week, data.weeks)
    if calc.deduction <= 0:
        raise HTTPException(status_code=400, detail="WFH deduction must be greater than zero")

    deduction = Deduction(
        person=data.person,
        category="work_from_home",
        description=wfh_description(calc),
        amount=calc.deduction,
        date=data.period_end,
        receipt_url=data.receipt_url,
        calculation_method="fixed_rate",
        calculation_details=calc.details(),
        notes=data.notes or wfh_period_notes(data.period_start, data.period_end),
    )
    result = _save_checked(db, deduction)
    logger.info(f"WFH deduction added: {data.person} {calc.total_hours} hours ${calc.deduction}")
    return result


@router.post("/vehicle", response_model=DeductionResult, status_code=status.HTTP_201_CREATED)
async def add_vehicle_deduction(data: VehicleDeductionCreate, db: Session = Depends(get_db)):
    calc = calculate_vehicle(data.kilometres)
    if calc.deduction <= 0:
        raise HTTPException(status_code=400, detail="Vehicle deduction must be greater than zero")

    deduction = Deduction(
        person=data.person,
        category="vehicle",
        description=data.description or vehicle_description(calc),
        amount=calc.deduction,
        date=data.date,
        receipt_url=data.receipt_url,
        calculation_method="cents_per_km",
        calculation_details=calc.details(),
        notes=data.notes,
    )
    result = _save_checked(db, deduction)
    logger.info(f"Vehicle deduction added: {data.person} {calc.claimable_km} km ${calc.deduction}")
    return result


@router.get("/{deduction_id}", response_model=DeductionOut)
async def get_deduction(deduction_id: UUID, db: Session = Depends(get_db)):
    return _get_deduction(db, deduction_id)


@router.put("/{deduction_id}", response_model=DeductionResult)
async def update_deduction(deduction_id: UUID, data: DeductionUpdate, db: Session = Depends(get_db)):
    """Apply changes and re-run the evidence checks"""
    deduction = _get_deduction(db, deduction_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in REQUIRED_FIELDS and value is None:
            continue
        setattr(deduction, field, value)

    result = _save_checked(db, deduction)
    logger.info(f"Deduction updated: {deduction_id}")
    return result


@router.post("/{deduction_id}/approve", response_model=DeductionOut)
async def approve_deduction(deduction_id: UUID, db: Session = Depends(get_db)):
    """Approve a flagged claim once the evidence has been sighted"""
    deduction = _get_deduction(db, deduction_id)
    deduction.is_approved = True
    db.commit()
    db.refresh(deduction)
    logger.info(f"Deduction approved: {deduction_id}")
    return deduction


@router.delete("/{deduction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deduction(deduction_id: UUID, db: Session = Depends(get_db)):
    deduction = _get_deduction(db, deduction_id)
    db.delete(deduction)
    db.commit()
    logger.info(f"Deduction deleted: {deduction_id}")
