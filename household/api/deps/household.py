# household/api/deps/household.py - Shared request dependencies and write helpers
from fastapi import Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from household.core.config import settings
from household.core.db import get_db
from household.models.family import FamilyMember
from household.services.financial_year import current_financial_year, financial_year_start

logger = logging.getLogger(__name__)


def get_financial_year(
    financial_year: Optional[str] = Query(None, description="Financial year, e.g. 2024-25. Defaults to the current year"),
) -> str:
    """Resolve the requested financial year, defaulting to the current one"""
    if financial_year is None:
        return current_financial_year()
    try:
        financial_year_start(financial_year)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return financial_year


def get_household_person(person: str) -> str:
    """Path/query person for super and tax views; joint is not a taxpayer"""
    person = person.strip().lower()
    if person not in settings.household_persons:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown person '{person}'. Expected one of: {settings.household_persons}"
        )
    return person


def optional_income_person(person: Optional[str] = Query(None, description="Filter by person")) -> Optional[str]:
    if person is None:
        return None
    person = person.strip().lower()
    if person not in settings.income_persons:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"person must be one of: {settings.income_persons}"
        )
    return person


def get_family_member(member_id: UUID, db: Session = Depends(get_db)) -> FamilyMember:
    member = db.execute(
        select(FamilyMember).where(FamilyMember.id == member_id)
    ).scalar_one_or_none()
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Family member not found")
    return member


def commit_or_conflict(db: Session, conflict_detail: str):
    """Commit, turning constraint violations into a 409 with a readable message"""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error: {e.orig}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=conflict_detail)
