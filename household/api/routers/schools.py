# household/api/routers/schools.py - Schools, school years and terms
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select
from typing import List, Optional
from uuid import UUID
from datetime import date
import logging

from household.core.db import get_db
from household.api.deps.household import commit_or_conflict
from household.models.enrolment import SchoolEnrolment
from household.models.school import School, SchoolYear, SchoolTerm
from household.schemas.enrolment import EnrolmentOut
from household.schemas.school import (
    SchoolCreate, SchoolUpdate, SchoolOut, SchoolDetail,
    SchoolYearCreate, SchoolYearUpdate, SchoolYearOut, SchoolYearDetail,
    SchoolTermCreate, SchoolTermUpdate, SchoolTermOut, SchoolTermSyncItem,
    SchoolTermTemplateOut, TermSyncResult, TermType,
)
from household.services.term_dates import (
    generate_default_terms, get_current_term, get_next_term, days_until_fees_due,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_school(db: Session, school_id: UUID) -> School:
    school = db.execute(select(School).where(School.id == school_id)).scalar_one_or_none()
    if not school:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="School not found")
    return school


def _get_year(db: Session, year_id: UUID) -> SchoolYear:
    year = db.execute(select(SchoolYear).where(SchoolYear.id == year_id)).scalar_one_or_none()
    if not year:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="School year not found")
    return year


def _get_term(db: Session, term_id: UUID) -> SchoolTerm:
    term = db.execute(select(SchoolTerm).where(SchoolTerm.id == term_id)).scalar_one_or_none()
    if not term:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Term not found")
    return term


def _terms_for_year(db: Session, year_id: UUID) -> List[SchoolTerm]:
    return db.execute(
        select(SchoolTerm)
        .where(SchoolTerm.school_year_id == year_id)
        .order_by(SchoolTerm.term_number)
    ).scalars().all()


# Schools
@router.get("/", response_model=List[SchoolOut])
async def list_schools(db: Session = Depends(get_db)):
    return db.execute(select(School).order_by(School.name)).scalars().all()


@router.post("/", response_model=SchoolOut, status_code=status.HTTP_201_CREATED)
async def create_school(data: SchoolCreate, db: Session = Depends(get_db)):
    school = School(**data.model_dump())
    db.add(school)
    db.commit()
    db.refresh(school)
    logger.info(f"School created: {school.name} ({school.state})")
    return school


@router.get("/{school_id}", response_model=SchoolDetail)
async def get_school(school_id: UUID, db: Session = Depends(get_db)):
    """School with every year (newest first) and its terms"""
    school = db.execute(
        select(School)
        .where(School.id == school_id)
        .options(selectinload(School.years).selectinload(SchoolYear.terms))
    ).scalar_one_or_none()
    if not school:
        raise HTTPException(status_code=404, detail="School not found")

    detail = SchoolDetail.model_validate(school)
    detail.years = sorted(detail.years, key=lambda y: y.year, reverse=True)
    return detail


@router.put("/{school_id}", response_model=SchoolOut)
async def update_school(school_id: UUID, data: SchoolUpdate, db: Session = Depends(get_db)):
    school = _get_school(db, school_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("name", "state") and value is None:
            continue
        setattr(school, field, value)
    db.commit()
    db.refresh(school)
    logger.info(f"School updated: {school.name}")
    return school


@router.delete("/{school_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_school(school_id: UUID, db: Session = Depends(get_db)):
    """Delete a school with its years, terms, enrolments and fees"""
    school = _get_school(db, school_id)
    name = school.name
    db.delete(school)
    db.commit()
    logger.info(f"School deleted: {name}")


@router.get("/{school_id}/enrolments", response_model=List[EnrolmentOut])
async def list_school_enrolments(school_id: UUID, db: Session = Depends(get_db)):
    _get_school(db, school_id)
    return db.execute(
        select(SchoolEnrolment)
        .where(SchoolEnrolment.school_id == school_id)
        .options(selectinload(SchoolEnrolment.school))
        .order_by(SchoolEnrolment.is_current.desc(), SchoolEnrolment.enrolment_date.desc())
    ).scalars().all()


# School years
@router.get("/{school_id}/years", response_model=List[SchoolYearDetail])
async def list_school_years(school_id: UUID, db: Session = Depends(get_db)):
    _get_school(db, school_id)
    return db.execute(
        select(SchoolYear)
        .where(SchoolYear.school_id == school_id)
        .options(selectinload(SchoolYear.terms))
        .order_by(SchoolYear.year.desc())
    ).scalars().all()


@router.post("/{school_id}/years", response_model=SchoolYearOut, status_code=status.HTTP_201_CREATED)
async def create_school_year(school_id: UUID, data: SchoolYearCreate, db: Session = Depends(get_db)):
    school = _get_school(db, school_id)
    year = SchoolYear(school_id=school.id, **data.model_dump())
    db.add(year)
    commit_or_conflict(db, f"{school.name} already has a {data.year} school year")
    db.refresh(year)
    logger.info(f"School year created: {school.name} {year.year}")
    return year


@router.put("/years/{year_id}", response_model=SchoolYearOut)
async def update_school_year(year_id: UUID, data: SchoolYearUpdate, db: Session = Depends(get_db)):
    year = _get_year(db, year_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "year" and value is None:
            continue
        setattr(year, field, value)
    commit_or_conflict(db, f"This school already has a {year.year} school year")
    db.refresh(year)
    return year


@router.delete("/years/{year_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_school_year(year_id: UUID, db: Session = Depends(get_db)):
    year = _get_year(db, year_id)
    db.delete(year)
    db.commit()
    logger.info(f"School year deleted: {year_id}")


# School terms
@router.get("/years/{year_id}/terms", response_model=List[SchoolTermOut])
async def list_terms(year_id: UUID, db: Session = Depends(get_db)):
    _get_year(db, year_id)
    return _terms_for_year(db, year_id)


@router.get("/years/{year_id}/terms/defaults", response_model=List[SchoolTermTemplateOut])
async def preview_default_terms(
    year_id: UUID,
    term_type: TermType = Query("term"),
    db: Session = Depends(get_db)
):
    """Suggested term dates for the year; nothing is saved"""
    year = _get_year(db, year_id)
    return generate_default_terms(year.year, term_type)


@router.get("/years/{year_id}/terms/current")
async def get_term_status(
    year_id: UUID,
    on: Optional[date] = Query(None, description="Date to evaluate, defaults to today"),
    db: Session = Depends(get_db)
):
    _get_year(db, year_id)
    terms = _terms_for_year(db, year_id)
    today = on or date.today()
    current = get_current_term(terms, today)
    upcoming = get_next_term(terms, today)
    return {
        "current_term": SchoolTermOut.model_validate(current) if current else None,
        "next_term": SchoolTermOut.model_validate(upcoming) if upcoming else None,
        "days_until_fees_due": days_until_fees_due(upcoming, today),
    }


@router.post("/years/{year_id}/terms", response_model=SchoolTermOut, status_code=status.HTTP_201_CREATED)
async def create_term(year_id: UUID, data: SchoolTermCreate, db: Session = Depends(get_db)):
    year = _get_year(db, year_id)
    term = SchoolTerm(school_year_id=year.id, **data.model_dump())
    db.add(term)
    commit_or_conflict(db, f"Term {data.term_number} already exists for {year.year}")
    db.refresh(term)
    logger.info(f"Term created: {term.name or term.term_number} for {year.year}")
    return term


@router.post("/years/{year_id}/terms/bulk", response_model=List[SchoolTermOut], status_code=status.HTTP_201_CREATED)
async def bulk_create_terms(year_id: UUID, data: List[SchoolTermCreate], db: Session = Depends(get_db)):
    year = _get_year(db, year_id)
    for item in data:
        db.add(SchoolTerm(school_year_id=year.id, **item.model_dump()))
    commit_or_conflict(db, f"One or more terms already exist for {year.year}")
    logger.info(f"{len(data)} terms created for {year.year}")
    return _terms_for_year(db, year_id)


@router.put("/years/{year_id}/terms", response_model=TermSyncResult)
async def sync_terms(year_id: UUID, data: List[SchoolTermSyncItem], db: Session = Depends(get_db)):
    """Make the year's terms match the submitted list in a single transaction.

    Rows with an id are updated, rows without one are created and any
    existing term missing from the list is deleted.
    """
    year = _get_year(db, year_id)
    existing = {term.id: term for term in _terms_for_year(db, year_id)}
    keep_ids = {item.id for item in data if item.id is not None}

    unknown = keep_ids - set(existing)
    if unknown:
        raise HTTPException(status_code=404, detail=f"Term {sorted(map(str, unknown))[0]} not found in this school year")

    deleted = 0
    for term_id, term in existing.items():
        if term_id not in keep_ids:
            db.delete(term)
            deleted += 1
    # Deletes go first so freed term numbers can be reused below
    db.flush()

    updated = 0
    created = 0
    for item in data:
        values = item.model_dump(exclude={"id"})
        if item.id is not None:
            term = existing[item.id]
            for field, value in values.items():
                setattr(term, field, value)
            updated += 1
        else:
            db.add(SchoolTerm(school_year_id=year.id, **values))
            created += 1

    commit_or_conflict(db, f"Term numbers must be unique within {year.year}")
    logger.info(f"Terms synced for {year.year}: {created} created, {updated} updated, {deleted} deleted")

    return TermSyncResult(
        created=created,
        updated=updated,
        deleted=deleted,
        terms=[SchoolTermOut.model_validate(term) for term in _terms_for_year(db, year_id)],
    )


@router.put("/terms/{term_id}", response_model=SchoolTermOut)
async def update_term(term_id: UUID, data: SchoolTermUpdate, db: Session = Depends(get_db)):
    term = _get_term(db, term_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if field in ("term_type", "term_number", "start_date", "end_date") and value is None:
            continue
        setattr(term, field, value)

    if term.end_date < term.start_date:
        db.rollback()
        raise HTTPException(status_code=400, detail="End date must be on or after start date")

    commit_or_conflict(db, f"Term {term.term_number} already exists for this school year")
    db.refresh(term)
    return term


@router.delete("/terms/{term_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_term(term_id: UUID, db: Session = Depends(get_db)):
    term = _get_term(db, term_id)
    db.delete(term)
    db.commit()
    logger.info(f"Term deleted: {term_id}")
