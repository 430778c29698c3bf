# household/services/member_summary.py - At-a-glance figures for one family member
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from household.models.document import MemberDocument
from household.models.family import FamilyMember
from household.schemas.family import MemberSummaryOut
from household.services.family_utils import (
    calculate_age, estimate_year_level, next_year_level, annual_activity_cost,
)

ZERO = Decimal("0.00")


def current_enrolment(member: FamilyMember):
    """Most recent enrolment flagged current, if any"""
    current = [e for e in member.enrolments if e.is_current]
    if not current:
        return None
    return max(current, key=lambda e: e.enrolment_date or date.min)


def member_summary(db: Session, member: FamilyMember, today: Optional[date] = None) -> MemberSummaryOut:
    today = today or date.today()

    enrolment = current_enrolment(member)
    year_level = None
    if enrolment is not None:
        year_level = enrolment.year_level or estimate_year_level(member.date_of_birth, today)

    fees = [fee for e in member.enrolments for fee in e.fees if fee.year == today.year]
    activities = [a for a in member.extracurriculars if a.is_active]
    activities_cost = sum((annual_activity_cost(a) for a in activities), ZERO)

    documents_count = db.execute(
        select(func.count(MemberDocument.id)).where(MemberDocument.family_member_id == member.id)
    ).scalar_one()

    return MemberSummaryOut(
        member_id=member.id,
        name=member.name,
        age=calculate_age(member.date_of_birth, today),
        current_school=enrolment.school.name if enrolment is not None else None,
        year_level=year_level,
        next_year_level=next_year_level(year_level),
        school_fees_this_year=sum((Decimal(fee.amount) for fee in fees), ZERO),
        unpaid_fees_count=sum(1 for fee in fees if not fee.is_paid),
        active_activities_count=len(activities),
        activities_annual_cost=activities_cost.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP),
        documents_count=documents_count,
    )
