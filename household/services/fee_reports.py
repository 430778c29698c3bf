# household/services/fee_reports.py - School fee queries, summaries and the family overview
import calendar
import logging
from collections import OrderedDict
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from household.models.enrolment import SchoolEnrolment
from household.models.extracurricular import Extracurricular
from household.models.family import FamilyMember
from household.models.fee import SchoolFee
from household.schemas.fee_schema import (
    SchoolFeeOut, FeeSummaryOut, FeeGroupTotal, FeeCalendarOut, FeeCalendarDay,
    FamilyFeesOverview, ChildFeesOverview,
)
from household.services.family_utils import fee_status, fee_paid_value, annual_activity_cost

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


def _round_currency(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def fee_query():
    return select(SchoolFee).options(
        selectinload(SchoolFee.enrolment).selectinload(SchoolEnrolment.family_member),
        selectinload(SchoolFee.enrolment).selectinload(SchoolEnrolment.school),
        selectinload(SchoolFee.fee_type),
        selectinload(SchoolFee.frequency),
    )


def fee_to_out(fee: SchoolFee, today: Optional[date] = None) -> SchoolFeeOut:
    """Serialise a fee with its computed status and the child/school it belongs to"""
    out = SchoolFeeOut.model_validate(fee)
    out.status = fee_status(fee, today)
    if fee.enrolment is not None:
        out.member_name = fee.enrolment.family_member.name
        out.school_name = fee.enrolment.school.name
    return out


def fees_for_enrolment(db: Session, enrolment_id) -> List[SchoolFee]:
    return list(db.execute(
        fee_query()
        .where(SchoolFee.enrolment_id == enrolment_id)
        .order_by(SchoolFee.due_date.asc())
    ).scalars().all())


def fees_for_year(db: Session, year: int) -> List[SchoolFee]:
    return list(db.execute(
        fee_query()
        .where(SchoolFee.year == year)
        .order_by(SchoolFee.due_date.asc())
    ).scalars().all())


def upcoming_fees(db: Session, days: int, today: Optional[date] = None) -> List[SchoolFee]:
    """Unpaid fees falling due between today and `days` from now"""
    today = today or date.today()
    return list(db.execute(
        fee_query()
        .where(
            SchoolFee.is_paid == False,  # noqa: E712
            SchoolFee.due_date >= today,
            SchoolFee.due_date <= today + timedelta(days=days),
        )
        .order_by(SchoolFee.due_date.asc())
    ).scalars().all())


def overdue_fees(db: Session, today: Optional[date] = None) -> List[SchoolFee]:
    today = today or date.today()
    return list(db.execute(
        fee_query()
        .where(
            SchoolFee.is_paid == False,  # noqa: E712
            SchoolFee.due_date < today,
        )
        .order_by(SchoolFee.due_date.asc())
    ).scalars().all())


def _group_totals(groups: Dict[Tuple[str, Optional[UUID]], List[SchoolFee]]) -> List[FeeGroupTotal]:
    result = []
    for (name, group_id), fees in groups.items():
        total = sum((Decimal(fee.amount) for fee in fees), ZERO)
        paid = sum((fee_paid_value(fee) for fee in fees), ZERO)
        result.append(FeeGroupTotal(
            id=group_id,
            name=name,
            total=_round_currency(total),
            paid=_round_currency(paid),
            remaining=_round_currency(total - paid),
            count=len(fees),
        ))
    return result


def fee_summary(db: Session, year: int, today: Optional[date] = None) -> FeeSummaryOut:
    fees = fees_for_year(db, year)

    total = sum((Decimal(fee.amount) for fee in fees), ZERO)
    paid = sum((fee_paid_value(fee) for fee in fees), ZERO)
    statuses = [fee_status(fee, today) for fee in fees]

    by_child: Dict[Tuple[str, Optional[UUID]], List[SchoolFee]] = {}
    by_type: Dict[Tuple[str, Optional[UUID]], List[SchoolFee]] = {}
    for fee in fees:
        member = fee.enrolment.family_member
        by_child.setdefault((member.name, member.id), []).append(fee)
        type_name = fee.fee_type.name if fee.fee_type else "Other"
        by_type.setdefault((type_name, fee.fee_type_id), []).append(fee)

    by_type_totals = sorted(_group_totals(by_type), key=lambda group: group.total, reverse=True)

    return FeeSummaryOut(
        year=year,
        total=_round_currency(total),
        paid=_round_currency(paid),
        remaining=_round_currency(total - paid),
        paid_percentage=round(float(paid / total * 100), 1) if total > 0 else 0.0,
        fee_count=len(fees),
        unpaid_count=sum(1 for fee in fees if not fee.is_paid),
        overdue_count=statuses.count("overdue"),
        by_child=sorted(_group_totals(by_child), key=lambda group: group.name),
        by_fee_type=by_type_totals,
    )


def fee_calendar(db: Session, year: int, month: int, today: Optional[date] = None) -> FeeCalendarOut:
    """Fees due in one month, grouped by due date"""
    if not 1 <= month <= 12:
        raise ValueError("Month must be between 1 and 12")
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    fees = db.execute(
        fee_query()
        .where(SchoolFee.due_date >= first, SchoolFee.due_date <= last)
        .order_by(SchoolFee.due_date.asc())
    ).scalars().all()

    days: "OrderedDict[date, List[SchoolFee]]" = OrderedDict()
    for fee in fees:
        days.setdefault(fee.due_date, []).append(fee)

    return FeeCalendarOut(
        year=year,
        month=month,
        total=_round_currency(sum((Decimal(fee.amount) for fee in fees), ZERO)),
        days=[
            FeeCalendarDay(
                due_date=due_date,
                total=_round_currency(sum((Decimal(fee.amount) for fee in day_fees), ZERO)),
                fees=[fee_to_out(fee, today) for fee in day_fees],
            )
            for due_date, day_fees in days.items()
        ],
    )


def family_fees_overview(db: Session, year: int) -> FamilyFeesOverview:
    """School fees for the year and annual activity costs for every child"""
    children = db.execute(
        select(FamilyMember)
        .where(FamilyMember.member_type == "child")
        .options(
            selectinload(FamilyMember.enrolments).selectinload(SchoolEnrolment.fees),
            selectinload(FamilyMember.extracurriculars).selectinload(Extracurricular.cost_frequency),
        )
        .order_by(FamilyMember.name)
    ).scalars().all()

    overview = FamilyFeesOverview(year=year)
    for child in children:
        fees = [fee for enrolment in child.enrolments for fee in enrolment.fees if fee.year == year]
        school_fees = sum((Decimal(fee.amount) for fee in fees), ZERO)
        paid_fees = sum((fee_paid_value(fee) for fee in fees), ZERO)
        activities = sum(
            (annual_activity_cost(activity) for activity in child.extracurriculars if activity.is_active),
            ZERO,
        )

        overview.children.append(ChildFeesOverview(
            member_id=child.id,
            name=child.name,
            school_fees=_round_currency(school_fees),
            paid_fees=_round_currency(paid_fees),
            activities_cost=_round_currency(activities),
            total=_round_currency(school_fees + activities),
        ))
        overview.total_school_fees += school_fees
        overview.total_paid += paid_fees
        overview.total_activities += activities

    overview.total_school_fees = _round_currency(overview.total_school_fees)
    overview.total_paid = _round_currency(overview.total_paid)
    overview.total_activities = _round_currency(overview.total_activities)
    overview.grand_total = _round_currency(overview.total_school_fees + overview.total_activities)
    overview.remaining_school_fees = _round_currency(overview.total_school_fees - overview.total_paid)
    return overview
