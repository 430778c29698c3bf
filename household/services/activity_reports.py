# household/services/activity_reports.py - Extracurricular cost summaries and the weekly schedule
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from household.models.extracurricular import Extracurricular
from household.schemas.extracurricular import (
    ExtracurricularOut, ActivitySummaryOut, ActivityCostGroup, ScheduleDayOut, ScheduleEntry,
)
from household.services.family_utils import (
    WEEKDAYS, annual_activity_cost, weekly_activity_hours, sort_key_for_time,
)

ZERO = Decimal("0.00")


def _round_currency(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def activity_query():
    return select(Extracurricular).options(
        selectinload(Extracurricular.family_member),
        selectinload(Extracurricular.activity_type),
        selectinload(Extracurricular.cost_frequency),
    )


def activity_to_out(activity: Extracurricular) -> ExtracurricularOut:
    out = ExtracurricularOut.model_validate(activity)
    out.annual_cost = _round_currency(annual_activity_cost(activity))
    out.weekly_hours = round(weekly_activity_hours(activity), 2)
    out.member_name = activity.family_member.name if activity.family_member else None
    return out


def active_activities(db: Session, family_member_id=None) -> List[Extracurricular]:
    query = activity_query().where(Extracurricular.is_active == True)  # noqa: E712
    if family_member_id is not None:
        query = query.where(Extracurricular.family_member_id == family_member_id)
    return list(db.execute(query.order_by(Extracurricular.name)).scalars().all())


def _cost_groups(groups: Dict[Tuple[str, Optional[UUID]], List[Extracurricular]]) -> List[ActivityCostGroup]:
    """Groups are keyed by (label, id)"""
    return [
        ActivityCostGroup(
            id=group_id,
            name=name,
            count=len(activities),
            annual_cost=_round_currency(sum((annual_activity_cost(a) for a in activities), ZERO)),
        )
        for (name, group_id), activities in groups.items()
    ]


def activity_summary(db: Session) -> ActivitySummaryOut:
    """Annual and monthly cost of every active activity in the household"""
    activities = active_activities(db)

    by_child: Dict[Tuple[str, Optional[UUID]], List[Extracurricular]] = {}
    by_type: Dict[Tuple[str, Optional[UUID]], List[Extracurricular]] = {}
    for activity in activities:
        by_child.setdefault((activity.family_member.name, activity.family_member_id), []).append(activity)
        type_name = activity.activity_type.name if activity.activity_type else "Other"
        by_type.setdefault((type_name, activity.activity_type_id), []).append(activity)

    total = sum((annual_activity_cost(a) for a in activities), ZERO)
    return ActivitySummaryOut(
        active_count=len(activities),
        total_annual_cost=_round_currency(total),
        monthly_average=_round_currency(total / 12),
        total_weekly_hours=round(sum(weekly_activity_hours(a) for a in activities), 2),
        by_child=sorted(_cost_groups(by_child), key=lambda group: group.name),
        by_type=sorted(_cost_groups(by_type), key=lambda group: group.annual_cost, reverse=True),
    )


def weekly_schedule(db: Session, family_member_id: Optional[str] = None) -> List[ScheduleDayOut]:
    """Active activities laid out Monday to Sunday, earliest start first"""
    activities = active_activities(db, family_member_id)

    schedule = []
    for day in WEEKDAYS:
        todays = [a for a in activities if day in (a.day_of_week or [])]
        todays.sort(key=lambda a: sort_key_for_time(a.time_start))
        schedule.append(ScheduleDayOut(
            day=day,
            activities=[
                ScheduleEntry(
                    activity_id=a.id,
                    name=a.name,
                    member_name=a.family_member.name,
                    venue=a.venue,
                    time_start=a.time_start,
                    time_end=a.time_end,
                )
                for a in todays
            ],
        ))
    return schedule
