# household/services/lookup_seeder.py - System rows for the lookup tables
import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from household.models.lookups import FeeType, ActivityType, Frequency

logger = logging.getLogger(__name__)

SYSTEM_FEE_TYPES = [
    ("Tuition", 1), ("Building Levy", 2), ("Technology Levy", 3), ("Excursion", 4),
    ("Camp", 5), ("Uniform", 6), ("Books & Stationery", 7), ("Sport", 8), ("Music", 9),
    ("Before School Care", 10), ("After School Care", 11), ("Vacation Care", 12),
    ("Swimming", 13), ("Library", 14), ("Other", 99),
]

SYSTEM_ACTIVITY_TYPES = [
    ("Sport", "trophy", 1), ("Music", "music", 2), ("Dance", "sparkles", 3),
    ("Art", "palette", 4), ("Drama", "theater", 5), ("Swimming", "waves", 6),
    ("Martial Arts", "shield", 7), ("Tutoring", "book-open", 8), ("Language", "globe", 9),
    ("Coding", "code", 10), ("Scouts/Guides", "compass", 11), ("Religious", "heart", 12),
    ("Gymnastics", "dumbbell", 13), ("Horse Riding", "horse", 14), ("Other", "circle", 99),
]

SYSTEM_FREQUENCIES = [
    ("Once Off", "1", 1), ("Per Session", None, 2), ("Weekly", "52", 3),
    ("Fortnightly", "26", 4), ("Monthly", "12", 5), ("Per Term", "4", 6),
    ("Per Semester", "2", 7), ("Annual", "1", 8), ("Per Quarter", "4", 9),
]


def seed_lookups(db: Session) -> int:
    """Insert any missing system lookup rows. Safe to run repeatedly.

    Returns the number of rows inserted. The caller commits.
    """
    existing_fee_types = set(db.execute(select(FeeType.name)).scalars())
    existing_activity_types = set(db.execute(select(ActivityType.name)).scalars())
    existing_frequencies = set(db.execute(select(Frequency.name)).scalars())

    created = 0
    for name, sort_order in SYSTEM_FEE_TYPES:
        if name not in existing_fee_types:
            db.add(FeeType(name=name, sort_order=sort_order, is_system=True))
            created += 1

    for name, icon, sort_order in SYSTEM_ACTIVITY_TYPES:
        if name not in existing_activity_types:
            db.add(ActivityType(name=name, icon=icon, sort_order=sort_order, is_system=True))
            created += 1

    for name, multiplier, sort_order in SYSTEM_FREQUENCIES:
        if name not in existing_frequencies:
            db.add(Frequency(
                name=name,
                per_year_multiplier=Decimal(multiplier) if multiplier is not None else None,
                sort_order=sort_order,
                is_system=True,
            ))
            created += 1

    if created:
        db.flush()
        logger.info(f"Seeded {created} system lookup rows")
    return created
