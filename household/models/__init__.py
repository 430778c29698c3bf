# household/models/__init__.py - Import all models so SQLAlchemy can discover them

from household.models.base import Base

from household.models.lookups import FeeType, ActivityType, Frequency
from household.models.family import FamilyMember
from household.models.school import School, SchoolYear, SchoolTerm
from household.models.enrolment import SchoolEnrolment
from household.models.fee import SchoolFee
from household.models.extracurricular import Extracurricular
from household.models.document import Document, MemberDocument
from household.models.income import Income
from household.models.deduction import Deduction
from household.models.superannuation import SuperContribution, SuperAccount

__all__ = [
    "Base",
    "FeeType",
    "ActivityType",
    "Frequency",
    "FamilyMember",
    "School",
    "SchoolYear",
    "SchoolTerm",
    "SchoolEnrolment",
    "SchoolFee",
    "Extracurricular",
    "Document",
    "MemberDocument",
    "Income",
    "Deduction",
    "SuperContribution",
    "SuperAccount",
]
