# Database models

from pta.models.school import School
from pta.models.user_profile import UserProfile
from pta.models.school_class import SchoolClass
from pta.models.parent import Parent
from pta.models.student import Student
from pta.models.payment import Payment, PaymentCategory, PaymentMethod
from pta.models.expense import Expense

__all__ = [
    "School",
    "UserProfile",
    "SchoolClass",
    "Parent",
    "Student",
    "Payment",
    "PaymentCategory",
    "PaymentMethod",
    "Expense",
]
