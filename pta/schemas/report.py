"""Report schemas."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from pta.models.payment import PaymentCategory, PaymentMethod


class ReportType(str, Enum):
    """Reports served by GET /reports."""

    SCHOOL_SUMMARY = "school-summary"
    TEACHER_REPORT = "teacher-report"
    PAYMENT_ANALYTICS = "payment-analytics"


# ============== School Summary ==============


class SchoolSummary(BaseModel):
    """Membership and money totals for one school."""

    total_parents: int = 0
    paid_parents: int = 0
    payment_rate: float = Field(0.0, description="Paid parents as a percentage of all parents")
    total_students: int = 0
    total_classes: int = 0
    total_payments: int = 0
    total_amount: Decimal = Decimal("0")
    average_payment: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    net_balance: Decimal = Field(Decimal("0"), description="Payments collected minus expenses")


# ============== Teacher Report ==============


class TeacherReportParent(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    contact_number: str | None
    payment_status: bool


class TeacherReportStudent(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    payment_status: bool
    parent: TeacherReportParent | None = None


class TeacherReportClass(BaseModel):
    """One class of the teacher with its students' payment state."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    grade_level: str | None
    students: list[TeacherReportStudent] = []


# ============== Payment Analytics ==============


class AnalyticsPayment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    parent_id: UUID | None
    amount: Decimal
    category: PaymentCategory
    payment_method: PaymentMethod
    created_at: datetime


class PaymentAnalytics(BaseModel):
    """Payments within a date range with breakdowns."""

    total_payments: int
    total_amount: Decimal
    by_method: dict[str, Decimal]
    by_category: dict[str, Decimal]
    payments: list[AnalyticsPayment]
