"""Report API routes."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from pta.core.deps import CurrentProfile, DbSession
from pta.core.permissions import Role, can_access_school, has_permission, scoped_school_id
from pta.schemas.report import (
    AnalyticsPayment,
    PaymentAnalytics,
    ReportType,
    SchoolSummary,
    TeacherReportClass,
)
from pta.services import report as report_service
from pta.services import user_profile as user_profile_service

router = APIRouter(prefix="/reports", tags=["Reports"])

INVALID_REPORT_DETAIL = "Invalid report type or missing parameters"


# ============== Helper Functions ==============


def _bad_request() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=INVALID_REPORT_DETAIL,
    )


def _forbidden(detail: str = "Insufficient permissions") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def _parse_report_type(value: str | None) -> ReportType:
    try:
        return ReportType(value)
    except ValueError:
        raise _bad_request() from None


# ============== Endpoints ==============


@router.get("", response_model=None)
async def get_report(
    db: DbSession,
    current_user: CurrentProfile,
    type: str | None = Query(None, description="school-summary, teacher-report or payment-analytics"),
    school_id: UUID | None = Query(None, description="School ID (school-summary, payment-analytics)"),
    teacher_id: UUID | None = Query(None, description="Teacher ID (teacher-report)"),
    start_date: date | None = Query(None, description="First day, inclusive (payment-analytics)"),
    end_date: date | None = Query(None, description="Last day, inclusive (payment-analytics)"),
):
    """
    Generate a report.

    - `school-summary`: membership and money totals of a school (treasurer, principal, admin)
    - `teacher-report`: a teacher's classes with each student's payment state.
      Teachers can only request their own.
    - `payment-analytics`: payments in a date range with totals by method and
      category (treasurer, principal, admin)
    """
    if not has_permission(current_user.role, "reports:read"):
        raise _forbidden()

    report_type = _parse_report_type(type)

    if report_type == ReportType.SCHOOL_SUMMARY:
        if school_id is None:
            raise _bad_request()
        if not has_permission(current_user.role, "reports:finance"):
            raise _forbidden()
        if not can_access_school(current_user, school_id):
            raise _forbidden("Cannot view reports from other schools")

        summary = await report_service.get_school_summary(db, school_id)
        return SchoolSummary(**summary)

    if report_type == ReportType.TEACHER_REPORT:
        if teacher_id is None:
            raise _bad_request()
        if current_user.role == Role.TEACHER and teacher_id != current_user.id:
            raise _forbidden("Teachers can only view their own report")

        if teacher_id != current_user.id:
            teacher = await user_profile_service.get_profile_by_id(db, teacher_id)
            if not teacher or not can_access_school(current_user, teacher.school_id):
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="Teacher not found",
                )

        classes = await report_service.get_teacher_report(db, teacher_id)
        return [TeacherReportClass.model_validate(c) for c in classes]

    # Payment analytics
    if not has_permission(current_user.role, "reports:finance"):
        raise _forbidden()
    if start_date and end_date and end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="end_date must be on or after start_date",
        )
    if school_id is not None and not can_access_school(current_user, school_id):
        raise _forbidden("Cannot view reports from other schools")

    analytics = await report_service.get_payment_analytics(
        db,
        school_id=scoped_school_id(current_user, school_id),
        start_date=start_date,
        end_date=end_date,
    )
    return PaymentAnalytics(
        total_payments=analytics["total_payments"],
        total_amount=analytics["total_amount"],
        by_method=analytics["by_method"],
        by_category=analytics["by_category"],
        payments=[AnalyticsPayment.model_validate(p) for p in analytics["payments"]],
    )
