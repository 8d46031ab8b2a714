"""Tests for reports API."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from pta.core.permissions import Role
from pta.models.expense import Expense
from pta.models.parent import Parent
from pta.models.payment import Payment, PaymentCategory, PaymentMethod
from pta.models.school import School
from pta.models.school_class import SchoolClass
from pta.models.student import Student
from pta.models.user_profile import UserProfile
from tests.conftest import auth_header, make_profile, token_for


# ============== Fixtures ==============


@pytest.fixture
async def ledger(db: AsyncSession, school: School, parent: Parent, student: Student) -> dict:
    """Two parents (one paid), two payments and one expense in the test school."""
    carlos = Parent(name="Carlos Reyes", school_id=school.id, payment_status=True)
    db.add(carlos)
    await db.commit()

    db.add_all([
        Payment(
            parent_id=parent.id,
            amount=Decimal("250.00"),
            payment_method=PaymentMethod.CASH,
            category=PaymentCategory.MEMBERSHIP,
            created_at=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
        ),
        Payment(
            parent_id=carlos.id,
            amount=Decimal("500.00"),
            payment_method=PaymentMethod.GCASH,
            category=PaymentCategory.DONATION,
            created_at=datetime(2026, 3, 20, 15, 30, tzinfo=timezone.utc),
        ),
        Expense(
            description="Stage decorations",
            amount=Decimal("300.00"),
            category="events",
            school_id=school.id,
        ),
    ])
    await db.commit()
    return {"carlos": carlos}


# ============== School Summary ==============


class TestSchoolSummary:
    """Tests for the school summary report."""

    async def test_summary_totals(
        self, client: AsyncClient, treasurer_token: str, school: School, ledger: dict
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(treasurer_token),
            params={"type": "school-summary", "school_id": str(school.id)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_parents"] == 2
        assert data["paid_parents"] == 1
        assert data["payment_rate"] == 50.0
        assert data["total_students"] == 1
        assert data["total_classes"] == 1
        assert data["total_payments"] == 2
        assert Decimal(data["total_amount"]) == Decimal("750")
        assert Decimal(data["average_payment"]) == Decimal("375")
        assert Decimal(data["total_expenses"]) == Decimal("300")
        assert Decimal(data["net_balance"]) == Decimal("450")

    async def test_empty_school(self, client: AsyncClient, admin_token: str, other_school: School):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(admin_token),
            params={"type": "school-summary", "school_id": str(other_school.id)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_parents"] == 0
        assert data["payment_rate"] == 0.0
        assert Decimal(data["average_payment"]) == Decimal("0")

    async def test_missing_school_id(self, client: AsyncClient, treasurer_token: str):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(treasurer_token),
            params={"type": "school-summary"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid report type or missing parameters"

    async def test_teacher_cannot_see_finances(
        self, client: AsyncClient, teacher_token: str, school: School
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(teacher_token),
            params={"type": "school-summary", "school_id": str(school.id)},
        )

        assert response.status_code == 403

    async def test_other_school(
        self, client: AsyncClient, principal_token: str, other_school: School
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(principal_token),
            params={"type": "school-summary", "school_id": str(other_school.id)},
        )

        assert response.status_code == 403

    async def test_staff_without_school(
        self, client: AsyncClient, db: AsyncSession, school: School, ledger: dict
    ):
        treasurer = await make_profile(db, Role.TREASURER, None, "Unassigned Treasurer")
        headers = auth_header(token_for(treasurer))

        summary = await client.get(
            "/api/v1/reports",
            headers=headers,
            params={"type": "school-summary", "school_id": str(school.id)},
        )
        analytics = await client.get(
            "/api/v1/reports", headers=headers, params={"type": "payment-analytics"}
        )

        assert summary.status_code == 403
        assert analytics.status_code == 200
        assert analytics.json()["total_payments"] == 0


# ============== Teacher Report ==============


class TestTeacherReport:
    """Tests for the teacher report."""

    async def test_teacher_gets_own_report(
        self,
        client: AsyncClient,
        teacher_user: UserProfile,
        school_class: SchoolClass,
        student: Student,
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(token_for(teacher_user)),
            params={"type": "teacher-report", "teacher_id": str(teacher_user.id)},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == school_class.name
        assert data[0]["students"][0]["name"] == "Juan Santos"
        assert data[0]["students"][0]["parent"] == {
            "name": "Maria Santos",
            "contact_number": "+639171234567",
            "payment_status": False,
        }

    async def test_teacher_cannot_get_colleague_report(
        self,
        client: AsyncClient,
        db: AsyncSession,
        teacher_token: str,
        school: School,
    ):
        colleague = await make_profile(db, Role.TEACHER, school, "Colleague")

        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(teacher_token),
            params={"type": "teacher-report", "teacher_id": str(colleague.id)},
        )

        assert response.status_code == 403

    async def test_principal_gets_teacher_report(
        self,
        client: AsyncClient,
        principal_token: str,
        teacher_user: UserProfile,
        school_class: SchoolClass,
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(principal_token),
            params={"type": "teacher-report", "teacher_id": str(teacher_user.id)},
        )

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [str(school_class.id)]

    async def test_missing_teacher_id(self, client: AsyncClient, teacher_token: str):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(teacher_token),
            params={"type": "teacher-report"},
        )

        assert response.status_code == 400


# ============== Payment Analytics ==============


class TestPaymentAnalytics:
    """Tests for the payment analytics report."""

    async def test_breakdowns(
        self, client: AsyncClient, treasurer_token: str, ledger: dict
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(treasurer_token),
            params={"type": "payment-analytics"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_payments"] == 2
        assert Decimal(data["total_amount"]) == Decimal("750")
        assert {k: Decimal(v) for k, v in data["by_method"].items()} == {
            "cash": Decimal("250"),
            "gcash": Decimal("500"),
        }
        assert {k: Decimal(v) for k, v in data["by_category"].items()} == {
            "membership": Decimal("250"),
            "donation": Decimal("500"),
        }
        # Newest first
        assert [p["payment_method"] for p in data["payments"]] == ["gcash", "cash"]

    async def test_date_range_is_inclusive(
        self, client: AsyncClient, treasurer_token: str, ledger: dict
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(treasurer_token),
            params={"type": "payment-analytics", "start_date": "2026-03-01", "end_date": "2026-03-02"},
        )

        data = response.json()
        assert data["total_payments"] == 1
        assert data["by_method"].keys() == {"cash"}

    async def test_end_before_start(self, client: AsyncClient, treasurer_token: str):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(treasurer_token),
            params={"type": "payment-analytics", "start_date": "2026-03-10", "end_date": "2026-03-01"},
        )

        assert response.status_code == 400


class TestReportAccess:
    """Tests for report type and role checks."""

    async def test_unknown_type(self, client: AsyncClient, principal_token: str):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(principal_token),
            params={"type": "everything"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid report type or missing parameters"

    async def test_missing_type(self, client: AsyncClient, principal_token: str):
        response = await client.get("/api/v1/reports", headers=auth_header(principal_token))
        assert response.status_code == 400

    async def test_parent_cannot_see_reports(
        self, client: AsyncClient, parent_token: str, school: School
    ):
        response = await client.get(
            "/api/v1/reports",
            headers=auth_header(parent_token),
            params={"type": "school-summary", "school_id": str(school.id)},
        )

        assert response.status_code == 403
