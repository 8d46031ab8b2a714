"""Tests for classes API."""

from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pta.core.permissions import Role
from pta.models.school import School
from pta.models.school_class import SchoolClass
from pta.models.student import Student
from pta.models.user_profile import UserProfile
from tests.conftest import auth_header, make_profile, token_for


class TestListClasses:
    """Tests for listing classes."""

    async def test_principal_sees_classes_of_own_school(
        self,
        client: AsyncClient,
        db: AsyncSession,
        principal_token: str,
        school: School,
        other_school: School,
    ):
        db.add_all([
            SchoolClass(name="Grade 2 - Rosal", school_id=school.id),
            SchoolClass(name="Grade 1 - Ilang-Ilang", school_id=school.id),
            SchoolClass(name="Grade 1 - Elsewhere", school_id=other_school.id),
        ])
        await db.commit()

        response = await client.get(
            "/api/v1/classes",
            headers=auth_header(principal_token),
            params={"school_id": str(other_school.id)},
        )

        assert response.status_code == 200
        data = response.json()
        assert [c["name"] for c in data] == ["Grade 1 - Ilang-Ilang", "Grade 2 - Rosal"]
        assert data[0]["school"]["name"] == school.name

    async def test_admin_can_filter_by_school(
        self,
        client: AsyncClient,
        db: AsyncSession,
        admin_token: str,
        school: School,
        other_school: School,
    ):
        db.add_all([
            SchoolClass(name="Grade 3 - Here", school_id=school.id),
            SchoolClass(name="Grade 3 - There", school_id=other_school.id),
        ])
        await db.commit()

        response = await client.get(
            "/api/v1/classes",
            headers=auth_header(admin_token),
            params={"school_id": str(other_school.id)},
        )

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Grade 3 - There"]

    async def test_teacher_only_sees_own_classes(
        self,
        client: AsyncClient,
        db: AsyncSession,
        teacher_user: UserProfile,
        school_class: SchoolClass,
        school: School,
    ):
        other_teacher = await make_profile(db, Role.TEACHER, school, "Other Teacher")
        db.add(SchoolClass(name="Grade 4 - Other", school_id=school.id, teacher_id=other_teacher.id))
        await db.commit()

        response = await client.get(
            "/api/v1/classes",
            headers=auth_header(token_for(teacher_user)),
            params={"teacher_id": str(other_teacher.id)},
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["id"] == str(school_class.id)
        assert data[0]["teacher"]["full_name"] == "Teacher User"

    async def test_without_teacher_filter(
        self,
        client: AsyncClient,
        db: AsyncSession,
        principal_token: str,
        school_class: SchoolClass,
        school: School,
    ):
        db.add(SchoolClass(name="Grade 5 - Unassigned", school_id=school.id))
        await db.commit()

        response = await client.get(
            "/api/v1/classes",
            headers=auth_header(principal_token),
            params={"without_teacher": "true"},
        )

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Grade 5 - Unassigned"]

    async def test_parent_can_list_classes(
        self, client: AsyncClient, parent_token: str, school_class: SchoolClass
    ):
        response = await client.get("/api/v1/classes", headers=auth_header(parent_token))

        assert response.status_code == 200
        assert len(response.json()) == 1


class TestCreateClass:
    """Tests for creating classes."""

    async def test_principal_creates_class(
        self,
        client: AsyncClient,
        principal_token: str,
        school: School,
        teacher_user: UserProfile,
    ):
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(principal_token),
            json={
                "name": "Grade 6 - Narra",
                "school_id": str(school.id),
                "grade_level": "6",
                "teacher_id": str(teacher_user.id),
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Grade 6 - Narra"
        assert data["teacher_id"] == str(teacher_user.id)
        assert data["school"]["id"] == str(school.id)
        assert data["students"] == []

    @pytest.mark.parametrize("role", [Role.TEACHER, Role.TREASURER, Role.PARENT])
    async def test_other_roles_cannot_create(
        self,
        client: AsyncClient,
        db: AsyncSession,
        school: School,
        role: Role,
    ):
        profile = await make_profile(db, role, school)
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(token_for(profile)),
            json={"name": "Grade 1 - Nope", "school_id": str(school.id)},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions"

    async def test_principal_cannot_create_in_other_school(
        self, client: AsyncClient, principal_token: str, other_school: School
    ):
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(principal_token),
            json={"name": "Grade 1 - Elsewhere", "school_id": str(other_school.id)},
        )

        assert response.status_code == 403

    async def test_unknown_school(self, client: AsyncClient, admin_token: str):
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(admin_token),
            json={"name": "Grade 1 - Ghost", "school_id": str(uuid4())},
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "School not found"

    async def test_teacher_must_have_teacher_role(
        self,
        client: AsyncClient,
        principal_token: str,
        school: School,
        treasurer_user: UserProfile,
    ):
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(principal_token),
            json={
                "name": "Grade 1 - Wrong",
                "school_id": str(school.id),
                "teacher_id": str(treasurer_user.id),
            },
        )

        assert response.status_code == 400

    async def test_teacher_must_belong_to_class_school(
        self,
        client: AsyncClient,
        admin_token: str,
        other_school: School,
        teacher_user: UserProfile,
    ):
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(admin_token),
            json={
                "name": "Grade 2 - Borrowed",
                "school_id": str(other_school.id),
                "teacher_id": str(teacher_user.id),
            },
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Teacher belongs to another school"

    async def test_name_is_required(self, client: AsyncClient, principal_token: str, school: School):
        response = await client.post(
            "/api/v1/classes",
            headers=auth_header(principal_token),
            json={"school_id": str(school.id)},
        )

        assert response.status_code == 422


class TestClassDetail:
    """Tests for getting, updating and deleting a class."""

    async def test_get_class_with_students(
        self,
        client: AsyncClient,
        teacher_token: str,
        school_class: SchoolClass,
        student: Student,
    ):
        response = await client.get(
            f"/api/v1/classes/{school_class.id}",
            headers=auth_header(teacher_token),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == school_class.name
        assert [s["name"] for s in data["students"]] == ["Juan Santos"]

    async def test_class_of_other_school_is_hidden(
        self,
        client: AsyncClient,
        db: AsyncSession,
        principal_token: str,
        other_school: School,
    ):
        hidden = SchoolClass(name="Hidden", school_id=other_school.id)
        db.add(hidden)
        await db.commit()

        response = await client.get(
            f"/api/v1/classes/{hidden.id}",
            headers=auth_header(principal_token),
        )

        assert response.status_code == 404

    async def test_update_class(
        self, client: AsyncClient, principal_token: str, school_class: SchoolClass
    ):
        response = await client.put(
            f"/api/v1/classes/{school_class.id}",
            headers=auth_header(principal_token),
            json={"name": "Grade 1 - Renamed", "teacher_id": None},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Grade 1 - Renamed"
        assert data["teacher_id"] is None
        assert data["grade_level"] == "1"

    async def test_cannot_assign_teacher_from_other_school(
        self,
        client: AsyncClient,
        db: AsyncSession,
        principal_token: str,
        other_school: School,
        school_class: SchoolClass,
    ):
        outsider = await make_profile(db, Role.TEACHER, other_school, "Outside Teacher")

        response = await client.put(
            f"/api/v1/classes/{school_class.id}",
            headers=auth_header(principal_token),
            json={"teacher_id": str(outsider.id)},
        )

        assert response.status_code == 400

        report = await client.get(
            "/api/v1/reports",
            headers=auth_header(token_for(outsider)),
            params={"type": "teacher-report", "teacher_id": str(outsider.id)},
        )
        assert report.json() == []

    async def test_null_name_is_rejected(
        self, client: AsyncClient, principal_token: str, school_class: SchoolClass
    ):
        response = await client.put(
            f"/api/v1/classes/{school_class.id}",
            headers=auth_header(principal_token),
            json={"name": None},
        )

        assert response.status_code == 422

    async def test_delete_class_removes_students(
        self,
        client: AsyncClient,
        db: AsyncSession,
        principal_token: str,
        school_class: SchoolClass,
        student: Student,
    ):
        response = await client.delete(
            f"/api/v1/classes/{school_class.id}",
            headers=auth_header(principal_token),
        )

        assert response.status_code == 204

        db.expunge_all()
        result = await db.execute(select(Student).where(Student.id == student.id))
        assert result.scalar_one_or_none() is None

    async def test_delete_unknown_class(self, client: AsyncClient, admin_token: str):
        response = await client.delete(
            f"/api/v1/classes/{uuid4()}",
            headers=auth_header(admin_token),
        )

        assert response.status_code == 404
