"""API v1 router aggregating all route modules."""

from fastapi import APIRouter

from pta.api.v1.routes import (
    classes,
    expenses,
    health,
    parents,
    payments,
    profile,
    reports,
    schools,
    students,
    users,
)

api_router = APIRouter()

api_router.include_router(profile.router)
api_router.include_router(users.router)
api_router.include_router(schools.router)
api_router.include_router(classes.router)
api_router.include_router(students.router)
api_router.include_router(parents.router)
api_router.include_router(payments.router)
api_router.include_router(expenses.router)
api_router.include_router(reports.router)
api_router.include_router(health.router)
