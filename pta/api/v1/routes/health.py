"""Database health check."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from pta.core.deps import DbSession
from pta.models import Expense, Parent, Payment, School, SchoolClass, Student, UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])

CHECKED_MODELS = (School, UserProfile, SchoolClass, Parent, Student, Payment, Expense)


@router.get("/db")
async def database_health(db: DbSession):
    """
    Check that the database is reachable and every table can be queried.

    Returns row counts per table. Responds with 500 when the database cannot
    be reached at all.
    """
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Database health check failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "message": "Database connection failed",
                "error": str(exc.orig if getattr(exc, "orig", None) else exc),
            },
        )

    tables = []
    for model in CHECKED_MODELS:
        table = model.__tablename__
        try:
            count = (await db.execute(select(func.count()).select_from(model))).scalar() or 0
            tables.append({"table": table, "exists": True, "count": count, "error": None})
        except SQLAlchemyError as exc:
            await db.rollback()
            logger.warning("Table %s is not queryable: %s", table, exc)
            tables.append({"table": table, "exists": False, "count": 0, "error": str(exc)})

    missing = [t["table"] for t in tables if not t["exists"]]
    return {
        "status": "warning" if missing else "success",
        "message": "Database connection issues detected" if missing else "Database connection successful",
        "tables": tables,
        "summary": {
            "total_tables": len(tables),
            "existing_tables": len(tables) - len(missing),
            "missing_tables": missing,
        },
    }
