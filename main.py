"""PTA Manager - FastAPI Application."""

from fastapi import FastAPI

from pta.api.v1.router import api_router
from pta.core.config import settings
from pta.core.errors import register_exception_handlers
from pta.core.logging import RequestLoggingMiddleware, setup_logging
from pta.core.middleware import SessionMiddleware

logger = setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Added last runs first, so the session is resolved before request logging
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SessionMiddleware)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
