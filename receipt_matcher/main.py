import logging

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from receipt_matcher.config import get_settings, Settings
from receipt_matcher.db.session import get_db
from receipt_matcher.exceptions import ConcurrentMatchConflict, ResourceNotFound
from receipt_matcher.api.v1.endpoints import receipts, transactions

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Matches uploaded receipts to recorded transactions by filename",
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transactions.router, prefix="/api/v1")
app.include_router(receipts.router, prefix="/api/v1")


@app.exception_handler(ResourceNotFound)
async def resource_not_found_handler(request: Request, exc: ResourceNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(ConcurrentMatchConflict)
async def match_conflict_handler(request: Request, exc: ConcurrentMatchConflict):
    return JSONResponse(
        status_code=409,
        content={
            "detail": str(exc),
            "receipt_id": str(exc.receipt_id),
            "transaction_id": str(exc.transaction_id),
            "hint": "Refresh the receipt list and try again",
        },
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database connectivity test."""
    try:
        # Test database connection
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        logger.warning("Database health check failed: %s", e)
        db_status = f"unhealthy: {str(e)}"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "components": {
            "api": "healthy",
            "database": db_status,
        },
        "version": settings.app_version,
    }


@app.get("/config")
async def get_config(settings: Settings = Depends(get_settings)):
    """Get application configuration (non-sensitive values)."""
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        "app_env": settings.app_env,
        "matching": {
            "date_high_window_days": settings.date_high_window_days,
            "date_medium_window_days": settings.date_medium_window_days,
            "candidate_window_days": settings.candidate_window_days,
            "amount_tolerance_percent": settings.amount_tolerance_percent,
        },
    }
