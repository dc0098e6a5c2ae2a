import json
from pathlib import Path

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from shinko.config import settings
from shinko.core.dependencies import get_opportunity_repository
from shinko.core.logging import configure_logging

# IMPORT ROUTERS
from shinko.routers.health import router as health_router
from shinko.routers.opportunities import router as opportunities_router
from shinko.routers.opportunities import validation_exception_handler
from shinko.routers.scoring import router as scoring_router

configure_logging()
logger = structlog.get_logger(__name__)


# SWAGGER UI tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scoring"},
    {"name": "Opportunities"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)           # Health
app.include_router(scoring_router)          # Scoring
app.include_router(opportunities_router)    # Opportunities


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


def load_seed_file(path: str) -> int:
    """Load a JSON array of exported records into the opportunity store."""
    rows = json.loads(Path(path).read_text(encoding="utf-8"))
    return get_opportunity_repository().load_rows(rows)


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    logger.info("service_starting", app=settings.APP_NAME, env=settings.APP_ENV)
    if settings.SEED_FILE:
        loaded = load_seed_file(settings.SEED_FILE)
        logger.info("seed_loaded", path=settings.SEED_FILE, count=loaded)


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("service_stopping", app=settings.APP_NAME)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "shinko.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
