"""
Panel Evaluation Engine - FastAPI application
panel_eval/main.py
"""
import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from panel_eval.config import get_settings
from panel_eval.core.dependencies import get_rubric
from panel_eval.core.logging_config import configure_logging

# IMPORT ROUTERS
from panel_eval.routers.actors import router as actors_router
from panel_eval.routers.errors import register_exception_handlers
from panel_eval.routers.evaluations import router as evaluations_router
from panel_eval.routers.features import router as features_router
from panel_eval.routers.health import router as health_router
from panel_eval.routers.rubric import router as rubric_router
from panel_eval.routers.vendors import router as vendors_router

settings = get_settings()
configure_logging(settings)
logger = structlog.get_logger(__name__)


# SWAGGER UI - tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Rubric"},
    {"name": "Actors"},
    {"name": "Vendors"},
    {"name": "Evaluations"},
    {"name": "Settings"},
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
register_exception_handlers(app)

# REGISTER ROUTERS (order matches _OPENAPI_TAGS / Swagger UI display order)
app.include_router(health_router)                                      # Health
app.include_router(rubric_router, prefix=settings.API_V1_PREFIX)       # Rubric
app.include_router(actors_router, prefix=settings.API_V1_PREFIX)       # Actors
app.include_router(vendors_router, prefix=settings.API_V1_PREFIX)      # Vendors / Reports / Decision
app.include_router(evaluations_router, prefix=settings.API_V1_PREFIX)  # Evaluations
app.include_router(features_router, prefix=settings.API_V1_PREFIX)     # Settings


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


# STARTUP EVENT
@app.on_event("startup")
async def startup_event():
    # an inconsistent rubric raises ConfigurationError and aborts startup
    rubric = get_rubric()
    logger.info(
        "startup",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        store_backend=settings.STORE_BACKEND,
        rubric_domain=rubric.domain,
        criteria=len(rubric.criteria_keys()),
    )


# SHUTDOWN EVENT
@app.on_event("shutdown")
async def shutdown_event():
    logger.info("shutdown", app=settings.APP_NAME)


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "panel_eval.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
