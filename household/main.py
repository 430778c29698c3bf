# household/main.py - FastAPI application, middleware and router registration
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import traceback
import time

from household.core.config import settings
from household.core.db import db_manager, get_engine, health_check as db_health_check
from household.models.base import Base
from household.api.routers import family_members, lookups, schools, enrolments, fees
from household.api.routers import extracurriculars, documents
from household.api.routers import income, deductions, superannuation, tax
from household.services.lookup_seeder import seed_lookups


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting {settings.API_TITLE}...")
    logger.info(f"Environment: {settings.ENV}")
    logger.info(f"Database URL: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'local'}")

    engine = get_engine()

    # Create tables if they don't exist (migrations own the schema elsewhere)
    if settings.is_development:
        logger.info("Creating database tables...")
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Error creating tables: {e}")

    if settings.SEED_LOOKUPS_ON_STARTUP:
        try:
            with db_manager.transaction() as session:
                added = seed_lookups(session)
            logger.info(f"Lookup seeding complete: {added} rows added")
        except Exception as e:
            logger.error(f"Error seeding lookups: {e}")

    yield

    db_manager.close()
    logger.info(f"Shutting down {settings.API_TITLE}...")


app = FastAPI(
    title=settings.API_TITLE,
    description="Family members, school fees, activities, documents and the household tax tracker",
    version=settings.API_VERSION,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan
)

logger.info(f"CORS Origins configured: {settings.cors_origins}")


# Request logging middleware, registered before CORS
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    logger.info(f"Incoming {request.method} {request.url.path}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(f"Response {response.status_code} for {request.method} {request.url.path} ({process_time:.3f}s)")
        return response
    except Exception as e:
        logger.error(f"Error processing {request.method} {request.url.path}: {str(e)}")
        logger.error(traceback.format_exc())
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=[
        "Content-Type",
        "Accept",
        "Origin",
        "User-Agent",
        "Cache-Control",
        "X-Requested-With",
        "If-Modified-Since",
    ],
    max_age=3600,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions"""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}")
    logger.error(traceback.format_exc())

    if settings.is_development:
        return JSONResponse(
            status_code=500,
            content={
                "detail": str(exc),
                "traceback": traceback.format_exc()
            }
        )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


@app.get("/health")
async def health_check():
    database = db_health_check()
    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "environment": settings.ENV,
        "version": settings.API_VERSION,
        "database": database,
    }


# Include routers
logger.info("Registering API routers...")
app.include_router(family_members.router, prefix="/api/family-members", tags=["Family Members"])
app.include_router(lookups.router, prefix="/api/lookups", tags=["Lookups"])
app.include_router(schools.router, prefix="/api/schools", tags=["Schools"])
app.include_router(enrolments.router, prefix="/api/enrolments", tags=["Enrolments"])
app.include_router(fees.router, prefix="/api/fees", tags=["Fees"])
app.include_router(extracurriculars.router, prefix="/api/extracurriculars", tags=["Extracurriculars"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])
app.include_router(income.router, prefix="/api/income", tags=["Income"])
app.include_router(deductions.router, prefix="/api/deductions", tags=["Deductions"])
app.include_router(superannuation.router, prefix="/api/super", tags=["Superannuation"])
app.include_router(tax.router, prefix="/api/tax", tags=["Tax"])
logger.info("All routers registered successfully")


@app.get("/")
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs_url": "/docs" if settings.is_development else "Documentation disabled in production",
    }
