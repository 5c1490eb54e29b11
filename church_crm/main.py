"""Church CRM API - Main Application"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from church_crm.config import settings
from church_crm.routes import attendance, auth, communities, contributions, events, members, users
from church_crm.services.database_service import db_service

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup
    logger.info("Starting Church CRM API...")
    added = db_service.initialize()
    if added:
        logger.info(f"Schema upgraded, added columns: {', '.join(added)}")
    yield
    # Shutdown
    logger.info("Shutting down Church CRM API...")
    db_service.close()


app = FastAPI(
    title=settings.app_name,
    description="Members, communities, events, attendance and giving for a local church",
    version=VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(members.router, prefix="/api/members", tags=["Members"])
app.include_router(communities.router, prefix="/api/communities", tags=["Communities"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["Attendance"])
app.include_router(contributions.router, prefix="/api/contributions", tags=["Contributions"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])


# Health check endpoints
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "church-crm-api",
        "version": VERSION
    }


@app.get("/api/health/db", tags=["Health"])
async def database_health():
    """Database health check"""
    is_connected = db_service.ping()
    return {
        "status": "healthy" if is_connected else "unhealthy",
        "service": "database"
    }
