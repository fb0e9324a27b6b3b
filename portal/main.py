# /portal/main.py

# --- Core FastAPI Imports ---
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from .core.config import settings
from .core.exceptions import AssistantUnavailableError, StorageError
from .core.logging_config import setup_logging
from .db import base  # registers every model on Base.metadata
from .db.database import engine

# --- Application-specific Router Imports ---
from .routers import (
    admin_router,
    announcements_router,
    assistant_router,
    auth_router,
    classes_router,
    dashboard_router,
    exams_router,
    forum_router,
    meetings_router,
    polls_router,
    schedules_router,
)
from .services.storage_service import PUBLIC_MOUNT_PATH, get_storage_root

logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # This code runs ONCE when the application starts up.
    setup_logging()
    base.Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.APP_NAME, settings.APP_VERSION)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title=settings.APP_NAME,
    description="Backend of the JàngHub campus portal: class announcements, exams, meetings, polls, timetables and forum.",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Domain Exception Translation ---
@app.exception_handler(PermissionError)
async def permission_error_handler(request: Request, exc: PermissionError):
    return JSONResponse(status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)})


@app.exception_handler(LookupError)
async def lookup_error_handler(request: Request, exc: LookupError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_502_BAD_GATEWAY, content={"detail": "Le fichier n'a pas pu être enregistré."})


@app.exception_handler(AssistantUnavailableError)
async def assistant_unavailable_handler(request: Request, exc: AssistantUnavailableError):
    logger.warning("Assistant unavailable: %s", exc)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": "Service temporairement indisponible."})


# --- API Router Inclusion ---
app.include_router(auth_router.router, prefix="/api/auth", tags=["Authentication"])
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(announcements_router.router, prefix="/api/announcements", tags=["Announcements"])
app.include_router(exams_router.router, prefix="/api/exams", tags=["Exams"])
app.include_router(meetings_router.router, prefix="/api/meetings", tags=["Meetings"])
app.include_router(polls_router.router, prefix="/api/polls", tags=["Polls"])
app.include_router(schedules_router.router, prefix="/api/schedules", tags=["Schedules"])
app.include_router(forum_router.router, prefix="/api/forum", tags=["Forum"])
app.include_router(assistant_router.router, prefix="/api/assistant", tags=["Assistant"])
app.include_router(admin_router.router, prefix="/api/admin", tags=["Admin"])
app.include_router(classes_router.router, prefix="/api/classes", tags=["Classes"])

# --- Uploaded Files ---
os.makedirs(get_storage_root(), exist_ok=True)
app.mount(PUBLIC_MOUNT_PATH, StaticFiles(directory=get_storage_root()), name="files")


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": f"{settings.APP_NAME} is running!", "version": app.version}
