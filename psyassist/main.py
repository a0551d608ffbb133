# /psyassist/main.py

# --- Core FastAPI Imports ---
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Application-specific Imports ---
from .core.config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from .core.logging_config import configure_logging
from .db.base import Base
from .db.database import engine
from .routers import (
    assessments_router,
    children_router,
    dashboard_router,
    reference_router,
    reports_router,
)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="PsyAssist Backend API",
    description="Child diagnostic assessments: scores, observations, CHC/XBA mappings and reports.",
    version="1.0.0",
    lifespan=lifespan,
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(dashboard_router.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(children_router.router, prefix="/api/children", tags=["Children"])
app.include_router(assessments_router.router, prefix="/api/assessments", tags=["Assessments"])
app.include_router(reports_router.router, prefix="/api/reports", tags=["Reports"])
app.include_router(reference_router.router, prefix="/api/reference", tags=["Reference Data"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "PsyAssist Backend is running!", "version": app.version}
