"""
Timestamp Microservice - FastAPI Application

Main entry point for the API server.
"""

import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.routers import timestamp
from api.services.logging import get_logger

VERSION = "1.0.0"

PROJECT_DIR = Path(__file__).resolve().parent.parent

# Static assets served at the root path space
STATIC_DIR = Path(os.getenv("STATIC_DIR", PROJECT_DIR / "public"))

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log application startup and shutdown."""
    logger.info("Timestamp API starting", extra={"version": VERSION, "static_dir": str(STATIC_DIR)})
    yield
    logger.info("Timestamp API stopped")


app = FastAPI(
    title="Timestamp Microservice API",
    description="Parses timestamps and date strings and computes date differences",
    version=VERSION,
    lifespan=lifespan,
)

# Any origin may call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "version": VERSION}


app.include_router(timestamp.router, prefix="/api", tags=["timestamp"])

# Mounted last so API routes take precedence
app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
