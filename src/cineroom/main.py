"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cineroom.api.routes import health, rooms
from cineroom.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"CineRoom API starting (timezone {settings.timezone})")
    yield
    logger.info("CineRoom API shut down")


# Create FastAPI app
app = FastAPI(
    title="CineRoom API",
    description="Room scheduling for cinema screenings, cleaning and maintenance",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:5174",
    ],  # Frontend development server
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(rooms.router, prefix="/api", tags=["rooms"])
