"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api import cards, decks, sim
from backend.core.logging_config import setup_logging
from backend.middleware.logging_middleware import RequestLoggingMiddleware
from backend.services.sim_config import get_sim_config

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    setup_logging(log_level=get_sim_config().log_level)
    yield


app = FastAPI(
    title="Deck Assistant API",
    description="Backend API for Yu-Gi-Oh! deck building and opening hand simulation",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# CORS middleware for local frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],  # Vite default port
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(cards.router, prefix="/cards", tags=["cards"])
app.include_router(decks.router, prefix="/decks", tags=["decks"])
app.include_router(sim.router, prefix="/sim", tags=["simulation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Deck Assistant API",
        "version": VERSION,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
