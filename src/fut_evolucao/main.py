"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fut_evolucao import __version__
from fut_evolucao.api.routes.rooms import router as rooms_router
from fut_evolucao.config import resolve_path, settings
from fut_evolucao.repositories.room_repository import RoomRepository
from fut_evolucao.services.room_service import RoomService
from fut_evolucao.utils.shuffler import Shuffler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: tests may have installed their own service already
    if not hasattr(app.state, "room_service"):
        repository = RoomRepository(resolve_path(settings.database_path))
        app.state.room_service = RoomService(
            repository,
            shuffler=Shuffler(seed=settings.random_seed),
            owner_token_bytes=settings.owner_token_bytes,
        )
    yield


app = FastAPI(
    title="Fut Evolucao",
    description="Pickup soccer rosters, team splits and match rotation",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "fut-evolucao"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Fut Evolucao API",
        "version": __version__,
        "docs": "/docs",
    }


app.include_router(rooms_router)
