"""FastAPI application - Wanderlust roadmap service."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.routes.agent import router as agent_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.sessions import router as sessions_router
from backend.app.api.routes.trips import router as trips_router
from backend.app.config import get_settings
from backend.app.db.engine import dispose_async_engine, get_async_engine
from backend.app.db.models import Base
from backend.app.utils.logging import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create tables on startup when configured (dev/sqlite); dispose the engine on shutdown."""
    settings = get_settings()
    if settings.create_tables and settings.database_url:
        async with get_async_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield
    await dispose_async_engine()


configure_logging(get_settings().log_level)

app = FastAPI(title="Wanderlust Roadmap API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().ui_origin],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(agent_router, tags=["agent"])
app.include_router(sessions_router, tags=["sessions"])
app.include_router(trips_router, tags=["trips"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Wanderlust Roadmap API", "version": "0.1.0"}
