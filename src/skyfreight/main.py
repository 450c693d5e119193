import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from skyfreight.config import Settings, settings
from skyfreight.routers import admin, dashboard, flights, health, shipments, tracking
from skyfreight.services.store import RecordStore
from skyfreight.storage.database import build_storage
from skyfreight.tasks.scheduler import TrackingSimulator

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_store(config: Settings) -> RecordStore:
    """Seeded store overlaid with whatever the configured backend holds."""
    store = RecordStore.from_settings(config, build_storage(config))
    outcome = store.load()
    logger.info(f"Persisted state: {outcome.value}")
    return store


def create_app(store: RecordStore | None = None, config: Settings | None = None) -> FastAPI:
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("Starting Skyfreight")
        app.state.store = store or build_store(config)
        app.state.simulator = TrackingSimulator(
            app.state.store, interval_seconds=config.tracking_interval_seconds
        )
        app.state.simulator.start()
        yield
        # Shutdown
        app.state.simulator.shutdown()
        logger.info("Skyfreight shutdown")

    app = FastAPI(title="Skyfreight", lifespan=lifespan)

    app.include_router(health.router)
    app.include_router(shipments.router, prefix="/shipments")
    app.include_router(flights.router, prefix="/flights")
    app.include_router(tracking.router, prefix="/tracking")
    app.include_router(dashboard.router, prefix="/dashboard")
    app.include_router(admin.router, prefix="/admin")
    return app


app = create_app()
