import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app import models  # noqa: F401  (registers tables on Base.metadata)
from app.database import Base, engine
from app.logging_config import configure_logging
from app.middleware.exceptions import register_exception_handlers
from app.routers import alerts, health, pages, products, sensor_data, shipments, storage_units, users
from app.utils.cache import close_redis

configure_logging()
logger = logging.getLogger("coldchain")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    logger.info("Cold Chain Monitor started (%s)", settings.environment)
    yield

    await close_redis()
    await engine.dispose()
    logger.info("Cold Chain Monitor stopped")


app = FastAPI(
    title="Cold Chain Monitor",
    description="Cold-chain temperature monitoring for products in storage and transit",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(pages.router)
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(storage_units.router, prefix="/api/storage-units", tags=["storage-units"])
app.include_router(shipments.router, prefix="/api/shipments", tags=["shipments"])
app.include_router(sensor_data.router, prefix="/api/sensor-data", tags=["sensor-data"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["alerts"])

if pages.STATIC_DIR.is_dir():
    app.mount("/static", StaticFiles(directory=pages.STATIC_DIR), name="static")


@app.get("/api", tags=["index"])
async def api_index():
    """List the resource collections this API exposes."""
    return {
        "service": "Cold Chain Monitor",
        "version": app.version,
        "endpoints": {
            "products": "/api/products",
            "storage_units": "/api/storage-units",
            "shipments": "/api/shipments",
            "sensor_data": "/api/sensor-data",
            "alerts": "/api/alerts",
            "users": "/api/users/login",
            "health": "/health",
        },
    }
