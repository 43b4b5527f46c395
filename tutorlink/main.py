import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from loguru import logger

from tutorlink.api.contracts import router as contracts_router
from tutorlink.api.errors import register_exception_handlers
from tutorlink.api.notifications import router as notifications_router
from tutorlink.api.progress import router as progress_router
from tutorlink.api.reports import router as reports_router
from tutorlink.api.statistics import router as statistics_router
from tutorlink.api.support import router as support_router
from tutorlink.api.units import router as units_router
from tutorlink.api.wallet import router as wallet_router
from tutorlink.config.settings import settings
from tutorlink.core.logger import setup_logger
from tutorlink.db.session import init_db

setup_logger(settings)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create tables on startup.

    Note: FastAPI requires async for lifespan context manager,
    even if no await operations are used.
    """
    logger.info("Ensuring database tables exist")
    init_db()
    logger.info("Database tables verified")

    await asyncio.sleep(0)
    yield

    logger.info("Shutting down")


app = FastAPI(title="Tutorlink", lifespan=lifespan)

register_exception_handlers(app)
app.include_router(contracts_router)
app.include_router(progress_router)
app.include_router(notifications_router)
app.include_router(reports_router)
app.include_router(units_router)
app.include_router(wallet_router)
app.include_router(support_router)
app.include_router(statistics_router)

logger.info("FastAPI application initialized")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
    return response
