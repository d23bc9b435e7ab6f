import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from . import __version__
from .core.clock import is_weekday, is_weekend
from .core.config import settings
from .core.logging import setup_logging
from .db.store import Store
from .api.deps import get_clock
from .api.routes import router as api_router
from .services.errors import PortalError
from .services.recurrence import RecurrenceResetScheduler

logger = logging.getLogger(__name__)


def run_startup_reset(store: Store) -> int:
    clock = get_clock()
    today = clock.today()
    db = store.session()
    try:
        scheduler = RecurrenceResetScheduler(db, store.locks, tz=clock.tz)
        return scheduler.run_daily_reset(today, is_weekday(today), is_weekend(today))
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: Store = app.state.store
    owns_store = not store.is_open
    if owns_store:
        store.open()
    if settings.RESET_ON_STARTUP:
        count = run_startup_reset(store)
        if count:
            logger.info(f"Reset {count} recurring tasks on startup")
    try:
        yield
    finally:
        if owns_store:
            store.close()


async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def create_app(store: Store | None = None) -> FastAPI:
    app = FastAPI(title="Family Portal API", version=__version__, lifespan=lifespan)
    app.state.store = store or Store(settings.DATABASE_URL)
    app.add_exception_handler(PortalError, portal_error_handler)

    @app.get("/health", tags=["Health"])
    def health():
        return {"status": "ok", "version": __version__}

    app.include_router(api_router)
    return app


setup_logging(settings.LOG_LEVEL)
app = create_app()
