"""
Application factory.

    uvicorn backend_store.main:app
    python -m backend_store.main
"""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .api.v1.error_handlers import register_exception_handlers
from .api.v1.routers import api_router
from .config.settings import Settings, get_settings
from .core.logging import RequestIDMiddleware, setup_logging
from .core.timeout import RequestTimeoutMiddleware
from .database.base import Base
from .database.session import build_session_maker, create_engine_from_settings
from .utils.logging import get_project_name, get_project_version

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)
        engine = create_engine_from_settings(settings)
        app.state.engine = engine
        app.state.session_maker = build_session_maker(engine)

        if settings.DB_CREATE_ALL:
            # Importing the package registers every table on Base.metadata.
            from . import models  # noqa: F401

            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        logger.info("app.startup", extra={"env": settings.ENV, "sqlite": settings.is_sqlite})
        try:
            yield
        finally:
            await engine.dispose()
            logger.info("app.shutdown")

    app = FastAPI(title=get_project_name(), version=get_project_version(), lifespan=lifespan)
    app.state.settings = settings

    # Added last = outermost: the request id is set before the deadline starts.
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("backend_store.main:app", host="0.0.0.0", port=8000, log_config=None)
