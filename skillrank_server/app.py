"""
skillrank API: FastAPI app factory.

Use: uvicorn skillrank_server.app:app
Or:  from skillrank_server import app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skillrank import __version__

from .config import get_config
from .routes import register_routes
from .state import get_state

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Root logger setup, once per process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def create_app() -> FastAPI:
    """Build FastAPI app with CORS, routes, and startup/shutdown hooks."""
    configure_logging(get_config().log_level)
    app = FastAPI(
        title="skillrank API",
        description="Skill catalog freshness lifecycle and related-items ranking",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_routes(app)

    @app.on_event("startup")
    async def _startup():
        state = get_state()
        ok, errors = state.config.validate()
        for err in errors:
            logger.warning("[startup] CONFIG_INVALID %s", err)
        logger.info(
            "[startup] skillrank API starting: data_source=%s resurrection_configured=%s valid=%s",
            state.config.data_source, state.config.resurrection_configured, ok,
        )

    @app.on_event("shutdown")
    async def _shutdown():
        state = get_state()
        if state.runner.pending:
            logger.info("[shutdown] Draining %d background tasks", state.runner.pending)
        await state.runner.drain()

    return app


app = create_app()
