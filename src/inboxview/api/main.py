"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from loguru import logger

from inboxview import __version__
from inboxview.application.ports.email_source import LatestEmailSource
from inboxview.application.use_cases.render_latest_email import RenderLatestEmailUseCase
from inboxview.infrastructure.email.providers.imap.client import ImapLatestEmailSource
from inboxview.infrastructure.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting inboxview v{__version__}")
    logger.info(f"Serving {settings.mailbox} of {settings.email} via {settings.imap_server}")
    yield
    logger.info("Shutdown complete")


def create_app(settings: Settings, source: Optional[LatestEmailSource] = None) -> FastAPI:
    """Create the application around an already-loaded ``Settings``.

    Args:
        settings: Validated settings, shared read-only by every request
        source: Mail source override; defaults to IMAP against ``settings``
    """
    app = FastAPI(
        title="inboxview",
        version=__version__,
        description="Latest email of an IMAP inbox as a web page",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.use_case = RenderLatestEmailUseCase(source or ImapLatestEmailSource(settings))

    from inboxview.api.routes import router

    app.include_router(router)

    return app
