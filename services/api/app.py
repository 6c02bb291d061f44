"""
FastAPI application factory.

Components are built once per application and hung off ``app.state``;
handlers reach them through the dependencies in ``services.api.dependencies``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from apps.registrar.pipeline import CreateUserPipeline
from services.api.middleware import RequestLoggingMiddleware
from services.api.routes import router
from utils.activity import ActivityClient
from utils.config import Settings, get_settings
from utils.store import RecordStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[RecordStore] = None,
    activity_client: Optional[ActivityClient] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to build components from, defaults to the cached settings
        store: Record store override
        activity_client: Activity client override

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()
    store = store or RecordStore(settings.USERS_STORE_PATH)
    activity_client = activity_client or ActivityClient(
        url=settings.ACTIVITY_API_URL,
        timeout=settings.ACTIVITY_TIMEOUT,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Server started on port %d (store=%s, activity_url=%s)",
            settings.API_PORT, str(store.path), activity_client.url,
        )
        try:
            yield
        finally:
            await activity_client.close()
            logger.info("Activity client closed")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.activity_client = activity_client
    app.state.pipeline = CreateUserPipeline(store, activity_client)

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(router)

    return app
