import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from chatpass.domain.notifier import QuotaChanged, get_notifier
from chatpass.infrastructure.redis_cache.pool import close_redis, get_redis
from chatpass.logging import setup_logging
from chatpass.presentation.api import api
from chatpass.presentation.middleware import access_gate
from chatpass.settings import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)


def log_quota_change(event: QuotaChanged) -> None:
    logger.info("quota changed", extra={"key": event.key, "remaining": event.remaining})


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    get_redis()
    unsubscribe = get_notifier().subscribe(log_quota_change)
    if not settings.token_secret:
        logger.warning("TOKEN_SECRET is not set; every protected request will be denied")

    try:
        yield
    finally:
        # shutdown
        unsubscribe()
        await close_redis()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Chat Access Links", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.middleware("http")(access_gate)
    app.include_router(api)
    return app


app = create_app()
