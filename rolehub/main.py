from contextlib import asynccontextmanager

from fastapi import FastAPI

from rolehub.api.exception_handlers import register_exception_handlers
from rolehub.api.v1.router import api_router
from rolehub.core.config import settings
from rolehub.core.logging import configure_logging
from rolehub.services.notification import LoggingNotifier, NotificationDispatcher

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.notifier = LoggingNotifier()
    app.state.notification_dispatcher = NotificationDispatcher(
        max_workers=settings.notification_max_workers
    )
    try:
        yield
    finally:
        app.state.notification_dispatcher.shutdown(wait=True)


app = FastAPI(lifespan=lifespan)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
def health():
    return {"status": "ok"}
