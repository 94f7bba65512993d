# configapi/main.py
# ASGI application: `uvicorn configapi.main:app`

from contextlib import asynccontextmanager

from fastapi import FastAPI

from configapi import config
from configapi.db.base import async_engine
from configapi.middleware.error_handler import ErrorHandlerMiddleware, setup_exception_handlers
from configapi.middleware.request_logger import RequestLoggingMiddleware
from configapi.observability.logger import configure_logging, log_info
from configapi.observability.tracing import init_tracing
from configapi.routers.health import router as health_router
from configapi.routers.pages import router as pages_router
from configapi.routers.widgets import router as widgets_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(config.settings)
    log_info(f"Config API starting on {config.HOST}:{config.PORT}")
    yield
    log_info("Disposing database engine...")
    await async_engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Config API",
        description="Pages and ordered widgets for mobile app screens",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Last added = outermost: the access log also sees responses built by the error handler
    app.add_middleware(ErrorHandlerMiddleware, debug=config.DEBUG)
    app.add_middleware(RequestLoggingMiddleware)

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(pages_router)
    app.include_router(widgets_router)

    init_tracing(config.settings, app=app, engine=async_engine)
    return app


app = create_app()
