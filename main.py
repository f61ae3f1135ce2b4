import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from dependencies import build_store
from errors import AppError
from routes import auth, dashboard, health, insights, settings as settings_routes, transactions, upload

logger = logging.getLogger(__name__)


def configure_logging(level: str = None):
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s [%(levelname)s] %(message)s"
    )


def create_app(store=None) -> FastAPI:
    """Build the API. Pass ``store`` to skip configuration-based store selection."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "store", None) is None:
            app.state.store = build_store(settings)
        # Explicit one-time seed; a second run is a logged no-op
        app.state.store.ensure_demo_data()
        yield

    app = FastAPI(title="Canadian Insights API", lifespan=lifespan)
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=".*",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Unexpected error"})

    app.include_router(health.router)
    app.include_router(auth.router, prefix="/auth")
    app.include_router(dashboard.router, prefix="/dashboard")
    app.include_router(upload.router, prefix="/transactions")
    app.include_router(transactions.router, prefix="/transactions")
    app.include_router(insights.router, prefix="/insights")
    app.include_router(settings_routes.router, prefix="/settings")

    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
