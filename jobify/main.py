# jobify/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from jobify.api.v1.applications import router as applications_router
from jobify.api.v1.auth import router as auth_router
from jobify.api.v1.jobs import router as jobs_router
from jobify.core.config import check_settings, settings
from jobify.core.errors import register_exception_handlers
from jobify.db.mongo import close_db, init_db

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # refuse to serve without a signing secret
    check_settings(settings)
    await init_db()
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.APP_ENV)
    yield
    close_db()


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title=f"{settings.APP_NAME} API", lifespan=lifespan)

    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # browsers reject credentials with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(jobs_router)
    app.include_router(applications_router)

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    async def root():
        return f"{settings.APP_NAME} API is running"

    @app.get("/health", tags=["health"])
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
