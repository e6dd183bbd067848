import logging
from contextlib import asynccontextmanager

import asyncpg
import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config import Settings, load_settings
from core.cors import CORSMiddleware, apply_cors_headers
from core.db import Database
from core.errors import ApiError
from core.logging_config import configure_logging
from core.migrations import apply_migrations
from dependencies import build_store
from feedbacks import router as feedbacks_router
from persons import router as persons_router
from teams import router as teams_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _validation_message(exc: RequestValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors():
        loc = tuple(error.get("loc") or ())
        if len(loc) == 2 and loc[0] == "path" and str(loc[1]).endswith("_id"):
            # "person_id" -> "Invalid person ID"
            return f"Invalid {str(loc[1])[:-3]} ID"
        field = ".".join(str(part) for part in loc if part not in ("body", "query", "path"))
        msg = str(error.get("msg") or "Invalid value")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages) or "Invalid request"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        # FastAPI answers 422 by default; this API reports bad input as 400.
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(asyncpg.PostgresError)
    async def handle_store_error(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
        logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    # Starlette runs Exception handlers outside the user middleware stack, so the
    # CORS headers are set here.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        response = JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
        return apply_cors_headers(response)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        db = Database(settings.database_dsn())
        # Raises after the last attempt, which aborts startup.
        await db.connect(
            attempts=settings.db_connect_attempts,
            delay_seconds=settings.db_connect_delay_seconds,
        )
        try:
            await apply_migrations(db)
            app.state.store = build_store(db)
            yield
        finally:
            app.state.store = None
            await db.close()

    app = FastAPI(title="Coaching API", lifespan=lifespan)
    app.state.settings = settings

    # Any origin may call the API; preflights get a fixed 204 answer.
    app.add_middleware(CORSMiddleware)
    _register_error_handlers(app)

    app.include_router(persons_router.router, prefix=API_PREFIX, tags=["persons"])
    app.include_router(teams_router.router, prefix=API_PREFIX, tags=["teams"])
    app.include_router(feedbacks_router.router, prefix=API_PREFIX, tags=["feedbacks"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    settings = load_settings()
    configure_logging(settings.log_level)
    logger.info("Server starting on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=int(settings.port))
