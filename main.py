from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from fastapi.encoders import jsonable_encoder
from app.core.config import Settings, settings as default_settings
from app.core.db.base import Database
from app.core.errors import AppError
from app.core.logging import get_logger, setup_logging
from app.apis.flashcards.main import router as flashcards_router
from app.apis.notes.main import router as notes_router
from app.modules.auth import ensure_demo_user
from app.modules.flashcards.client import OpenRouterClient
from app.modules.flashcards.generator import CompletionClient

import uvicorn
from fastapi.middleware.cors import CORSMiddleware


logger = get_logger(__name__)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": f"{field}: {message}" if field else message,
                "details": jsonable_encoder(errors),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled {type(exc).__name__} on {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(
    settings: Optional[Settings] = None,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    settings = settings or default_settings
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(
            str(settings.database.connection_string), echo=settings.database.echo
        )
        if settings.database.auto_create:
            await db.create_all()
        app.state.db = db
        app.state.current_user_id = await ensure_demo_user(db)
        try:
            yield
        finally:
            await db.dispose()

    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )
    app.state.settings = settings
    app.state.completion_client = completion_client or OpenRouterClient()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)

    app.include_router(notes_router, prefix=settings.app.api_prefix)
    app.include_router(flashcards_router, prefix=settings.app.api_prefix)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=default_settings.app.port,
            reload=not default_settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
