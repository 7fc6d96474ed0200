"""
Show Shaper Service - Main Entry Point
HTTP API for natural-language dashboard editing
"""

import threading
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from fastapi import Body, Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from injector import Injector
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core import (
    DataSourceError,
    HistoryError,
    InvalidInputError,
    LogContext,
    SchemaValidationError,
    StoreError,
    UserIdentity,
    configure_logging,
    create_container,
    get_logger,
)
from .core.config import Settings
from .core.id import Prefix, is_valid, new_request_id, new_user_id
from .clients.shows import ShowsClient
from .handlers.data import ShowDataService
from .handlers.design import DesignService
from .monitoring import CONTENT_TYPE, metrics_collector
from .services.store import DesignRecord

logger = get_logger(__name__)

VERSION = "0.1.0"


# Request/Response Models
class APIModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TranslateRequest(APIModel):
    prompt: str
    design: dict[str, Any] = Field(alias="schema")


class PromptBody(APIModel):
    prompt: str


class SaveRequest(APIModel):
    design: dict[str, Any] = Field(alias="schema")
    history: list[dict[str, Any]] | None = None
    history_index: int | None = Field(default=None, alias="historyIndex")


class LoginRequest(APIModel):
    display_name: str = Field(min_length=1, max_length=64, alias="displayName")


class UserDirectory:
    """Display name to mock user id, stable for the process lifetime."""

    def __init__(self) -> None:
        self._ids: dict[str, str] = {}
        self._lock = threading.Lock()

    def get_or_create(self, display_name: str) -> str:
        with self._lock:
            if display_name not in self._ids:
                self._ids[display_name] = new_user_id()
            return self._ids[display_name]


def require_user(x_user_id: str | None = Header(default=None)) -> str:
    """Mock identity from the x-user-id header."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="unauthorized")
    try:
        return UserIdentity(user_id=x_user_id).user_id
    except ValidationError:
        raise HTTPException(status_code=400, detail="invalid x-user-id") from None


def get_service(request: Request) -> DesignService:
    return request.app.state.design_service


def get_data_service(request: Request) -> ShowDataService:
    return request.app.state.data_service


def record_response(record: DesignRecord) -> dict[str, Any]:
    return record.to_json_dict()


def create_app(container: Injector | None = None) -> FastAPI:
    """Build the FastAPI application around a DI container."""
    container = container or create_container()
    settings = container.get(Settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Configure logging on startup, close the show catalog client on shutdown"""
        configure_logging(settings.log_level, settings.json_logs)
        logger.info(
            "startup",
            model=settings.gemini_model,
            store=settings.store_path or "memory",
            history_cap=settings.history_cap,
        )
        yield
        container.get(ShowsClient).close()
        logger.info("shutdown")

    app = FastAPI(
        title="Show Shaper",
        description="Natural-language editing of data dashboard designs",
        version=VERSION,
        lifespan=lifespan,
    )

    app.state.container = container
    app.state.design_service = container.get(DesignService)
    app.state.data_service = container.get(ShowDataService)
    app.state.users = UserDirectory()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next: Any) -> Response:
        # Keep a well-formed id from an upstream caller so logs correlate
        incoming = request.headers.get("x-request-id", "")
        request_id = incoming if is_valid(incoming, Prefix.REQUEST) else new_request_id()
        start = time.perf_counter()
        with LogContext(request_id=request_id, path=request.url.path):
            response = await call_next(request)
            metrics_collector.record_http_request(request.url.path, response.status_code)
            logger.debug(
                "request_complete",
                status=response.status_code,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        response.headers["x-request-id"] = request_id
        return response

    # Error mapping
    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "details": exc.errors})

    @app.exception_handler(SchemaValidationError)
    async def invalid_schema(request: Request, exc: SchemaValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "details": exc.errors})

    @app.exception_handler(HistoryError)
    async def history_conflict(request: Request, exc: HistoryError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"error": str(exc)})

    @app.exception_handler(DataSourceError)
    async def data_source_failure(request: Request, exc: DataSourceError) -> JSONResponse:
        logger.error("data_source_error", error=str(exc))
        metrics_collector.record_error("data_source_error", "shows")
        message = "Failed to fetch summary" if request.url.path.endswith("/summary") else "Failed to fetch data"
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(StoreError)
    async def store_failure(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("store_error", error=str(exc))
        metrics_collector.record_error("store_error", "store")
        return JSONResponse(status_code=500, content={"error": "Failed to access design store"})

    # Routes
    @app.get("/health")
    def health() -> dict[str, Any]:
        """Liveness and component summary"""
        translator = app.state.design_service.translator
        return {
            "status": "healthy",
            "version": VERSION,
            "model": settings.gemini_model,
            "translator_configured": bool(settings.gemini_api_key),
            "cache": translator.cache.stats.to_dict() if translator.cache else None,
        }

    @app.get("/metrics")
    def metrics() -> Response:
        return Response(content=metrics_collector.get_metrics(), media_type=CONTENT_TYPE)

    @app.post("/api/login")
    def login(body: LoginRequest) -> dict[str, str]:
        """Mock login: map a display name to a stable user id."""
        user_id = app.state.users.get_or_create(body.display_name)
        return {"userId": user_id, "displayName": body.display_name}

    @app.get("/api/data")
    def list_shows(data: ShowDataService = Depends(get_data_service)) -> list[dict[str, Any]]:
        """Show index projected to id, title, genres, rating, premiered, image."""
        return [show.model_dump(mode="json") for show in data.list_shows()]

    @app.get("/api/data/summary")
    def show_summary(data: ShowDataService = Depends(get_data_service)) -> dict[str, Any]:
        """Show counts by genre and premiere month, plus the total."""
        return data.summary().to_json_dict()

    @app.post("/api/ai")
    def translate(body: TranslateRequest, service: DesignService = Depends(get_service)) -> dict[str, Any]:
        """Translate a request into commands without applying them."""
        commands = service.translate(body.prompt, body.design)
        return commands.to_json_dict()

    @app.get("/api/schema")
    def load_schema(
        user_id: str = Depends(require_user), service: DesignService = Depends(get_service)
    ) -> dict[str, Any]:
        return record_response(service.load(user_id))

    @app.post("/api/schema")
    def save_schema(
        body: SaveRequest,
        user_id: str = Depends(require_user),
        service: DesignService = Depends(get_service),
    ) -> dict[str, Any]:
        service.save(user_id, body.design, body.history, body.history_index)
        return {"ok": True}

    @app.post("/api/apply")
    def apply(
        body: dict[str, Any] = Body(...),
        user_id: str = Depends(require_user),
        service: DesignService = Depends(get_service),
    ) -> dict[str, Any]:
        """Apply a command list to the user's design."""
        return service.apply(user_id, body).to_dict()

    @app.post("/api/prompt")
    def prompt(
        body: PromptBody,
        user_id: str = Depends(require_user),
        service: DesignService = Depends(get_service),
    ) -> dict[str, Any]:
        """Translate then apply in one call."""
        return service.prompt(user_id, body.prompt).to_dict()

    @app.post("/api/undo")
    def undo(
        user_id: str = Depends(require_user), service: DesignService = Depends(get_service)
    ) -> dict[str, Any]:
        record = service.undo(user_id)
        return {**record_response(record), "current": record.current.to_json_dict()}

    @app.post("/api/redo")
    def redo(
        user_id: str = Depends(require_user), service: DesignService = Depends(get_service)
    ) -> dict[str, Any]:
        record = service.redo(user_id)
        return {**record_response(record), "current": record.current.to_json_dict()}

    return app


app = create_app()


def main() -> None:
    """Console entry point."""
    import uvicorn

    container = create_container()
    settings = container.get(Settings)
    uvicorn.run(create_app(container), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
