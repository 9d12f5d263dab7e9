"""
Synapse FastAPI Application

A REST API server for the Synapse note service.
Provides endpoints for saving text and image notes and for keyword,
semantic and date/tag retrieval.
"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from synapse.config import Config, load_config
from synapse.models.note import Note
from synapse.services.container import ServiceContainer
from synapse.utils.exceptions import ErrorKind, SynapseError
from synapse.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

ERROR_STATUS_CODES = {
    ErrorKind.EMPTY_INPUT: 400,
    ErrorKind.QUERY_ERROR: 400,
    ErrorKind.STORAGE_FAILURE: 500,
}


# Pydantic models for API
class CamelModel(BaseModel):
    """Wire models use camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SaveNoteRequest(CamelModel):
    """Request model for saving a text note."""

    text: str = Field(default="", description="Selected or typed text")


class UploadImageRequest(CamelModel):
    """Request model for uploading an image note."""

    image_base64: str = Field(default="", description="Base64 image or data URL")


class NoteResponse(CamelModel):
    """Stored note without its embedding."""

    id: str
    text: str
    tags: list[str]
    image: str | None = None
    created_at: datetime

    @classmethod
    def from_note(cls, note: Note) -> "NoteResponse":
        return cls(
            id=note.id,
            text=note.text,
            tags=note.tags,
            image=note.image,
            created_at=note.created_at,
        )


class ScoredNoteResponse(CamelModel):
    """Semantic search result."""

    text: str
    tags: list[str]
    image: str | None = None
    score: float


class UploadImageResponse(CamelModel):
    """Response model for image upload."""

    message: str
    text: str
    tags: list[str]


class AnalyticsResponse(CamelModel):
    """Corpus summary."""

    total_notes: int
    this_month_notes: int
    top_tags: list[str]


class HealthResponse(CamelModel):
    """Health check response."""

    status: str
    services_initialized: bool
    note_store: str | None = None
    embedding_model: str | None = None


def create_app(services: ServiceContainer | None = None, config: Config | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        services: Prebuilt services; when omitted they are built from config
            on startup and closed on shutdown
        config: Configuration (default: load_config(), environment over the
            optional SYNAPSE_CONFIG_FILE YAML)
    """
    config = config or load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown."""
        owned = app.state.services is None

        if owned:
            app_config = app.state.config
            setup_logging(app_config.logging)
            logger.info("Starting Synapse server")
            logger.info(
                f"Configuration: Embedder={app_config.embedder.provider}/{app_config.embedder.model}, "
                f"Store={app_config.storage.db_path}, OCR={app_config.ocr.language}"
            )
            app.state.services = await ServiceContainer.build(app_config)
            logger.info("Synapse services initialized")
        else:
            await app.state.services.start()

        yield

        if owned:
            logger.info("Shutting down Synapse server")
            await app.state.services.close()
            app.state.services = None
            logger.info("Cleanup complete")
        else:
            # The connection belongs to this event loop
            await app.state.services.stop()

    app = FastAPI(
        title="Synapse API",
        description="Personal note capture with keyword, semantic and date/tag retrieval",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.services = services
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(SynapseError)
    async def synapse_error_handler(request: Request, exc: SynapseError):
        status_code = ERROR_STATUS_CODES.get(exc.kind, 500)
        if status_code >= 500:
            logger.bind(**exc.context).error(f"{request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=status_code, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unexpected error on {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    register_routes(app)
    return app


def get_services(request: Request) -> ServiceContainer:
    """Dependency returning the application's service container."""
    services = request.app.state.services
    if services is None:
        raise HTTPException(status_code=503, detail="Services not initialized")
    return services


def register_routes(app: FastAPI) -> None:
    """Attach the API routes to app."""

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        """Health check endpoint."""
        services: ServiceContainer | None = request.app.state.services
        return HealthResponse(
            status="healthy" if services else "initializing",
            services_initialized=services is not None,
            note_store=type(services.store).__name__ if services else None,
            embedding_model=getattr(services.vectorizer.embedder, "model", None)
            if services
            else None,
        )

    @app.post("/api/save", response_class=PlainTextResponse)
    async def save_note(request: SaveNoteRequest, services: ServiceContainer = Depends(get_services)):
        """
        Save a text note.

        The note is auto-tagged and embedded. If the embedding provider is
        unavailable the note is still saved; it is then only reachable by
        keyword and filter queries.
        """
        await services.pipeline.ingest_text(request.text)
        return "Saved successfully"

    @app.get("/api/search", response_model=list[NoteResponse])
    async def keyword_search(
        q: str = Query(default=""), services: ServiceContainer = Depends(get_services)
    ):
        """Case-insensitive keyword search over note text and tags."""
        notes = await services.retrieval.keyword_search(q)
        return [NoteResponse.from_note(note) for note in notes]

    @app.get("/api/semantic-search", response_model=list[ScoredNoteResponse])
    async def semantic_search(
        q: str = Query(default=""), services: ServiceContainer = Depends(get_services)
    ):
        """Top notes by cosine similarity to the query."""
        results = await services.retrieval.semantic_search(q)
        return [ScoredNoteResponse(**result.model_dump()) for result in results]

    @app.post("/api/upload-image", response_model=UploadImageResponse)
    async def upload_image(
        request: UploadImageRequest, services: ServiceContainer = Depends(get_services)
    ):
        """
        Save an image note.

        Text is recovered with OCR and auto-tagged; images without readable
        text are stored with placeholder text.
        """
        result = await services.pipeline.ingest_image(request.image_base64)
        return UploadImageResponse(
            message="Image saved",
            text=result.extracted_text,
            tags=result.note.tags,
        )

    @app.get("/api/analytics", response_model=AnalyticsResponse)
    async def analytics(services: ServiceContainer = Depends(get_services)):
        """Note counts and most frequent tags."""
        summary = await services.retrieval.analytics()
        return AnalyticsResponse(**summary.model_dump())

    @app.get("/api/filter", response_model=list[NoteResponse])
    async def filter_notes(
        start: str | None = Query(default=None, description="First day, DD-MM-YYYY"),
        end: str | None = Query(default=None, description="Last day, DD-MM-YYYY"),
        tag: str | None = Query(default=None, description="Tag or text pattern"),
        services: ServiceContainer = Depends(get_services),
    ):
        """Notes within a day range matching a tag or text, newest first."""
        notes = await services.retrieval.filter_notes(start=start, end=end, pattern=tag)
        return [NoteResponse.from_note(note) for note in notes]

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Synapse API",
            "version": "1.0.0",
            "description": "Personal note capture with keyword, semantic and date/tag retrieval",
            "docs": "/docs",
            "health": "/health",
        }


app = create_app()
