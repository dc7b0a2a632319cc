"""
FastAPI application for the Memorial Planner.

This is the HTTP API that the browser client and admin tools interact with.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

from memorial import __version__
from memorial.config import Settings, get_settings
from memorial.config_loader import load_document_template
from memorial.core.categories import get_categories
from memorial.core.errors import MemorialError, NotFoundError, ValidationError
from memorial.integrations.sentry import capture_exception, init_sentry
from memorial.resources.document_template import DocumentTemplate
from memorial.services.content import ContentService
from memorial.services.document import DocumentService
from memorial.storage import StorageProvider, create_local_storage

logger = logging.getLogger(__name__)


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - built when the app is created."""

    def __init__(
        self,
        storage: StorageProvider,
        content_service: ContentService,
        document_service: DocumentService,
    ):
        self.storage = storage
        self.content_service = content_service
        self.document_service = document_service


def build_state(
    settings: Settings,
    storage: StorageProvider | None = None,
    template: DocumentTemplate | None = None,
) -> AppState:
    """Wire storage and services together."""
    storage = storage or create_local_storage(settings.storage_backend, settings.data_dir)
    template = template or load_document_template(
        settings.document_template, settings.config_dir or None
    )
    content_service = ContentService(storage, max_link_length=settings.max_link_length)
    document_service = DocumentService(content_service, template)
    return AppState(storage, content_service, document_service)


# =============================================================================
# Dependencies
# =============================================================================


def get_state(request: Request) -> AppState:
    return request.app.state.memorial


def get_content_service(state: AppState = Depends(get_state)) -> ContentService:
    return state.content_service


def get_document_service(state: AppState = Depends(get_state)) -> DocumentService:
    return state.document_service


# =============================================================================
# Request Models
# =============================================================================


class CreateContentRequest(BaseModel):
    title: str | None = None
    content: str | None = None  # Text categories
    link: str | None = None  # Music


class GeneratePdfRequest(BaseModel):
    # category -> [item id, ...]
    wishlist: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Routes
# =============================================================================


router = APIRouter(prefix="/api")


@router.get("/categories")
async def list_categories(
    content_service: ContentService = Depends(get_content_service),
):
    """List the content categories in document order."""
    return [c.to_dict() for c in content_service.categories]


@router.get("/content/{category}")
async def list_content(
    category: str,
    content_service: ContentService = Depends(get_content_service),
):
    """Fetch all items of a category, oldest first."""
    items = await content_service.list_items(category)
    return [item.to_api() for item in items]


@router.post("/content/{category}", status_code=201)
async def create_content(
    category: str,
    request: CreateContentRequest,
    content_service: ContentService = Depends(get_content_service),
):
    """Add a new item to a category."""
    item = await content_service.create_item(category, request.model_dump())
    return item.to_api()


@router.delete("/content/{category}/{item_id}")
async def delete_content(
    category: str,
    item_id: str,
    content_service: ContentService = Depends(get_content_service),
):
    """Delete an item by its ID."""
    key = content_service.store(category).descriptor.key
    deleted_id = await content_service.delete_item(category, item_id)
    return {"message": f"{key} item deleted successfully", "deletedItemId": deleted_id}


@router.post("/pdf/generate")
async def generate_pdf(
    request: GeneratePdfRequest,
    document_service: DocumentService = Depends(get_document_service),
):
    """Generate the service plan PDF for a wishlist of item IDs."""
    result = await document_service.generate(request.wishlist)
    return Response(
        content=result.data,
        media_type=result.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


# =============================================================================
# Error Handlers
# =============================================================================


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return _message(400, exc.message)


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _message(404, exc.message)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _message(400, "Invalid request body", errors=jsonable_encoder(exc.errors()))


async def handle_server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s: %s", request.method, request.url.path, exc,
        exc_info=exc,
    )
    capture_exception(exc, path=request.url.path)
    return _message(500, "Something went wrong on the server!")


# =============================================================================
# App Setup
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown hooks."""
    settings: Settings = app.state.settings

    if init_sentry(settings):
        logger.info("Sentry error tracking enabled")

    logger.info(
        "Memorial API starting in %s mode (%s storage)",
        settings.environment, settings.storage_backend,
    )

    yield

    logger.info("Memorial API shutting down")


def create_app(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
    template: DocumentTemplate | None = None,
) -> FastAPI:
    """
    Create the API application.

    Args:
        settings: Defaults to the environment settings
        storage: Overrides the configured storage backend (tests)
        template: Overrides the configured document template
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Memorial Planner API",
        description="Curated content and service plan generation for funeral planning",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.memorial = build_state(settings, storage, template)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(MemorialError, handle_server_error)
    app.add_exception_handler(Exception, handle_server_error)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "memorial-api"}

    app.include_router(router)
    return app


app = create_app()
