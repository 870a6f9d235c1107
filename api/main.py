"""
FastAPI application for the RecipeBox API.

This module assembles the REST API:
- GET /initialize/{user_id}: Create the user record on first sign-in
- GET /recipes/{user_id}/{recipe_id}: Fetch one recipe
- GET /recipes/{user_id}: Fetch all recipes for a user
- POST /recipes/{user_id}: Add a recipe
- DELETE /recipes/{user_id}/{recipe_id}: Remove a recipe
- GET /search: Find a recipe by ingredients (Spoonacular)
- GET /sam: Search Sam's Club products (Unwrangle)
- GET /health: Health check

Every other GET path serves the built client application from STATIC_DIR,
falling back to index.html so client-side routes resolve.

All errors are returned as ``{"error": <message>}`` with status 400, 404 or 500.

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import time
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import AppConfig, StoreConfig, validate_required_config
from api.routers.recipes import router as recipes_router
from api.routers.search import router as search_router
from recipebox.connectors.spoonacular_connector import SpoonacularConnector
from recipebox.connectors.unwrangle_connector import UnwrangleConnector
from recipebox.errors import NotFoundError, RecipeBoxError
from recipebox.stores.base import RecipeStore

logging.basicConfig(
    level=AppConfig.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_NAME = "RecipeBox API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "Per-user recipe storage with Spoonacular recipe search and Sam's Club product search"


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body"
        if err.get("type") == "missing":
            parts.append(f"Missing required fields: {loc}")
        else:
            parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RecipeBoxError)
    async def handle_recipebox_error(request: Request, exc: RecipeBoxError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s %s failed unexpectedly", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) or "Internal server error"},
        )


def _register_client_routes(app: FastAPI) -> None:
    """Health, root and the static client with history fallback. Registered last."""

    @app.get("/health", tags=["health"])
    def health(request: Request):
        """
        Health check endpoint for monitoring and status checks.

        Returns:
            Dictionary with status, API metadata, uptime and the store backend.
            Always returns 200 OK if the endpoint is reachable.
        """
        store = getattr(request.app.state, "store", None)
        if store is not None:
            store_backend = store.backend
        else:
            try:
                store_backend = StoreConfig.get_backend()
            except RuntimeError:
                store_backend = "invalid"

        return {
            "status": "ok",
            "name": API_NAME,
            "version": API_VERSION,
            "uptime_seconds": int(time.time() - request.app.state.started_at),
            "store": store_backend,
        }

    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_client(full_path: str, request: Request) -> Any:
        static_dir: Path = request.app.state.static_dir
        index = static_dir / "index.html"

        if not index.is_file():
            if not full_path:
                return {
                    "name": API_NAME,
                    "version": API_VERSION,
                    "description": API_DESCRIPTION,
                    "docs": "/docs",
                }
            raise NotFoundError()

        if full_path:
            root = static_dir.resolve()
            candidate = (static_dir / full_path).resolve()
            if candidate.is_file() and candidate.is_relative_to(root):
                return FileResponse(candidate)

        return FileResponse(index)


def create_app(
    store: Optional[RecipeStore] = None,
    spoonacular: Optional[SpoonacularConnector] = None,
    unwrangle: Optional[UnwrangleConnector] = None,
    static_dir: Optional[Path] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: RecipeStore to use (optional, built from RECIPEBOX_STORE on first use)
        spoonacular: Spoonacular connector (optional, built from config on first use)
        unwrangle: Unwrangle connector (optional, built from config on first use)
        static_dir: Client build directory (optional, defaults to STATIC_DIR)

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title=API_NAME,
        description=API_DESCRIPTION,
        version=API_VERSION,
        openapi_tags=[
            {
                "name": "recipes",
                "description": "User initialization and per-user recipe storage.",
            },
            {
                "name": "search",
                "description": "Recipe search by ingredients and Sam's Club product search.",
            },
            {
                "name": "health",
                "description": "Health check and monitoring endpoints.",
            },
        ],
    )

    app.state.store = store
    app.state.spoonacular = spoonacular
    app.state.unwrangle = unwrangle
    app.state.static_dir = static_dir if static_dir is not None else AppConfig.get_static_dir()
    app.state.started_at = time.time()

    origins = AppConfig.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    app.include_router(recipes_router)
    app.include_router(search_router)
    _register_client_routes(app)

    try:
        validate_required_config()
    except RuntimeError as e:
        logger.warning("%s", e)

    return app


app = create_app()
