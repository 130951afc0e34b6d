"""
Todos API: FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       that owns its own TodoStore.
Who:   Called by uvicorn (uvicorn todos_api.main:app), by the `todos-api`
       console script through run(), and by the test suite.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ Logging + Request ID         │→│  CORS        │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────┐ ┌────────────────────┐    │
    │  │ /todos, /todos/{id}… │ │ GET /status, GET / │    │
    │  └──────────────────────┘ └────────────────────┘    │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ route→404   │   │
    │  │ anything else→500                            │   │
    │  └──────────────────────────────────────────────┘   │
    │                                                     │
    │  State: app.state.store (TodoStore, seeded)         │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from todos_api import __version__
from todos_api.config import settings
from todos_api.exceptions import NotFoundError, ValidationError
from todos_api.middleware.logging import RequestLoggingMiddleware
from todos_api.middleware.request_id import RequestIDLogFilter
from todos_api.routes import status, todos
from todos_api.routes.status import AVAILABLE_ENDPOINTS
from todos_api.schemas.todo import EndpointNotFoundResponse, ServerErrorResponse
from todos_api.services.todo_store import TodoStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] [a1b2c3d4] todos_api.access: GET /todos
    The timestamp on each line is what makes the access log a timeline of
    what clients did to the store.
    """
    log_format = "%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s"

    handler = logging.StreamHandler(sys.stdout)
    # Every record needs request_id for the format above, uvicorn's included
    handler.addFilter(RequestIDLogFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging and announce the endpoints on startup."""
    setup_logging()
    logger.info("=" * 60)
    logger.info(
        "Todos API Server running on http://%s:%d (%d todos loaded)",
        settings.backend_host,
        settings.backend_port,
        app.state.store.count,
    )
    logger.info("Available endpoints:")
    for endpoint in AVAILABLE_ENDPOINTS:
        method, path = endpoint.split(" ", 1)
        logger.info("   %-7s %s", method, path)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Todos API Server shutting down (store discarded).")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _requested_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError               → 400 {error, received_body}
        NotFoundError                 → 404 {error, id[, available_ids]}
        HTTPException 404/405         → 404 {error, requested_url, method,
                                             available_endpoints}
        HTTPException (other)         → its status, {error}
        Exception (fallback)          → 500 {error, message, timestamp}

    The Exception handler is the only place an unexpected failure becomes a
    response.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        received = exc.received_body
        if received is None:
            received = getattr(request.state, "body", {})
        logger.warning("Validation error: %s", exc.message)
        return JSONResponse(
            status_code=400,
            content={"error": exc.message, "received_body": received},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        content = {"error": exc.message, "id": exc.todo_id}
        if exc.available_ids is not None:
            content["available_ids"] = exc.available_ids
        return JSONResponse(status_code=404, content=content)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown paths and unsupported methods both answer with the endpoint directory."""
        if exc.status_code in (404, 405):
            body = EndpointNotFoundResponse(
                requested_url=_requested_url(request),
                method=request.method,
                available_endpoints=list(AVAILABLE_ENDPOINTS),
            )
            return JSONResponse(status_code=404, content=body.model_dump())
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Server Error: %s", str(exc), exc_info=True)
        body = ServerErrorResponse(message=str(exc))
        return JSONResponse(status_code=500, content=body.model_dump())


# ══════════════════════════════════════════════════════════════════════════
# Trailing Slashes
# ══════════════════════════════════════════════════════════════════════════

def add_trailing_slash_routes(app: FastAPI) -> None:
    """
    Serve every API route with a trailing slash as well.

    Starlette would otherwise answer `/todos/` with a 307 to `/todos`, and
    clients that don't follow redirects (or that downgrade POST to GET when
    they do) never reach the handler. The slashed twins are hidden from the
    OpenAPI schema.
    """
    for route in list(app.routes):
        if not isinstance(route, APIRoute) or route.path == "/":
            continue
        app.router.add_api_route(
            route.path + "/",
            route.endpoint,
            methods=list(route.methods),
            response_model=route.response_model,
            status_code=route.status_code,
            response_class=route.response_class,
            include_in_schema=False,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[TodoStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Store to serve. Defaults to a freshly seeded TodoStore, so
               every app (and every test) starts from the same five records.
    """
    app = FastAPI(
        title="Todos API Server",
        description=(
            "Mock todo API for local development and testing. "
            "Records live in memory and reset when the server restarts."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.state.store = store if store is not None else TodoStore()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # Logging (assigns the request id) → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(todos.router)
    app.include_router(status.router)
    add_trailing_slash_routes(app)

    return app


# uvicorn expects `todos_api.main:app` to be importable
app = create_app()


def run() -> None:
    """Entry point for the `todos-api` console script."""
    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
