"""FastAPI application factory for the Catalogue service."""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalogue.api.errors import register_error_handlers
from catalogue.api.routes import product_router
from catalogue.domain import catalogue
from catalogue.utils.logging import bind_request_context, clear_request_context


def create_app(domain=catalogue) -> FastAPI:
    """Build the app around an initialized domain."""
    app = FastAPI(
        title="Catalogue API",
        description="Product listing, search, ranking and reviews",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context and a request id for each request."""
        clear_request_context()
        bind_request_context(request_id=request.headers.get("x-request-id") or uuid.uuid4().hex)
        with domain.domain_context():
            return await call_next(request)

    register_error_handlers(app)
    app.include_router(product_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": domain.name})

    return app
