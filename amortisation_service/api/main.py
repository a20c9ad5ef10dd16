"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from amortisation_service.api.middleware import RequestIDMiddleware, MetricsMiddleware
from amortisation_service.api.v1 import amortisation
from amortisation_service.infrastructure.database.session import init_db
from amortisation_service.infrastructure.observability.logging import setup_logging
from amortisation_service.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Loan Amortisation Service",
        description="EMI schedule calculation for reducing balance, flat rate and bullet loans",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Malformed bodies are bad input, same as domain validation failures
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            field = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
            detail = f"{field}: {errors[0].get('msg')}" if field else str(errors[0].get("msg"))
        else:
            detail = "Invalid request body"
        return JSONResponse(status_code=400, content={"detail": detail})

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(amortisation.router, prefix="/v1", tags=["amortisation"])

    return app


app = create_app()
