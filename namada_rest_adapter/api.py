"""FastAPI application factory for stateless request/response services."""

import inspect
import logging
import re
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .errors import InvalidAddressError, UpstreamError, UpstreamTimeoutError
from .models import ErrorResponse, HealthResponse
from .processor import BaseProcessor, StatelessAction

logger = logging.getLogger(__name__)

CORS_ALLOWED_HEADERS = ("Authorization", "Accept", "Content-Type")


@dataclass
class ServiceConfig:
    """
    Configuration for building a stateless service application.

    Args:
        description: Short description for generated docs
        cors_origins: Origins allowed to call the API from a browser
        cors_allow_credentials: Whether browsers may send credentials
        log_level: Root logging level
    """

    description: str | None = None
    cors_origins: list[str] = field(default_factory=list)
    cors_allow_credentials: bool = True
    log_level: str = "info"


def _error(status_code: int, error: str, detail: str | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, detail=detail).model_dump(),
    )


def create_app(processor: BaseProcessor, config: ServiceConfig | None = None) -> FastAPI:
    """
    Create a FastAPI application for a stateless processor.

    Args:
        processor: The processor instance implementing business logic
        config: Optional service configuration
    """

    config = config or ServiceConfig()

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    service_name = processor.name
    service_version = processor.version
    service_description = config.description or f"{service_name} stateless API"

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s %s", service_name, service_version)
        yield
        logger.info("Shutting down %s", service_name)
        await processor.aclose()

    app = FastAPI(
        title=f"{service_name.title()} Stateless API",
        description=service_description,
        version=service_version,
        lifespan=lifespan,
    )

    app.state.processor = processor
    app.state.service_config = config

    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_methods=["GET"],
            allow_credentials=config.cors_allow_credentials,
            allow_headers=list(CORS_ALLOWED_HEADERS),
        )

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError):
        """Handle Pydantic validation errors (e.g., path parameter validation)."""
        return _error(400, "Validation error", str(exc))

    @app.exception_handler(InvalidAddressError)
    async def invalid_address_handler(request: Request, exc: InvalidAddressError):
        logger.info("Rejected address on %s: %s", request.url.path, exc)
        return _error(400, "Invalid address", str(exc))

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        if isinstance(exc, UpstreamTimeoutError):
            return _error(504, "Upstream timeout", str(exc))
        return _error(502, "Upstream error", str(exc))

    @app.get("/", response_model=HealthResponse)
    async def root():
        return HealthResponse(status="healthy", version=service_version)

    @app.get("/health", response_model=HealthResponse)
    async def health_check():
        return HealthResponse(status="healthy", version=service_version)

    actions = processor.get_stateless_actions()
    if not actions:
        logger.warning(
            "Processor %s registered with stateless service but get_stateless_actions() returned nothing.",
            processor.name,
        )

    def make_endpoint(action: StatelessAction):
        PathParamsModel = action.path_params_model

        async def respond(call_result):
            if inspect.isawaitable(call_result):
                call_result = await call_result
            return call_result

        if PathParamsModel:
            async def endpoint(request: Request):
                path_params = PathParamsModel(**request.path_params)
                return await respond(action.handler(path_params))
        else:
            async def endpoint():
                return await respond(action.handler())

        return endpoint

    for action in actions:
        logger.info("Registering stateless action '%s' at %s", action.name, action.path)

        if action.path_params_model:
            path_param_names = set(re.findall(r'\{(\w+)\}', action.path))

            model_field_names = set(action.path_params_model.model_fields.keys())

            if path_param_names != model_field_names:
                raise ValueError(
                    f"Path parameters in '{action.path}' do not match "
                    f"path_params_model fields for action '{action.name}'. "
                    f"Path has {path_param_names}, model has {model_field_names}"
                )

        endpoint = make_endpoint(action)

        route_kwargs = {
            "methods": list(action.methods),
            "response_model": action.response_model,
            "summary": action.summary,
            "description": action.description,
            "tags": list(action.tags) if action.tags else None,
            "responses": {
                400: {"model": ErrorResponse},
                502: {"model": ErrorResponse},
                504: {"model": ErrorResponse},
            },
        }
        route_kwargs = {k: v for k, v in route_kwargs.items() if v is not None}

        app.api_route(action.path, **route_kwargs)(endpoint)

    return app
