"""Base processor interface for stateless (request/response) services."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List

from pydantic import BaseModel


@dataclass
class StatelessAction:
    """
    Definition of a stateless API route backed by a processor method.

    Attributes:
        name: Short identifier used for logging and OpenAPI docs.
        path: FastAPI route path (e.g., "/validators/{address}").
        handler: Callable invoked with the validated path parameters, if any.
        path_params_model: Optional Pydantic model validating the path parameters.
        response_model: Optional Pydantic model for response serialization.
        methods: HTTP methods to expose (defaults to GET).
        summary: Optional OpenAPI summary.
        description: Optional longer description.
        tags: Optional OpenAPI tags.
    """

    name: str
    path: str
    handler: Callable[..., Awaitable[Any] | Any]
    path_params_model: type[BaseModel] | None = None
    response_model: type[BaseModel] | None = None
    methods: tuple[str, ...] = ("GET",)
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] | None = None


class BaseProcessor(ABC):
    """Hook point for stateless services."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Processor/service name used for logging and metadata."""

    @property
    def version(self) -> str:
        """Optional semantic version string."""
        return "1.0.0"

    def get_stateless_actions(self) -> List[StatelessAction]:
        """
        Return the list of stateless actions provided by this processor.

        Override in subclasses to expose endpoints.
        """
        return []

    async def aclose(self) -> None:
        """Release resources when the application shuts down."""
