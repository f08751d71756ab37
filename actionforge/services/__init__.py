"""Service layer for external collaborators."""

from .generation_service import DockerfileGenerationService
from .exceptions import (
    ServiceError,
    GenerationServiceError,
    GenerationConfigError,
    GenerationError,
    GenerationInProgressError,
)

__all__ = [
    "DockerfileGenerationService",
    "ServiceError",
    "GenerationServiceError",
    "GenerationConfigError",
    "GenerationError",
    "GenerationInProgressError",
]
