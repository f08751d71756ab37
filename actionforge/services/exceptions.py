"""Custom exceptions for service layer."""


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    pass


class GenerationServiceError(ServiceError):
    """Exception raised for Dockerfile generation operations."""

    pass


class GenerationConfigError(GenerationServiceError):
    """Exception raised when the generation service is not configured."""

    pass


class GenerationError(GenerationServiceError):
    """Exception raised when the upstream generation call fails."""

    pass


class GenerationInProgressError(GenerationServiceError):
    """Exception raised when a generation request is already outstanding."""

    pass
