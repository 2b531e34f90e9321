"""Service-level errors raised by ingestors and the OpenAI wrapper."""

from __future__ import annotations


class ServiceError(RuntimeError):
    """Base error carrying an HTTP-style status code for the API layer."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UpstreamServiceError(ServiceError):
    """A third-party provider failed or returned an unusable payload."""

    status_code = 502


class ConfigurationError(ServiceError):
    """A required credential or setting is missing."""


__all__ = ["ConfigurationError", "ServiceError", "UpstreamServiceError"]
