"""Domain enums and errors for JacketScore."""

from .errors import ConfigurationError, ServiceError, UpstreamServiceError
from .outing import Gender, VenueType

__all__ = [
    "ConfigurationError",
    "Gender",
    "ServiceError",
    "UpstreamServiceError",
    "VenueType",
]
