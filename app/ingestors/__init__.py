"""External data ingestors for JacketScore."""

from .places import PlacesIngestor
from .weather import ForecastIngestor

__all__ = ["ForecastIngestor", "PlacesIngestor"]
