"""Error types raised by the catalog sync job."""
from typing import Iterable, List


class CatalogSyncError(Exception):
    """Base class for all catalog sync errors."""


class ConfigurationError(CatalogSyncError):
    """Required configuration is missing or invalid."""

    def __init__(self, message: str, missing: Iterable[str] = ()):
        super().__init__(message)
        self.missing: List[str] = list(missing)


class ProductStoreError(CatalogSyncError):
    """A read or write against the product collection failed."""


class VectorStoreError(CatalogSyncError):
    """A Weaviate request failed or returned an unusable payload."""


class AmbiguousMatchError(VectorStoreError):
    """More than one Weaviate object matched a product name."""

    def __init__(self, name: str, ids: List[str]):
        super().__init__(f'{len(ids)} Weaviate objects match name="{name}"')
        self.name = name
        self.ids = ids
