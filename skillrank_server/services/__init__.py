"""Backing logic: catalog and scratch stores, resurrection client, related cache."""

from .catalog_store import InMemoryCatalogStore, JsonCatalogStore
from .related_cache import RelatedItemsCache
from .resurrection_client import HttpResurrectionClient
from .scratch_store import InMemoryScratchStore

__all__ = [
    "HttpResurrectionClient",
    "InMemoryCatalogStore",
    "InMemoryScratchStore",
    "JsonCatalogStore",
    "RelatedItemsCache",
]
