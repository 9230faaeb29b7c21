"""Pydantic request/response models for the API."""

from .common import ItemCard, ItemListResponse, RelatedItemsResponse

__all__ = [
    "ItemCard",
    "ItemListResponse",
    "RelatedItemsResponse",
]
