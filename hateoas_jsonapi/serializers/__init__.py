"""Shape-bound serializers for JSON:API documents."""

from .base import (
    JSONAPISerializer,
    PagedResourcesSerializer,
    ResourceSerializer,
    ResourcesSerializer,
    ResourceSupportSerializer,
    ScalarSerializer,
    serializer_class_for,
)

__all__ = [
    "JSONAPISerializer",
    "PagedResourcesSerializer",
    "ResourceSerializer",
    "ResourcesSerializer",
    "ResourceSupportSerializer",
    "ScalarSerializer",
    "serializer_class_for",
]
