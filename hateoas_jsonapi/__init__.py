"""JSON:API codec for hypermedia resources."""

from .codec import JSONAPICodec
from .config import CodecSettings
from .core.document import JSONAPIDocumentBuilder
from .core.errors import (
    JSONAPICodecError,
    JSONAPIErrorBuilder,
    MalformedDocument,
    ShapeMismatch,
    TypeShapeCycle,
    TypeShapeError,
    UnresolvedLinkTemplate,
)
from .core.links import Link
from .core.model import PageMetadata, PagedResources, Resource, Resources, ResourceSupport
from .core.reader import JSONAPIDocumentReader
from .serializers.base import JSONAPISerializer

__all__ = [
    "CodecSettings",
    "JSONAPICodec",
    "JSONAPICodecError",
    "JSONAPIDocumentBuilder",
    "JSONAPIDocumentReader",
    "JSONAPIErrorBuilder",
    "JSONAPISerializer",
    "Link",
    "MalformedDocument",
    "PageMetadata",
    "PagedResources",
    "Resource",
    "ResourceSupport",
    "Resources",
    "ShapeMismatch",
    "TypeShapeCycle",
    "TypeShapeError",
    "UnresolvedLinkTemplate",
]
