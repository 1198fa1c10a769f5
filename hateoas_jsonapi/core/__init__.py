"""Core JSON:API document, link and shape helpers."""

from .document import JSONAPIDocumentBuilder
from .errors import (
    JSONAPICodecError,
    JSONAPIErrorBuilder,
    MalformedDocument,
    ShapeMismatch,
    TypeShapeCycle,
    TypeShapeError,
    UnresolvedLinkTemplate,
)
from .links import CANONICAL_RELS, Link, OrganizedLinks, extract_id, organize_links
from .model import PageMetadata, PagedResources, Resource, Resources, ResourceSupport
from .reader import JSONAPIDocumentReader
from .shapes import Container, Scalar, TypeShape, resolve_shape, root_type

__all__ = [
    "CANONICAL_RELS",
    "Container",
    "JSONAPICodecError",
    "JSONAPIDocumentBuilder",
    "JSONAPIDocumentReader",
    "JSONAPIErrorBuilder",
    "Link",
    "MalformedDocument",
    "OrganizedLinks",
    "PageMetadata",
    "PagedResources",
    "Resource",
    "ResourceSupport",
    "Resources",
    "Scalar",
    "ShapeMismatch",
    "TypeShape",
    "TypeShapeCycle",
    "TypeShapeError",
    "UnresolvedLinkTemplate",
    "extract_id",
    "organize_links",
    "resolve_shape",
    "root_type",
]
