"""JSON:API document parsing back into hypermedia resources."""

from __future__ import annotations

import logging
from typing import Any, Mapping, NoReturn

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from hateoas_jsonapi.schemas.resource import (
    JSONAPICollectionDocument,
    JSONAPIDocument,
    JSONAPIRelationship,
)

from .errors import MalformedDocument, ShapeMismatch, join_path
from .links import Link
from .model import PageMetadata, Resource, Resources, ResourceSupport
from .shapes import Container, Scalar, TypeShape, envelope_depth

logger = logging.getLogger(__name__)

PAGE_META_FIELDS = frozenset({"size", "number", "totalElements", "totalPages"})


def document_depth(node: Any) -> int:
    """Count nested ``data`` envelopes, following the first item of collections."""
    if not isinstance(node, Mapping) or "data" not in node:
        return 0
    data = node["data"]
    if isinstance(data, list):
        first = data[0] if data else None
        inner = first.get("attributes") if isinstance(first, Mapping) else None
        return 1 + document_depth(inner)
    if isinstance(data, Mapping):
        return 1 + document_depth(data.get("attributes"))
    return 1


def links_of(
    links: Mapping[str, str] | None,
    relationships: Mapping[str, JSONAPIRelationship] | None,
) -> list[Link]:
    """Return ``links`` entries followed by ``relationships`` entries."""
    result = [Link(href=href, rel=rel) for rel, href in (links or {}).items()]
    result.extend(
        Link(href=relationship.links.self_, rel=rel)
        for rel, relationship in (relationships or {}).items()
    )
    return result


class JSONAPIDocumentReader:
    """Reconstruct resources from JSON:API documents given the expected shape."""

    def __init__(self) -> None:
        self._adapters: dict[Any, TypeAdapter[Any] | None] = {}

    def read(self, document: Any, shape: TypeShape, *, path: str = "") -> Any:
        """Return the value ``document`` encodes under ``shape``."""
        if isinstance(shape, Scalar):
            if isinstance(shape.kind, type) and issubclass(shape.kind, ResourceSupport):
                return self.read_links_only(document, path=path)
            # Attributes under a plain element type are opaque, even with a "data" key.
            if not path and isinstance(document, Mapping) and "data" in document:
                self._mismatch(document, 0, path, "Expected a plain value, got a document")
            return self.read_scalar(document, shape.kind, path=path)
        if shape.is_collection:
            return self.read_collection(document, shape, path=path)
        return self.read_single(document, shape, path=path)

    def read_single(self, document: Any, shape: Container, *, path: str = "") -> Resource[Any]:
        """Return a ``Resource`` from a single resource document."""
        expected = envelope_depth(shape)
        if not isinstance(self._data(document, expected, path), Mapping):
            self._mismatch(document, expected, path, "Expected a single resource document")
        parsed = self._validate(JSONAPIDocument, document, path)
        resource = parsed.data
        content = self.read(
            resource.attributes, shape.element, path=join_path(path, "data.attributes")
        )
        return shape.container(content, links=links_of(resource.links, resource.relationships))

    def read_collection(self, document: Any, shape: Container, *, path: str = "") -> Resources[Any]:
        """Return a ``Resources`` (or ``PagedResources``) from a collection document."""
        expected = envelope_depth(shape)
        if not isinstance(self._data(document, expected, path), list):
            self._mismatch(document, expected, path, "Expected a collection document")
        parsed = self._validate(JSONAPICollectionDocument, document, path)

        element = shape.element
        wrapped = isinstance(element, Container) and element.is_resource
        items = []
        for index, item in enumerate(parsed.data):
            item_path = join_path(path, f"data[{index}].attributes")
            if wrapped:
                content = self.read(item.attributes, element.element, path=item_path)
                items.append(
                    element.container(content, links=links_of(item.links, item.relationships))
                )
            else:
                # Per-item links are not kept for non-resource elements.
                items.append(self.read(item.attributes, element, path=item_path))

        links = links_of(parsed.links, parsed.relationships)
        if shape.is_paged:
            return shape.container(items, self.page_metadata(parsed.meta), links=links)
        return shape.container(items, links=links)

    def read_links_only(self, document: Any, *, path: str = "") -> ResourceSupport:
        """Return a links-only ``ResourceSupport``."""
        if not isinstance(self._data(document, 1, path), Mapping):
            self._mismatch(document, 1, path, "Expected a single resource document")
        resource = self._validate(JSONAPIDocument, document, path).data
        return ResourceSupport(links=links_of(resource.links, resource.relationships))

    def read_scalar(self, value: Any, kind: Any, *, path: str = "") -> Any:
        """Validate an attributes value into the innermost declared type."""
        adapter = self._adapter(kind)
        if adapter is None:
            return value
        try:
            return adapter.validate_python(value)
        except ValidationError as exc:
            raise MalformedDocument.from_validation_error(exc, prefix=path) from exc

    def page_metadata(self, meta: Any) -> Any:
        """Return ``PageMetadata`` when ``meta`` holds exactly its fields, else ``meta`` as supplied."""
        if not isinstance(meta, Mapping) or set(meta) != PAGE_META_FIELDS:
            if meta is not None:
                logger.debug("Keeping non page-shaped meta as supplied: %r", meta)
            return meta
        try:
            return PageMetadata.model_validate(meta)
        except ValidationError:
            logger.debug("Keeping non page-shaped meta as supplied: %r", meta)
            return meta

    def _adapter(self, kind: Any) -> TypeAdapter[Any] | None:
        if kind is Any:
            return None
        try:
            return self._adapters[kind]
        except KeyError:
            pass
        except TypeError:
            return self._build_adapter(kind)
        return self._adapters.setdefault(kind, self._build_adapter(kind))

    def _build_adapter(self, kind: Any) -> TypeAdapter[Any] | None:
        try:
            return TypeAdapter(kind)
        except PydanticSchemaGenerationError:
            logger.debug("No schema for %r; attributes are passed through as-is", kind)
            return None

    def _data(self, document: Any, expected_depth: int, path: str) -> Any:
        if not isinstance(document, Mapping):
            self._mismatch(document, expected_depth, path, "Expected a JSON:API document object")
        if "data" not in document:
            raise MalformedDocument(join_path(path, "data"), "Field required")
        return document["data"]

    def _validate(self, model: Any, document: Any, path: str) -> Any:
        try:
            return model.model_validate(document)
        except ValidationError as exc:
            raise MalformedDocument.from_validation_error(exc, prefix=path) from exc

    def _mismatch(self, document: Any, expected_depth: int, path: str, detail: str) -> NoReturn:
        raise ShapeMismatch(
            expected_depth=expected_depth,
            actual_depth=document_depth(document),
            path=path,
            detail=detail,
        )
