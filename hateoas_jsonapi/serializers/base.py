"""Shape-bound serializers selected per declared type."""

from __future__ import annotations

from typing import Any

from hateoas_jsonapi.core.document import JSONAPIDocumentBuilder
from hateoas_jsonapi.core.errors import ShapeMismatch
from hateoas_jsonapi.core.model import ResourceSupport
from hateoas_jsonapi.core.reader import JSONAPIDocumentReader
from hateoas_jsonapi.core.shapes import Container, Scalar, TypeShape


class JSONAPISerializer:
    """Serialize values of one declared shape to and from JSON:API documents.

    Instances are immutable once bound; ``JSONAPICodec`` creates one per
    declared type and may share it between calls.
    """

    __slots__ = ("shape", "builder", "reader")

    def __init__(
        self,
        shape: TypeShape,
        *,
        builder: JSONAPIDocumentBuilder,
        reader: JSONAPIDocumentReader,
    ) -> None:
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "builder", builder)
        object.__setattr__(self, "reader", reader)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.shape!r})"

    def to_document(self, value: Any) -> Any:
        """Return the JSON:API document for ``value``."""
        return self.builder.build(value, self.shape)

    def from_document(self, document: Any) -> Any:
        """Return the value encoded by ``document``."""
        return self.reader.read(document, self.shape)

    def wrap(self, payload: Any, links: Any, meta: Any = None) -> Any:
        """Build the model value for a bare payload and its links."""
        raise NotImplementedError

    def unwrap(self, value: Any) -> tuple[Any, list[Any]]:
        """Split a model value into its payload and links."""
        return value.content, list(value.links)


class ScalarSerializer(JSONAPISerializer):
    """Plain values pass through without an envelope."""

    __slots__ = ()

    def wrap(self, payload: Any, links: Any, meta: Any = None) -> Any:
        if links:
            raise ShapeMismatch(
                expected_depth=0,
                actual_depth=1,
                detail="A plain value cannot carry links; declare a Resource type",
            )
        return payload

    def unwrap(self, value: Any) -> tuple[Any, list[Any]]:
        return value, []


class ResourceSupportSerializer(JSONAPISerializer):
    """Links-only representations."""

    __slots__ = ()

    def wrap(self, payload: Any, links: Any, meta: Any = None) -> Any:
        return self.shape.kind(links=links or ())

    def unwrap(self, value: Any) -> tuple[Any, list[Any]]:
        return None, list(value.links)


class ResourceSerializer(JSONAPISerializer):
    """Single-resource envelopes."""

    __slots__ = ()

    def wrap(self, payload: Any, links: Any, meta: Any = None) -> Any:
        return self.shape.container(payload, links=links or ())


class ResourcesSerializer(JSONAPISerializer):
    """Homogeneous collection envelopes."""

    __slots__ = ()

    def wrap(self, payload: Any, links: Any, meta: Any = None) -> Any:
        return self.shape.container(payload, links=links or ())

    def unwrap(self, value: Any) -> tuple[Any, list[Any]]:
        return list(value.content), list(value.links)


class PagedResourcesSerializer(ResourcesSerializer):
    """Collection envelopes carrying page metadata in ``meta``."""

    __slots__ = ()

    def wrap(self, payload: Any, links: Any, meta: Any = None) -> Any:
        return self.shape.container(payload, meta, links=links or ())


def serializer_class_for(shape: TypeShape) -> type[JSONAPISerializer]:
    """Select the serializer that handles ``shape``."""
    if isinstance(shape, Scalar):
        if isinstance(shape.kind, type) and issubclass(shape.kind, ResourceSupport):
            return ResourceSupportSerializer
        return ScalarSerializer
    if not isinstance(shape, Container):
        raise TypeError(f"Not a type shape: {shape!r}")
    if shape.is_paged:
        return PagedResourcesSerializer
    if shape.is_collection:
        return ResourcesSerializer
    return ResourceSerializer
