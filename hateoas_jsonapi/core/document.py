"""JSON:API document construction from hypermedia resources."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .errors import ShapeMismatch
from .links import CANONICAL_RELS, Link, extract_id, organize_links
from .model import PageMetadata, PagedResources, Resource, Resources, ResourceSupport
from .shapes import Container, Scalar, TypeShape, envelope_depth

RESOURCE_SUPPORT_TYPE = "ResourceSupport"


class JSONAPIDocumentBuilder:
    """Build JSON:API documents from resources, guided by their declared shape."""

    def __init__(
        self,
        *,
        canonical_rels: frozenset[str] = CANONICAL_RELS,
        type_aliases: Mapping[str, str] | None = None,
    ) -> None:
        self.canonical_rels = canonical_rels
        self.type_aliases = dict(type_aliases or {})

    def build(self, value: Any, shape: TypeShape) -> Any:
        """Return the document for ``value``; scalars pass through unchanged."""
        if isinstance(shape, Scalar):
            if isinstance(shape.kind, type) and issubclass(shape.kind, ResourceSupport):
                return self.build_links_only(value)
            return value
        if shape.is_collection:
            return self.build_collection(value, shape)
        return self.build_single(value, shape)

    def build_single(self, resource: Resource[Any], shape: Container) -> dict[str, Any]:
        """Return a JSON:API document for a single resource."""
        if not isinstance(resource, Resource):
            raise ShapeMismatch(
                expected_depth=envelope_depth(shape),
                actual_depth=0,
                detail=f"Expected a Resource, got {type(resource).__name__}",
            )
        data = self.resource_object(
            self.type_name(resource.content),
            self._attributes(resource.content, shape.element),
            resource.links,
        )
        return {"data": data}

    def build_collection(self, resources: Resources[Any], shape: Container) -> dict[str, Any]:
        """Return a JSON:API document for a collection, paged or not."""
        if not isinstance(resources, Resources):
            raise ShapeMismatch(
                expected_depth=envelope_depth(shape),
                actual_depth=0,
                detail=f"Expected a Resources collection, got {type(resources).__name__}",
            )
        element = shape.element
        item_shape = element if isinstance(element, Container) and element.is_resource else None
        data = []
        for index, item in enumerate(resources.content):
            if isinstance(item, Resource):
                inner = item_shape.element if item_shape is not None else Scalar(Any)
                data.append(
                    self.resource_object(
                        self.type_name(item.content),
                        self._attributes(item.content, inner),
                        item.links,
                    )
                )
            elif item_shape is not None:
                raise ShapeMismatch(
                    expected_depth=envelope_depth(shape),
                    actual_depth=envelope_depth(shape) - 1,
                    path=f"data[{index}]",
                    detail=f"Expected a Resource item, got {type(item).__name__}",
                )
            else:
                data.append(
                    {"type": self.type_name(item), "attributes": self._attributes(item, element)}
                )

        document: dict[str, Any] = {"data": data}
        self._add_links(document, resources.links)
        if isinstance(resources, PagedResources) and resources.metadata is not None:
            document["meta"] = self.meta(resources.metadata)
        return document

    def build_links_only(self, support: ResourceSupport) -> dict[str, Any]:
        """Return a JSON:API document for a links-only representation."""
        data: dict[str, Any] = {"type": RESOURCE_SUPPORT_TYPE}
        resource_id = extract_id(support.links)
        if resource_id is not None:
            data["id"] = resource_id
        self._add_links(data, support.links)
        return {"data": data}

    def resource_object(
        self, type_name: str, attributes: Any, links: Iterable[Link]
    ) -> dict[str, Any]:
        """Return a resource object; ``id`` only when a ``self`` link exists."""
        links = tuple(links)
        resource: dict[str, Any] = {"type": type_name}
        resource_id = extract_id(links)
        if resource_id is not None:
            resource["id"] = resource_id
        resource["attributes"] = attributes
        self._add_links(resource, links)
        return resource

    def meta(self, metadata: Any) -> Any:
        if isinstance(metadata, PageMetadata):
            return metadata.to_meta()
        return metadata

    def type_name(self, value: Any) -> str:
        """Return the resource ``type`` for a payload value."""
        cls = type(value)
        meta = getattr(cls, "Meta", None)
        declared = getattr(meta, "type_", "")
        if declared:
            return declared
        return self.type_aliases.get(cls.__name__, cls.__name__)

    def _attributes(self, content: Any, element: TypeShape) -> Any:
        if isinstance(element, Container):
            return self.build(content, element)
        return content

    def _add_links(self, target: dict[str, Any], links: Iterable[Link]) -> None:
        # The first link of each relation is rendered, matching extract_id.
        organized = organize_links(links, self.canonical_rels)
        if organized.canonical:
            rendered: dict[str, Any] = {}
            for link in organized.canonical:
                rendered.setdefault(link.rel, link.expand().href)
            target["links"] = rendered
        if organized.relationships:
            related: dict[str, Any] = {}
            for link in organized.relationships:
                related.setdefault(link.rel, {"links": {"self": link.expand().href}})
            target["relationships"] = related
