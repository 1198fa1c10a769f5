"""Call-site entry points for encoding and decoding JSON:API documents."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Mapping

from pydantic_core import to_jsonable_python

from hateoas_jsonapi.config import CodecSettings
from hateoas_jsonapi.core.document import JSONAPIDocumentBuilder
from hateoas_jsonapi.core.errors import MalformedDocument
from hateoas_jsonapi.core.links import Link
from hateoas_jsonapi.core.reader import JSONAPIDocumentReader
from hateoas_jsonapi.core.shapes import resolve_shape
from hateoas_jsonapi.serializers.base import JSONAPISerializer, serializer_class_for

logger = logging.getLogger(__name__)


class JSONAPICodec:
    """Encode and decode hypermedia resources as JSON:API documents.

    The declared type passed at each call decides the envelope: a plain type
    passes through, ``Resource[T]`` renders a single resource,
    ``Resources[T]`` a collection and ``PagedResources[T]`` a collection with
    ``meta``. Serializers are bound once per declared type and reused.
    """

    def __init__(self, settings: CodecSettings | None = None) -> None:
        self.settings = settings or CodecSettings()
        self.builder = JSONAPIDocumentBuilder(
            canonical_rels=self.settings.canonical_rels,
            type_aliases=self.settings.type_aliases,
        )
        self.reader = JSONAPIDocumentReader()
        self._serializers: dict[Any, JSONAPISerializer] = {}

    def serializer_for(
        self, declared: Any, *, namespace: Mapping[str, Any] | None = None
    ) -> JSONAPISerializer:
        """Return the serializer bound to the shape of ``declared``."""
        cacheable = self.settings.memoize and namespace is None
        if cacheable:
            try:
                return self._serializers[declared]
            except KeyError:
                pass
            except TypeError:
                cacheable = False

        shape = resolve_shape(
            declared, namespace=namespace, max_depth=self.settings.max_shape_depth
        )
        serializer = serializer_class_for(shape)(
            shape, builder=self.builder, reader=self.reader
        )
        logger.debug("Bound %r for declared type %r", serializer, declared)
        if cacheable:
            return self._serializers.setdefault(declared, serializer)
        return serializer

    def encode(
        self,
        payload: Any,
        links: Iterable[Link] = (),
        declared: Any = Any,
        *,
        meta: Any = None,
    ) -> Any:
        """Return the document for ``payload`` with ``links`` under ``declared``."""
        serializer = self.serializer_for(declared)
        return serializer.to_document(serializer.wrap(payload, tuple(links), meta))

    def decode(self, document: Any, declared: Any = Any) -> tuple[Any, list[Link]]:
        """Return ``(payload, links)`` decoded from ``document`` under ``declared``."""
        serializer = self.serializer_for(declared)
        return serializer.unwrap(serializer.from_document(document))

    def dump(self, value: Any, declared: Any = None) -> Any:
        """Return the document for a model value.

        ``declared`` defaults to the runtime class of ``value``, which treats
        every nested element as ``Any``.
        """
        return self.serializer_for(type(value) if declared is None else declared).to_document(
            value
        )

    def load(self, document: Any, declared: Any) -> Any:
        """Return the model value encoded by ``document``."""
        return self.serializer_for(declared).from_document(document)

    def dumps(self, value: Any, declared: Any = None, **kwargs: Any) -> str:
        """Render a model value as JSON text."""
        return json.dumps(
            self.dump(value, declared), default=to_jsonable_python, **kwargs
        )

    def loads(self, text: str | bytes, declared: Any) -> Any:
        """Parse JSON text into a model value."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedDocument("", f"Invalid JSON: {exc.msg}") from exc
        return self.load(document, declared)
