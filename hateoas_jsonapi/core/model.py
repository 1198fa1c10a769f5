"""In-memory hypermedia resource model."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

from .links import REL_SELF, Link

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class ResourceSupport:
    """A representation that carries nothing but links."""

    links: tuple[Link, ...] = field(default=(), kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "links", tuple(self.links))

    @property
    def self_link(self) -> Link | None:
        return self.get_link(REL_SELF)

    def get_link(self, rel: str) -> Link | None:
        return next((link for link in self.links if link.rel == rel), None)

    def get_links(self, rel: str) -> list[Link]:
        return [link for link in self.links if link.rel == rel]

    def has_link(self, rel: str) -> bool:
        return self.get_link(rel) is not None

    def _payload(self) -> tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        # Links compare as a multiset: decoding regroups canonical links first.
        if type(other) is not type(self):
            return NotImplemented
        return self._payload() == other._payload() and Counter(self.links) == Counter(
            other.links
        )

    __hash__ = None  # type: ignore[assignment]


@dataclass(frozen=True, eq=False)
class Resource(ResourceSupport, Generic[T]):
    """A single payload value with its links."""

    content: T

    def _payload(self) -> tuple[Any, ...]:
        return (self.content,)


@dataclass(frozen=True, eq=False)
class Resources(ResourceSupport, Generic[T]):
    """An ordered collection of items with collection-level links."""

    content: tuple[T, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "content", tuple(self.content))

    def __iter__(self):
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)

    def _payload(self) -> tuple[Any, ...]:
        return (self.content,)


class PageMetadata(BaseModel):
    """Page size, number and totals of a paged collection."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    size: NonNegativeInt
    number: NonNegativeInt
    total_elements: NonNegativeInt = Field(alias="totalElements")
    total_pages: NonNegativeInt = Field(alias="totalPages")

    @model_validator(mode="before")
    @classmethod
    def _derive_total_pages(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if "totalPages" in data or "total_pages" in data:
            return data
        size = data.get("size")
        total = data.get("totalElements", data.get("total_elements"))
        if isinstance(size, int) and isinstance(total, int):
            pages = math.ceil(total / size) if size else 0
            return {**data, "totalPages": pages}
        return data

    def to_meta(self) -> dict[str, int]:
        """Return the wire form stored under ``meta``."""
        return self.model_dump(by_alias=True)


@dataclass(frozen=True, eq=False)
class PagedResources(Resources[T]):
    """A collection page; ``metadata`` travels opaquely in ``meta``."""

    metadata: Any = None

    def _payload(self) -> tuple[Any, ...]:
        return (self.content, self.metadata)
