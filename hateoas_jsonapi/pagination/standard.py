"""Page-number pagination producing ``PagedResources``."""

from __future__ import annotations

from typing import Any, Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from hateoas_jsonapi.core.links import (
    REL_FIRST,
    REL_LAST,
    REL_NEXT,
    REL_PREVIOUS,
    REL_SELF,
    Link,
)
from hateoas_jsonapi.core.model import PageMetadata, PagedResources

from .base import PaginationBase


class StandardPagination(PaginationBase):
    """``page[number]``/``page[size]`` pagination with zero-based page numbers."""

    default_size = 10

    def paginate(
        self, items: Sequence[Any], params: dict[str, Any]
    ) -> PagedResources[Any]:
        """Slice ``items`` to the requested page."""
        number, size = self._page(params)
        total = len(items)
        start = number * size
        return PagedResources(
            list(items[start : start + size]),
            self.get_metadata(total=total, params=params),
            links=self.get_links(total=total, params=params),
        )

    def get_links(self, *, total: int, params: dict[str, Any]) -> list[Link]:
        """Build pagination links; ``params["base_url"]`` is required for any."""
        base_url = params.get("base_url")
        if not base_url:
            return []
        number, size = self._page(params)

        def build_url(page_number: int) -> str:
            split = urlsplit(base_url)
            query = [
                (key, value)
                for key, value in parse_qsl(split.query)
                if key not in ("page[number]", "page[size]")
            ]
            query += [("page[number]", page_number), ("page[size]", size)]
            return urlunsplit(
                (split.scheme, split.netloc, split.path, urlencode(query), split.fragment)
            )

        last = max(self._total_pages(total, size) - 1, 0)
        links = [
            Link(href=build_url(number), rel=REL_SELF),
            Link(href=build_url(0), rel=REL_FIRST),
        ]
        if number > 0:
            links.append(Link(href=build_url(min(number - 1, last)), rel=REL_PREVIOUS))
        if number < last:
            links.append(Link(href=build_url(number + 1), rel=REL_NEXT))
        links.append(Link(href=build_url(last), rel=REL_LAST))
        return links

    def get_metadata(self, *, total: int, params: dict[str, Any]) -> PageMetadata:
        """Build page metadata for the requested page."""
        number, size = self._page(params)
        return PageMetadata(
            size=size,
            number=number,
            total_elements=total,
            total_pages=self._total_pages(total, size),
        )

    def _page(self, params: dict[str, Any]) -> tuple[int, int]:
        page = params.get("page", {})
        number = int(page.get("number", 0))
        size = int(page.get("size", self.default_size))
        if number < 0 or size < 1:
            return 0, self.default_size
        return number, size

    @staticmethod
    def _total_pages(total: int, size: int) -> int:
        return -(-total // size)
