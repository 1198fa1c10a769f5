"""Pagination base class for paged JSON:API collections."""

from typing import Any, Sequence

from hateoas_jsonapi.core.links import Link
from hateoas_jsonapi.core.model import PageMetadata, PagedResources


class PaginationBase:
    """Define pagination API for paged collections."""

    def paginate(
        self, items: Sequence[Any], params: dict[str, Any]
    ) -> PagedResources[Any]:
        """Return the requested page of items with links and metadata."""
        raise NotImplementedError

    def get_links(self, *, total: int, params: dict[str, Any]) -> list[Link]:
        """Return pagination links (self, first, prev, next, last)."""
        raise NotImplementedError

    def get_metadata(self, *, total: int, params: dict[str, Any]) -> PageMetadata:
        """Return page metadata (size, number, totals)."""
        raise NotImplementedError
