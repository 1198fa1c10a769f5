from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

from hateoas_jsonapi import JSONAPICodec, PageMetadata, PagedResources
from hateoas_jsonapi.pagination import StandardPagination


def page_number(href: str) -> int:
    return int(parse_qs(urlsplit(href).query)["page[number]"][0])


def test_paginate_slices_items_and_builds_metadata():
    paged = StandardPagination().paginate(
        list(range(25)), {"page": {"number": 1, "size": 10}, "base_url": "http://api/items"}
    )
    assert paged.content == tuple(range(10, 20))
    assert paged.metadata == PageMetadata(size=10, number=1, total_elements=25, total_pages=3)
    assert [link.rel for link in paged.links] == ["self", "first", "prev", "next", "last"]
    assert page_number(paged.get_link("next").href) == 2
    assert page_number(paged.get_link("prev").href) == 0
    assert page_number(paged.get_link("last").href) == 2


def test_first_page_has_no_prev_and_last_page_has_no_next():
    pagination = StandardPagination()
    first = pagination.paginate(list(range(5)), {"page": {"size": 2}, "base_url": "http://api/items"})
    assert not first.has_link("prev")
    assert first.has_link("next")
    last = pagination.paginate(
        list(range(5)), {"page": {"number": 2, "size": 2}, "base_url": "http://api/items"}
    )
    assert last.content == (4,)
    assert not last.has_link("next")


def test_links_keep_other_query_parameters():
    paged = StandardPagination().paginate(
        [1, 2, 3], {"page": {"size": 1}, "base_url": "http://api/items?sort=-name"}
    )
    query = parse_qs(urlsplit(paged.get_link("next").href).query)
    assert query["sort"] == ["-name"]
    assert query["page[size]"] == ["1"]


def test_no_links_without_base_url():
    paged = StandardPagination().paginate([1, 2], {})
    assert paged.links == ()
    assert paged.metadata.total_pages == 1


def test_paged_collection_renders_pagination_links_and_meta():
    paged = StandardPagination().paginate(
        ["a", "b", "c"], {"page": {"number": 0, "size": 2}, "base_url": "http://api/items"}
    )
    document = JSONAPICodec().dump(paged, PagedResources[str])
    assert set(document["links"]) == {"self", "first", "next", "last"}
    assert document["meta"] == {"size": 2, "number": 0, "totalElements": 3, "totalPages": 2}
    assert [item["attributes"] for item in document["data"]] == ["a", "b"]
