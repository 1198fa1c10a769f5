from __future__ import annotations

import json

import pytest

from hateoas_jsonapi import JSONAPICodec, Link, PageMetadata, PagedResources, Resource, Resources, ResourceSupport
from hateoas_jsonapi.core.document import JSONAPIDocumentBuilder
from hateoas_jsonapi.core.errors import ShapeMismatch, UnresolvedLinkTemplate
from hateoas_jsonapi.core.shapes import resolve_shape

from .conftest import SimplePojo


class Order:
    class Meta:
        type_ = "orders"

    def __init__(self, total: int) -> None:
        self.total = total


def test_renders_links_only_representation(codec: JSONAPICodec):
    support = ResourceSupport(links=[Link(href="localhost")])
    assert codec.dump(support) == {
        "data": {"type": "ResourceSupport", "id": "localhost", "links": {"self": "localhost"}}
    }


def test_renders_links_and_relationships_of_links_only_representation(codec: JSONAPICodec):
    support = ResourceSupport(links=[Link(href="localhost"), Link(href="localhost2", rel="orders")])
    assert codec.dump(support) == {
        "data": {
            "type": "ResourceSupport",
            "id": "localhost",
            "links": {"self": "localhost"},
            "relationships": {"orders": {"links": {"self": "localhost2"}}},
        }
    }


def test_renders_single_resource(codec: JSONAPICodec):
    document = codec.encode("first", [Link(href="localhost")], Resource[str])
    assert document == {
        "data": {
            "type": "String",
            "id": "localhost",
            "attributes": "first",
            "links": {"self": "localhost"},
        }
    }


def test_resource_without_self_link_has_no_id(codec: JSONAPICodec):
    document = codec.dump(Resource("first", links=[Link(href="orders", rel="orders")]), Resource[str])
    assert document == {
        "data": {
            "type": "String",
            "attributes": "first",
            "relationships": {"orders": {"links": {"self": "orders"}}},
        }
    }


def test_attributes_are_passed_through_without_rekeying(codec: JSONAPICodec):
    payload = {"type": "kept", "id": 7, "name": "x"}
    document = codec.dump(Resource(payload, links=[Link(href="/things/7")]), Resource[dict])
    assert document["data"]["attributes"] is payload
    assert document["data"]["type"] == "Map"
    assert document["data"]["id"] == "7"


def test_renders_simple_resources_as_bare_items(codec: JSONAPICodec):
    resources = Resources(["first", "second"], links=[Link(href="localhost")])
    assert codec.dump(resources, Resources[str]) == {
        "data": [
            {"type": "String", "attributes": "first"},
            {"type": "String", "attributes": "second"},
        ],
        "links": {"self": "localhost"},
    }


def test_renders_collection_of_resources(codec: JSONAPICodec):
    resources = Resources(
        [
            Resource("first", links=[Link(href="localhost"), Link(href="orders", rel="orders")]),
            Resource("second", links=[Link(href="remotehost"), Link(href="order", rel="orders")]),
        ],
        links=[Link(href="localhost"), Link(href="/page/2", rel="next")],
    )
    assert codec.dump(resources, Resources[Resource[str]]) == {
        "data": [
            {
                "type": "String",
                "id": "localhost",
                "attributes": "first",
                "links": {"self": "localhost"},
                "relationships": {"orders": {"links": {"self": "orders"}}},
            },
            {
                "type": "String",
                "id": "remotehost",
                "attributes": "second",
                "links": {"self": "remotehost"},
                "relationships": {"orders": {"links": {"self": "order"}}},
            },
        ],
        "links": {"self": "localhost", "next": "/page/2"},
    }


def test_renders_top_level_relationships_of_collection(codec: JSONAPICodec):
    resources = Resources([], links=[Link(href="/customers/1", rel="customer")])
    assert codec.dump(resources, Resources[str]) == {
        "data": [],
        "relationships": {"customer": {"links": {"self": "/customers/1"}}},
    }


def test_renders_paged_resources_with_meta(codec: JSONAPICodec):
    paged = PagedResources(
        [
            Resource(SimplePojo("test1", 1), links=[Link(href="localhost")]),
            Resource(SimplePojo("test2", 2), links=[Link(href="localhost")]),
        ],
        PageMetadata(size=2, number=0, total_elements=4),
        links=[Link(href="foo", rel="next"), Link(href="bar", rel="prev")],
    )
    rendered = json.loads(codec.dumps(paged, PagedResources[Resource[SimplePojo]]))
    assert rendered == {
        "data": [
            {
                "type": "SimplePojo",
                "id": "localhost",
                "attributes": {"text": "test1", "number": 1},
                "links": {"self": "localhost"},
            },
            {
                "type": "SimplePojo",
                "id": "localhost",
                "attributes": {"text": "test2", "number": 2},
                "links": {"self": "localhost"},
            },
        ],
        "links": {"next": "foo", "prev": "bar"},
        "meta": {"size": 2, "number": 0, "totalElements": 4, "totalPages": 2},
    }


def test_opaque_meta_is_passed_through(codec: JSONAPICodec):
    paged = PagedResources([], {"cursor": "abc"})
    assert codec.dump(paged, PagedResources[str])["meta"] == {"cursor": "abc"}


def test_nested_resource_renders_attributes_as_document(codec: JSONAPICodec):
    inner = Resource("first", links=[Link(href="/inner/1")])
    outer = Resource(inner, links=[Link(href="/outer/2")])
    assert codec.dump(outer, Resource[Resource[str]]) == {
        "data": {
            "type": "Resource",
            "id": "2",
            "attributes": {
                "data": {
                    "type": "String",
                    "id": "1",
                    "attributes": "first",
                    "links": {"self": "/inner/1"},
                }
            },
            "links": {"self": "/outer/2"},
        }
    }


def test_type_name_prefers_meta_type():
    builder = JSONAPIDocumentBuilder(type_aliases={"str": "String"})
    assert builder.type_name(Order(3)) == "orders"
    assert builder.type_name("x") == "String"
    assert builder.type_name(SimplePojo("a", 1)) == "SimplePojo"


def test_collection_declared_with_resource_items_rejects_bare_items():
    builder = JSONAPIDocumentBuilder()
    with pytest.raises(ShapeMismatch) as excinfo:
        builder.build(Resources(["bare"]), resolve_shape(Resources[Resource[str]]))
    assert excinfo.value.path == "data[0]"


def test_resource_shape_rejects_other_values(codec: JSONAPICodec):
    with pytest.raises(ShapeMismatch):
        codec.dump(Resources(["a"]), Resource[str])


def test_templated_links_must_be_expanded_before_rendering(codec: JSONAPICodec):
    with pytest.raises(UnresolvedLinkTemplate):
        codec.encode("first", [Link(href="/orders/{id}", rel="orders")], Resource[str])


def test_builder_output_is_deterministic(codec: JSONAPICodec):
    resources = Resources([Resource(str(n), links=[Link(href=f"/n/{n}")]) for n in range(5)])
    first = codec.dump(resources, Resources[Resource[str]])
    assert [item["id"] for item in first["data"]] == ["0", "1", "2", "3", "4"]
    assert first == codec.dump(resources, Resources[Resource[str]])


def test_first_link_of_a_relation_wins(codec: JSONAPICodec):
    document = codec.encode(
        "a",
        [
            Link(href="/x/1"),
            Link(href="/x/2"),
            Link(href="/orders/1", rel="orders"),
            Link(href="/orders/2", rel="orders"),
        ],
        Resource[str],
    )
    data = document["data"]
    assert data["id"] == "1"
    assert data["links"] == {"self": "/x/1"}
    assert data["relationships"] == {"orders": {"links": {"self": "/orders/1"}}}
