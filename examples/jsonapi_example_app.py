"""Example FastAPI app serving hypermedia resources as JSON:API documents.

Run with:
    uvicorn examples.jsonapi_example_app:app --reload
"""
from __future__ import annotations

import json
import logging

from fastapi import FastAPI, Query, Request
from pydantic import BaseModel

from hateoas_jsonapi import CodecSettings, JSONAPICodec, Link, PagedResources, Resource
from hateoas_jsonapi.middleware import ErrorHandlerMiddleware, register_exception_handlers
from hateoas_jsonapi.pagination import StandardPagination
from hateoas_jsonapi.responses import JSONAPIResponse

logging.basicConfig(level=logging.DEBUG)


class Order(BaseModel):
    class Meta:
        type_ = "orders"

    description: str
    total: int


ORDERS: dict[int, Order] = {
    1: Order(description="Coffee beans", total=18),
    2: Order(description="Grinder", total=120),
    3: Order(description="Filters", total=6),
}

codec = JSONAPICodec(CodecSettings())
app = FastAPI()
app.add_middleware(ErrorHandlerMiddleware)
register_exception_handlers(app)


def order_resource(request: Request, order_id: int) -> Resource[Order]:
    return Resource(
        ORDERS[order_id],
        links=[
            Link(href=str(request.url_for("get_order", order_id=order_id))),
            Link(href=str(request.url_for("list_orders")), rel="orders"),
        ],
    )


@app.get("/orders", name="list_orders")
async def list_orders(
    request: Request,
    number: int = Query(0, alias="page[number]"),
    size: int = Query(2, alias="page[size]"),
) -> JSONAPIResponse:
    items = [order_resource(request, order_id) for order_id in sorted(ORDERS)]
    paged = StandardPagination().paginate(
        items,
        {"page": {"number": number, "size": size}, "base_url": str(request.url)},
    )
    return JSONAPIResponse(codec.dump(paged, PagedResources[Resource[Order]]))


@app.get("/orders/{order_id}", name="get_order")
async def get_order(request: Request, order_id: int) -> JSONAPIResponse:
    return JSONAPIResponse(codec.dump(order_resource(request, order_id), Resource[Order]))


@app.post("/orders", name="create_order")
async def create_order(request: Request) -> JSONAPIResponse:
    order, _ = codec.decode(json.loads(await request.body()), Resource[Order])
    order_id = max(ORDERS) + 1
    ORDERS[order_id] = order
    return JSONAPIResponse(
        codec.dump(order_resource(request, order_id), Resource[Order]), status_code=201
    )
