from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from hateoas_jsonapi import JSONAPICodec, Link, MalformedDocument, Resource
from hateoas_jsonapi.core.errors import JSONAPIErrorBuilder
from hateoas_jsonapi.middleware import ErrorHandlerMiddleware, register_exception_handlers
from hateoas_jsonapi.responses import JSONAPI_MEDIA_TYPE, JSONAPIResponse

from .conftest import SimplePojo

codec = JSONAPICodec()


def make_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/pojos/1")
    async def get_pojo() -> JSONAPIResponse:
        resource = Resource(SimplePojo("text", 1), links=[Link(href="/pojos/1")])
        return JSONAPIResponse(codec.dump(resource, Resource[SimplePojo]))

    @app.get("/broken")
    async def broken() -> JSONAPIResponse:
        codec.decode({"data": []}, Resource[SimplePojo])
        return JSONAPIResponse({})

    @app.get("/boom")
    async def boom() -> JSONAPIResponse:
        raise RuntimeError("boom")

    return app


def test_response_uses_jsonapi_media_type_and_renders_payloads():
    response = TestClient(make_app()).get("/pojos/1")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith(JSONAPI_MEDIA_TYPE)
    assert response.json() == {
        "data": {
            "type": "SimplePojo",
            "id": "1",
            "attributes": {"text": "text", "number": 1},
            "links": {"self": "/pojos/1"},
        }
    }


def test_codec_errors_become_error_documents():
    response = TestClient(make_app()).get("/broken")
    assert response.status_code == 400
    error = response.json()["errors"][0]
    assert error["status"] == "400"
    assert error["code"] == "shape_mismatch"
    assert error["meta"] == {"expectedDepth": 1, "actualDepth": 1}


def test_middleware_renders_unhandled_errors():
    app = make_app()
    app.add_middleware(ErrorHandlerMiddleware)
    response = TestClient(app).get("/boom")
    assert response.status_code == 500
    assert response.json() == {
        "errors": [{"status": "500", "title": "Internal Server Error", "detail": "boom"}]
    }


def test_error_builder_requires_a_field():
    with pytest.raises(ValueError):
        JSONAPIErrorBuilder().error_object()


def test_codec_error_objects_carry_json_pointer():
    error = MalformedDocument("data[1].type", "Field required").to_error_object()
    assert error["source"] == {"pointer": "/data/1/type"}
    assert error["code"] == "malformed_document"
    assert error["detail"] == "data[1].type: Field required"
