"""Starlette response carrying a JSON:API document."""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_jsonable_python
from starlette.responses import JSONResponse

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class JSONAPIResponse(JSONResponse):
    """JSON response using the JSON:API media type.

    Payload objects inside ``attributes`` (dataclasses, pydantic models) are
    rendered with ``to_jsonable_python``.
    """

    media_type = JSONAPI_MEDIA_TYPE

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
            default=to_jsonable_python,
        ).encode("utf-8")
