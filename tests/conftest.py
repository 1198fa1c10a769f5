from __future__ import annotations

from dataclasses import dataclass

import pytest

from hateoas_jsonapi import JSONAPICodec


@dataclass
class SimplePojo:
    text: str
    number: int


@pytest.fixture
def codec() -> JSONAPICodec:
    return JSONAPICodec()
