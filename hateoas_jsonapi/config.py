from pydantic_settings import BaseSettings, SettingsConfigDict

from hateoas_jsonapi.core.links import CANONICAL_RELS
from hateoas_jsonapi.core.shapes import DEFAULT_MAX_DEPTH


# -----------------------------------------------------------------------------
# Codec settings
# -----------------------------------------------------------------------------
class CodecSettings(BaseSettings):
    """
    Read-only codec configuration.
    Built once at startup and handed to every JSONAPICodec; values can be
    overridden through JSONAPI_* environment variables.
    """
    # Relations rendered under the top-level "links" member
    canonical_rels: frozenset[str] = CANONICAL_RELS

    # Type shape resolution
    max_shape_depth: int = DEFAULT_MAX_DEPTH
    memoize: bool = True

    # Resource object "type" names for builtin payload kinds
    type_aliases: dict[str, str] = {
        "str": "String",
        "int": "Integer",
        "float": "Double",
        "bool": "Boolean",
        "dict": "Map",
        "list": "List",
    }

    model_config = SettingsConfigDict(
        env_prefix="JSONAPI_",
        frozen=True,
        extra="ignore",
    )
