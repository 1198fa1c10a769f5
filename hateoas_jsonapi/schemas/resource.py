"""Pydantic schemas for the JSON:API documents the codec reads."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JSONAPIRelationshipLinks(BaseModel):
    """Links member of a relationship object; ``self`` is required."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    self_: str = Field(alias="self")


class JSONAPIRelationship(BaseModel):
    """Relationship object: ``{"links": {"self": href}}``."""

    model_config = ConfigDict(extra="allow")

    links: JSONAPIRelationshipLinks


class JSONAPIResource(BaseModel):
    """Resource object with attributes, links and relationships."""

    model_config = ConfigDict(extra="allow")

    type: str
    id: Optional[str] = None
    attributes: Any = None
    links: Optional[Dict[str, str]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None


class JSONAPIDocument(BaseModel):
    """Top-level document holding a single resource object."""

    model_config = ConfigDict(extra="allow")

    data: JSONAPIResource
    meta: Optional[Any] = None


class JSONAPICollectionDocument(BaseModel):
    """Top-level document holding a collection of resource objects."""

    model_config = ConfigDict(extra="allow")

    data: List[JSONAPIResource]
    links: Optional[Dict[str, str]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None
    meta: Optional[Any] = None
