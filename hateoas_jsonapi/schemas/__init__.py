"""Pydantic schemas for JSON:API."""

from .resource import (
    JSONAPICollectionDocument,
    JSONAPIDocument,
    JSONAPIRelationship,
    JSONAPIRelationshipLinks,
    JSONAPIResource,
)

__all__ = [
    "JSONAPICollectionDocument",
    "JSONAPIDocument",
    "JSONAPIRelationship",
    "JSONAPIRelationshipLinks",
    "JSONAPIResource",
]
