"""Codec exceptions and JSON:API error object templates."""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import ValidationError


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def error_document(self, errors: Iterable[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": list(errors)}

    def from_exception(self, exc: "JSONAPICodecError") -> dict[str, Any]:
        """Return an error document for a single codec error."""
        return self.error_document([exc.to_error_object()])


class JSONAPICodecError(Exception):
    """Base class for every error raised while encoding or decoding."""

    status = "400"
    code = "codec_error"
    title = "Invalid JSON:API document"

    def __init__(self, detail: str, *, path: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.path = path

    def to_error_object(self) -> dict[str, Any]:
        """Render the error as a JSON:API error object."""
        source = {"pointer": to_json_pointer(self.path)} if self.path is not None else None
        return JSONAPIErrorBuilder().error_object(
            status=self.status,
            code=self.code,
            title=self.title,
            detail=self.detail,
            source=source,
            meta=self.meta() or None,
        )

    def meta(self) -> dict[str, Any]:
        return {}


class UnresolvedLinkTemplate(JSONAPICodecError):
    """A link address still carries template variables."""

    status = "500"
    code = "unresolved_link_template"
    title = "Unresolved link template"

    def __init__(self, href: str, variables: Iterable[str]) -> None:
        self.href = href
        self.variables = tuple(variables)
        super().__init__(
            f"Link {href!r} has unresolved template variables: {', '.join(self.variables)}"
        )

    def meta(self) -> dict[str, Any]:
        return {"href": self.href, "variables": list(self.variables)}


class TypeShapeError(JSONAPICodecError):
    """A declared type cannot be turned into a type shape."""

    status = "500"
    code = "type_shape_error"
    title = "Invalid declared type"


class TypeShapeCycle(TypeShapeError):
    """Shape resolution recursed past the configured depth bound."""

    code = "type_shape_cycle"
    title = "Self-referential declared type"

    def __init__(self, declared: Any, max_depth: int) -> None:
        self.declared = declared
        self.max_depth = max_depth
        super().__init__(
            f"Resolving {declared!r} exceeded the maximum nesting depth of {max_depth}"
        )

    def meta(self) -> dict[str, Any]:
        return {"maxDepth": self.max_depth}


class ShapeMismatch(JSONAPICodecError):
    """Document nesting does not match the declared shape."""

    code = "shape_mismatch"
    title = "Document shape mismatch"

    def __init__(
        self,
        *,
        expected_depth: int,
        actual_depth: int,
        path: str = "",
        detail: str | None = None,
    ) -> None:
        self.expected_depth = expected_depth
        self.actual_depth = actual_depth
        message = detail or "Document nesting does not match the declared type"
        super().__init__(
            f"{message} (expected depth {expected_depth}, got {actual_depth})",
            path=path,
        )

    def meta(self) -> dict[str, Any]:
        return {"expectedDepth": self.expected_depth, "actualDepth": self.actual_depth}


class MalformedDocument(JSONAPICodecError):
    """A required member is missing or has the wrong type."""

    code = "malformed_document"
    title = "Malformed JSON:API document"

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"{path or '<root>'}: {detail}", path=path)

    @classmethod
    def from_validation_error(cls, exc: ValidationError, *, prefix: str = "") -> "MalformedDocument":
        """Convert the first pydantic error into a path-qualified error."""
        first = exc.errors()[0]
        return cls(join_path(prefix, format_location(first["loc"])), first["msg"])


def format_location(loc: Iterable[Any]) -> str:
    """Render a pydantic error location as ``data[0].type``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def join_path(prefix: str, path: str) -> str:
    if not prefix:
        return path
    if not path:
        return prefix
    return prefix + path if path.startswith("[") else f"{prefix}.{path}"


def to_json_pointer(path: str) -> str:
    """Convert ``data[0].type`` into the JSON pointer ``/data/0/type``."""
    if not path:
        return ""
    normalized = path.replace("[", ".").replace("]", "")
    return "/" + "/".join(part for part in normalized.split(".") if part)
