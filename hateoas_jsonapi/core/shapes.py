"""Declared-type shapes used to guide encoding and decoding.

The wire format does not record how many resource and collection wrappers a
payload went through, so a decoder needs the caller's declared type up front.
``resolve_shape`` turns that declared type (``Resources[Resource[Order]]``)
into an explicit tree of ``Container`` nodes ending in a ``Scalar``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ForwardRef, Mapping, TypeVar, Union, get_args, get_origin

from .errors import TypeShapeCycle, TypeShapeError
from .model import PagedResources, Resource, Resources

DEFAULT_MAX_DEPTH = 64

CONTAINER_TYPES: tuple[type, ...] = (PagedResources, Resources, Resource)


@dataclass(frozen=True)
class Scalar:
    """A terminal payload kind (anything that is not a hypermedia wrapper)."""

    kind: Any

    @property
    def depth(self) -> int:
        return 0

    @property
    def root(self) -> Any:
        return self.kind


@dataclass(frozen=True)
class Container:
    """A hypermedia wrapper around an element shape."""

    container: type
    element: "TypeShape"

    @property
    def depth(self) -> int:
        return 1 + self.element.depth

    @property
    def root(self) -> Any:
        return root_of(self)

    @property
    def is_resource(self) -> bool:
        return issubclass(self.container, Resource)

    @property
    def is_collection(self) -> bool:
        return issubclass(self.container, Resources)

    @property
    def is_paged(self) -> bool:
        return issubclass(self.container, PagedResources)


TypeShape = Union[Scalar, Container]


def _container_base(declared: Any) -> tuple[type, tuple[Any, ...]] | None:
    """Return the wrapper class and its type arguments, if ``declared`` is one."""
    origin = get_origin(declared)
    if isinstance(origin, type) and issubclass(origin, CONTAINER_TYPES):
        return origin, get_args(declared)
    if not isinstance(declared, type) or not issubclass(declared, CONTAINER_TYPES):
        return None
    # Subclasses such as ``class OrderResource(Resource[Order])``.
    for base in getattr(declared, "__orig_bases__", ()):
        base_origin = get_origin(base)
        if isinstance(base_origin, type) and issubclass(base_origin, CONTAINER_TYPES):
            return declared, get_args(base)
    return declared, ()


def _unalias(declared: Any, namespace: Mapping[str, Any] | None) -> Any:
    if isinstance(declared, str):
        declared = ForwardRef(declared)
    if isinstance(declared, ForwardRef):
        name = declared.__forward_arg__
        if namespace is None or name not in namespace:
            raise TypeShapeError(f"Cannot resolve forward reference {name!r}")
        return namespace[name]
    # PEP 695 ``type Alias = ...`` statements.
    if type(declared).__name__ == "TypeAliasType":
        return declared.__value__
    return declared


def resolve_shape(
    declared: Any,
    *,
    namespace: Mapping[str, Any] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> TypeShape:
    """Resolve a declared type into its ``TypeShape``.

    Raises ``TypeShapeCycle`` when nesting exceeds ``max_depth``, which is how
    self-referential declarations surface.
    """
    return _resolve(declared, namespace, max_depth, 0)


def _resolve(
    declared: Any, namespace: Mapping[str, Any] | None, max_depth: int, depth: int
) -> TypeShape:
    if depth > max_depth:
        raise TypeShapeCycle(declared, max_depth)
    resolved = _unalias(declared, namespace)
    if resolved is not declared:
        return _resolve(resolved, namespace, max_depth, depth + 1)
    if isinstance(declared, TypeVar):
        return Scalar(Any)
    if isinstance(declared, (Scalar, Container)):
        return _check_depth(declared, max_depth, depth)
    found = _container_base(declared)
    if found is None:
        return Scalar(declared)
    container, args = found
    element = _resolve(args[0], namespace, max_depth, depth + 1) if args else Scalar(Any)
    return Container(container, element)


def _check_depth(shape: TypeShape, max_depth: int, depth: int) -> TypeShape:
    """Validate an explicitly supplied shape against the depth bound."""
    node = shape
    while isinstance(node, Container):
        depth += 1
        if depth > max_depth:
            raise TypeShapeCycle(shape, max_depth)
        node = node.element
    return shape


def root_of(shape: TypeShape, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Return the innermost scalar kind of a shape."""
    node = shape
    for _ in range(max_depth + 1):
        if isinstance(node, Scalar):
            return node.kind
        node = node.element
    raise TypeShapeCycle(shape, max_depth)


def root_type(
    declared: Any,
    *,
    namespace: Mapping[str, Any] | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Any:
    """Return the innermost payload type of a (possibly nested) declared type."""
    return root_of(resolve_shape(declared, namespace=namespace, max_depth=max_depth), max_depth)


def envelope_depth(shape: TypeShape) -> int:
    """Count the ``data`` envelopes a shape renders to.

    A ``Resource`` directly inside a collection is flattened into the
    collection's item and does not add an envelope of its own.
    """
    if isinstance(shape, Scalar):
        return 0
    element = shape.element
    if shape.is_collection and isinstance(element, Container) and element.is_resource:
        element = element.element
    return 1 + envelope_depth(element)
