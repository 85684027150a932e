import collections.abc
import dataclasses
import enum
import types
import typing
from typing import Any

from delimcodec.core.errors import UnsupportedTypeError
from delimcodec.core.models.scalars import ScalarKind
from delimcodec.core.models.shape import Shape, StructuralKind


_PLAIN_SCALARS: dict[Any, ScalarKind] = {
    bool: ScalarKind.BOOLEAN,
    int: ScalarKind.LONG,
    float: ScalarKind.DOUBLE,
    str: ScalarKind.TEXT,
}

_BASE_TYPES: dict[ScalarKind, type] = {
    ScalarKind.BOOLEAN: bool,
    ScalarKind.BYTE: int,
    ScalarKind.SHORT: int,
    ScalarKind.INT: int,
    ScalarKind.LONG: int,
    ScalarKind.FLOAT: float,
    ScalarKind.DOUBLE: float,
    ScalarKind.TEXT: str,
}

_SEQUENCE_ORIGINS = {
    list: list,
    tuple: tuple,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
}

_SET_ORIGINS = {
    set: set,
    frozenset: frozenset,
    collections.abc.Set: set,
    collections.abc.MutableSet: set,
}

_MAPPING_ORIGINS = {
    dict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
}


def classify(annotation: Any) -> Shape:
    """
    Classify a declared type into its structural shape.

    Optional types classify as their non-None member: nullability is
    implicit for every field. Unsupported annotations raise
    `UnsupportedTypeError`, so a type is rejected when it is described,
    never while decoding.
    """
    annotation = _strip_optional(annotation)
    origin = typing.get_origin(annotation)

    if origin is typing.Annotated:
        return _classify_annotated(annotation)

    if annotation in _PLAIN_SCALARS:
        return Shape.of_scalar(_PLAIN_SCALARS[annotation])

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return Shape(kind=StructuralKind.ENUM, target=annotation)

    if origin in _SEQUENCE_ORIGINS:
        element = _collection_element(annotation, origin)
        return Shape(
            kind=StructuralKind.SEQUENCE,
            element=element,
            container=_SEQUENCE_ORIGINS[origin],
        )

    if origin in _SET_ORIGINS:
        element = _collection_element(annotation, origin)
        return Shape(
            kind=StructuralKind.UNIQUE_SET,
            element=element,
            container=_SET_ORIGINS[origin],
        )

    if origin in _MAPPING_ORIGINS:
        return _classify_mapping(annotation)

    if isinstance(annotation, type) and dataclasses.is_dataclass(annotation):
        return Shape(kind=StructuralKind.COMPOSITE, target=annotation)

    raise UnsupportedTypeError(f"Unsupported type annotation: {annotation!r}")


def _strip_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is not typing.Union and origin is not types.UnionType:
        return annotation

    members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
    if len(members) != 1:
        raise UnsupportedTypeError(f"Only Optional unions are supported: {annotation!r}")
    return members[0]


def _classify_annotated(annotation: Any) -> Shape:
    base, *metadata = typing.get_args(annotation)
    kinds = [item for item in metadata if isinstance(item, ScalarKind)]
    if not kinds:
        return classify(base)

    kind = kinds[0]
    if _BASE_TYPES[kind] is not base:
        raise UnsupportedTypeError(f"{kind} width marker cannot annotate {base!r}")
    return Shape.of_scalar(kind)


def _collection_element(annotation: Any, origin: Any) -> Shape:
    args = typing.get_args(annotation)
    if origin is tuple:
        if len(args) != 2 or args[1] is not Ellipsis:
            raise UnsupportedTypeError(
                f"Only homogeneous tuples (tuple[T, ...]) are supported: {annotation!r}"
            )
        args = args[:1]

    if len(args) != 1:
        raise UnsupportedTypeError(f"Collection needs one element type: {annotation!r}")

    element = classify(args[0])
    if not (element.is_leaf or element.kind is StructuralKind.COMPOSITE):
        raise UnsupportedTypeError(f"Nested containers are not supported: {annotation!r}")
    return element


def _classify_mapping(annotation: Any) -> Shape:
    args = typing.get_args(annotation)
    if len(args) != 2:
        raise UnsupportedTypeError(f"Mapping needs key and value types: {annotation!r}")

    key = classify(args[0])
    if not key.is_leaf:
        raise UnsupportedTypeError(f"Mapping keys must be scalars or enums: {annotation!r}")

    value = classify(args[1])
    if not (value.is_leaf or value.kind is StructuralKind.COMPOSITE):
        raise UnsupportedTypeError(f"Nested containers are not supported: {annotation!r}")

    return Shape(kind=StructuralKind.MAPPING, key=key, value=value, container=dict)
