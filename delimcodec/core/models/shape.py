from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable

from delimcodec.core.errors import UnknownFieldError
from delimcodec.core.models.scalars import ScalarKind


class StructuralKind(StrEnum):
    """
    Closed set of structural kinds a field value can take.
    The kind selects the encoding strategy of the field.
    """
    SCALAR = "scalar"
    ENUM = "enum"
    COMPOSITE = "composite"
    SEQUENCE = "sequence"
    UNIQUE_SET = "unique_set"
    MAPPING = "mapping"


@dataclass(frozen=True)
class Shape:
    """
    Structural description of a declared type.

    Scalars carry their subkind, enums and composites carry the target
    class, containers carry their element (or key and value) shapes and
    the concrete container type to rebuild on decode.
    """
    kind: StructuralKind

    scalar: ScalarKind | None = None
    """Subkind of a SCALAR shape."""

    target: type | None = None
    """Enum class of an ENUM shape or dataclass of a COMPOSITE shape."""

    element: Shape | None = None
    """Element shape of SEQUENCE and UNIQUE_SET shapes."""

    key: Shape | None = None
    value: Shape | None = None

    container: type | None = None
    """Concrete container rebuilt on decode (list, tuple, set, frozenset, dict)."""

    @property
    def is_leaf(self) -> bool:
        return self.kind in (StructuralKind.SCALAR, StructuralKind.ENUM)

    @property
    def is_collection(self) -> bool:
        return self.kind in (StructuralKind.SEQUENCE, StructuralKind.UNIQUE_SET)

    @classmethod
    def of_scalar(cls, scalar: ScalarKind) -> Shape:
        return cls(kind=StructuralKind.SCALAR, scalar=scalar)


@dataclass(frozen=True)
class FieldShape:
    name: str
    shape: Shape


@dataclass
class TypeShape:
    """
    Field descriptors of one composite type, in declaration order,
    together with the zero-argument factory used to rebuild it.
    """
    cls: type
    factory: Callable[[], Any]
    fields: dict[str, FieldShape] = field(default_factory=dict)
    frozen: bool = False
    """Frozen dataclasses are populated with object.__setattr__."""

    def lookup(self, name: str) -> FieldShape:
        try:
            return self.fields[name]
        except KeyError:
            raise UnknownFieldError(self.cls, name) from None

    def __iter__(self):
        return iter(self.fields.values())
