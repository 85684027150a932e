from enum import StrEnum
from typing import Annotated


class ScalarKind(StrEnum):
    """
    Scalar subkinds understood by the scalar codec.
    Integral kinds carry a signed width that is enforced on decode.
    """
    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    TEXT = "text"

    @property
    def bits(self) -> int | None:
        return INTEGER_BITS.get(self)

    @property
    def is_integer(self) -> bool:
        return self in INTEGER_BITS


INTEGER_BITS: dict[ScalarKind, int] = {
    ScalarKind.BYTE: 8,
    ScalarKind.SHORT: 16,
    ScalarKind.INT: 32,
    ScalarKind.LONG: 64,
}


# Width markers for dataclass annotations, e.g. `power: Int | None = None`.
# A bare `int` is a long and a bare `float` is a double.
Byte = Annotated[int, ScalarKind.BYTE]
Short = Annotated[int, ScalarKind.SHORT]
Int = Annotated[int, ScalarKind.INT]
Long = Annotated[int, ScalarKind.LONG]
Float32 = Annotated[float, ScalarKind.FLOAT]
Float64 = Annotated[float, ScalarKind.DOUBLE]
