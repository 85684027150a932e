import enum
import math
import re
from typing import Any

from delimcodec.core.errors import FormatError, UnknownVariantError
from delimcodec.core.models.scalars import ScalarKind
from delimcodec.core.models.shape import Shape, StructuralKind
from delimcodec.core.separators import Separators

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT32_MAX = 3.4028234663852886e38

TRUE = "true"
FALSE = "false"


def encode_scalar(value: Any, shape: Shape | None = None) -> str:
    """
    Render a scalar or enum value as text.

    Floats use `repr`, which is locale independent and round-trips
    exactly. Text is passed through unescaped. When the declared `shape`
    is given, numbers are held to its width so that anything written here
    decodes back.
    """
    kind = shape.scalar if shape is not None else None

    if value is None:
        return Separators.NULL
    if isinstance(value, bool):
        return TRUE if value else FALSE
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, int):
        if kind is not None and kind.is_integer:
            _check_integer(value, kind)
        return str(value)
    if isinstance(value, float):
        if kind is ScalarKind.FLOAT:
            _check_float(value, kind)
        return repr(value)
    if isinstance(value, str):
        return value
    raise FormatError(f"Cannot encode {type(value).__qualname__} as a scalar")


def decode_scalar(text: str, shape: Shape) -> Any:
    """
    Parse `text` according to a SCALAR or ENUM shape.
    The null sentinel decodes to None for every subkind.
    """
    if text == Separators.NULL:
        return None

    if shape.kind is StructuralKind.ENUM:
        return _decode_enum(text, shape.target)

    if shape.kind is not StructuralKind.SCALAR:
        raise FormatError(f"Cannot decode a {shape.kind} shape as a scalar")

    kind = shape.scalar
    if kind is ScalarKind.TEXT:
        return text
    if kind is ScalarKind.BOOLEAN:
        return _decode_boolean(text)
    if kind.is_integer:
        return _decode_integer(text, kind)
    return _decode_float(text, kind)


def _decode_enum(text: str, enum_cls: type[enum.Enum]) -> enum.Enum:
    try:
        return enum_cls[text]
    except KeyError:
        raise UnknownVariantError(enum_cls, text) from None


def _decode_boolean(text: str) -> bool:
    if text == TRUE:
        return True
    if text == FALSE:
        return False
    raise FormatError(f"'{text}' is not a boolean literal")


def _decode_integer(text: str, kind: ScalarKind) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise FormatError(f"'{text}' is not a valid {kind} literal")

    value = int(text)
    _check_integer(value, kind)
    return value


def _decode_float(text: str, kind: ScalarKind) -> float:
    if "_" in text or text != text.strip():
        raise FormatError(f"'{text}' is not a valid {kind} literal")
    try:
        value = float(text)
    except ValueError:
        raise FormatError(f"'{text}' is not a valid {kind} literal") from None

    if kind is ScalarKind.FLOAT:
        _check_float(value, kind)
    return value


def _check_integer(value: int, kind: ScalarKind) -> None:
    limit = 1 << (kind.bits - 1)
    if not -limit <= value < limit:
        raise FormatError(f"{value} overflows a {kind.bits}-bit {kind}")


def _check_float(value: float, kind: ScalarKind) -> None:
    if math.isfinite(value) and abs(value) > _FLOAT32_MAX:
        raise FormatError(f"{value!r} overflows a {kind}")
