from typing import Any, TypeVar

from delimcodec.core.codec.scalar import decode_scalar
from delimcodec.core.errors import MalformedEncodingError
from delimcodec.core.models.shape import FieldShape, Shape, StructuralKind
from delimcodec.core.separators import Separators
from delimcodec.core.shapes.registry import ShapeRegistry

T = TypeVar("T")

_MARKERS = (Separators.COLLECTION_CHAR, Separators.OBJECT_CHAR, Separators.KEY_VALUE)


class Decoder:
    """
    Rebuilds a dataclass instance from a delimited token stream.

    The destination is created through the registry factory, then each
    field token found at the current depth is routed on the separator that
    follows the field name: GS for collections, RS for mappings and nested
    composites, `=` for scalars, enums and nulls. The declared field shape,
    never the text, decides how the payload is parsed.

    Fields missing from the stream keep the value set by the factory.
    """

    def __init__(self, registry: ShapeRegistry) -> None:
        self._registry = registry

    def decode(self, text: str, cls: type[T], depth: int = 0) -> T:
        instance = self._registry.instantiate(cls)
        type_shape = self._registry.shape_of(cls)

        for token in text.split(Separators.field(depth)):
            if not token:
                continue

            name, marker, payload = split_token(token)
            field_shape = type_shape.lookup(name)

            if marker == Separators.COLLECTION_CHAR:
                value = self._decode_collection(payload, field_shape, depth)
            elif marker == Separators.OBJECT_CHAR:
                value = self._decode_object(payload, field_shape, depth)
            else:
                value = self._decode_value(payload, field_shape)

            if type_shape.frozen:
                object.__setattr__(instance, name, value)
            else:
                setattr(instance, name, value)

        return instance

    def _decode_collection(self, payload: str, field_shape: FieldShape, depth: int) -> Any:
        shape = field_shape.shape
        if not shape.is_collection:
            raise MalformedEncodingError(
                f"Field '{field_shape.name}' is a {shape.kind}, got a collection token"
            )

        chunks = payload.split(Separators.OBJECT_CHAR) if payload else []
        element = shape.element
        if element.is_leaf:
            values = [decode_scalar(chunk, element) for chunk in chunks]
        else:
            values = [self.decode(chunk, element.target, depth + 1) for chunk in chunks]

        return shape.container(values)

    def _decode_object(self, payload: str, field_shape: FieldShape, depth: int) -> Any:
        shape = field_shape.shape
        if shape.kind is StructuralKind.MAPPING:
            return self._decode_mapping(payload, shape, depth + 1)
        if shape.kind is StructuralKind.COMPOSITE:
            return self.decode(payload, shape.target, depth + 1)
        raise MalformedEncodingError(
            f"Field '{field_shape.name}' is a {shape.kind}, got an object token"
        )

    def _decode_mapping(self, payload: str, shape: Shape, depth: int) -> dict[Any, Any]:
        result = {}
        for entry in payload.split(Separators.field(depth)):
            if not entry:
                continue

            key_text, sep, value_text = entry.partition(Separators.KEY_VALUE)
            if not sep:
                raise MalformedEncodingError(f"Mapping entry without key/value separator: {entry!r}")

            key = decode_scalar(key_text, shape.key)
            if shape.value.is_leaf:
                value = decode_scalar(value_text, shape.value)
            elif value_text == Separators.NULL:
                value = None
            else:
                value = self.decode(value_text, shape.value.target, depth + 1)
            result[key] = value
        return result

    @staticmethod
    def _decode_value(payload: str, field_shape: FieldShape) -> Any:
        shape = field_shape.shape
        if payload == Separators.NULL:
            return None
        if shape.is_leaf:
            return decode_scalar(payload, shape)
        raise MalformedEncodingError(
            f"Field '{field_shape.name}' is a {shape.kind}, got scalar text {payload!r}"
        )


def split_token(token: str) -> tuple[str, str, str]:
    """
    Split a field token into `(name, marker, payload)` on the first
    structural separator. Field names never contain separators, so the
    first one found is the one written right after the name.
    """
    positions = [(token.find(marker), marker) for marker in _MARKERS]
    found = [(index, marker) for index, marker in positions if index >= 0]
    if not found:
        raise MalformedEncodingError(f"Token has no field separator: {token!r}")

    index, marker = min(found)
    if index == 0:
        raise MalformedEncodingError(f"Token has an empty field name: {token!r}")
    return token[:index], marker, token[index + 1:]
