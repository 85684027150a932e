from typing import Any, Iterable, Mapping

from delimcodec.core.codec.scalar import encode_scalar
from delimcodec.core.models.shape import FieldShape, Shape, StructuralKind
from delimcodec.core.separators import Separators
from delimcodec.core.shapes.registry import ShapeRegistry


class Encoder:
    """
    Turns a registered dataclass instance into a delimited token stream.

    A composite at depth `d` is the list of its field tokens joined with
    the depth-`d` field separator:

        name=text                          scalar, enum, or null
        name<RS><fields at d+1>            nested composite
        name<RS><entries at d+1>           mapping
        name<GS><element><RS><element>     sequence or set

    Mapping entries are `key=text`, or `key=<fields at d+2>` when the values
    are composites. Null composite and scalar fields are written with the
    `null` sentinel; None mappings and collections are left out entirely.

    The encoder does not detect cycles: a self-referencing value graph
    recurses until the interpreter's recursion limit is reached.
    """

    def __init__(self, registry: ShapeRegistry) -> None:
        self._registry = registry

    def encode(self, value: Any, depth: int = 0) -> str:
        return Separators.field(depth).join(self.tokens(value, depth))

    def tokens(self, value: Any, depth: int = 0) -> list[str]:
        type_shape = self._registry.shape_of(type(value))
        tokens = []
        for field_shape in type_shape:
            token = self._encode_field(field_shape, getattr(value, field_shape.name), depth)
            if token is not None:
                tokens.append(token)
        return tokens

    def _encode_field(self, field_shape: FieldShape, value: Any, depth: int) -> str | None:
        name = field_shape.name
        shape = field_shape.shape

        if shape.is_leaf or (value is None and shape.kind is StructuralKind.COMPOSITE):
            return name + Separators.KEY_VALUE + encode_scalar(value, shape)

        if value is None:
            return None

        if shape.kind is StructuralKind.COMPOSITE:
            return name + Separators.OBJECT_CHAR + self.encode(value, depth + 1)

        if shape.kind is StructuralKind.MAPPING:
            return name + Separators.OBJECT_CHAR + self._encode_mapping(value, shape, depth + 1)

        return name + Separators.COLLECTION_CHAR + self._encode_elements(value, shape, depth + 1)

    def _encode_mapping(self, mapping: Mapping[Any, Any], shape: Shape, depth: int) -> str:
        entries = []
        for key, value in mapping.items():
            if shape.value.is_leaf or value is None:
                text = encode_scalar(value, shape.value)
            else:
                text = self.encode(value, depth + 1)
            entries.append(encode_scalar(key, shape.key) + Separators.KEY_VALUE + text)
        return Separators.field(depth).join(entries)

    def _encode_elements(self, elements: Iterable[Any], shape: Shape, depth: int) -> str:
        if shape.element.is_leaf:
            rendered = [encode_scalar(element, shape.element) for element in elements]
        else:
            rendered = [self.encode(element, depth) for element in elements if element is not None]
        return Separators.OBJECT_CHAR.join(rendered)
