import dataclasses
import logging
import typing
from typing import Any, Callable, TypeVar

from delimcodec.core.errors import (
    InstantiationError,
    ShapeError,
    UnregisteredTypeError,
    UnsupportedTypeError,
)
from delimcodec.core.models.shape import FieldShape, Shape, StructuralKind, TypeShape
from delimcodec.core.shapes.classifier import classify

T = TypeVar("T")

Factory = Callable[[], Any]


class ShapeRegistry:
    """
    Registry of composite types known to the codec.

    Each registered dataclass gets a `TypeShape`: its fields in declaration
    order, each classified into a structural shape, and the zero-argument
    factory the decoder calls to build fresh instances. Composite types
    reachable from a registered type (nested fields, collection elements,
    mapping values) are registered along with it.

    Registration is where unsupported annotations are reported. Once a type
    is registered, encoding and decoding never classify again when shapes
    are cached.
    """

    def __init__(self, auto_register: bool = True, cache_shapes: bool = True) -> None:
        self._auto_register = auto_register
        self._cache_shapes = cache_shapes
        self._factories: dict[type, Factory] = {}
        self._shapes: dict[type, TypeShape] = {}
        self._logger = logging.getLogger("core.shapes.registry")

    def register(self, cls: type[T] | None = None, *, factory: Factory | None = None):
        """
        Register a dataclass. Usable directly or as a class decorator:

            @registry.register
            @dataclass
            class Car: ...

            @registry.register(factory=lambda: Car(model="unknown"))
            @dataclass
            class Car: ...
        """
        def decorator(target: type[T]) -> type[T]:
            self._register(target, factory)
            return target

        if cls is None:
            return decorator
        return decorator(cls)

    def is_registered(self, cls: type) -> bool:
        return cls in self._factories

    def shape_of(self, cls: type) -> TypeShape:
        if cls not in self._factories:
            if not self._auto_register:
                raise UnregisteredTypeError(f"{cls.__qualname__} is not registered")
            self._register(cls, None)

        cached = self._shapes.get(cls)
        if cached is not None:
            return cached

        type_shape = self._describe(cls)
        if self._cache_shapes:
            self._shapes[cls] = type_shape
        return type_shape

    def instantiate(self, cls: type[T]) -> T:
        type_shape = self.shape_of(cls)
        try:
            return type_shape.factory()
        except Exception as ex:
            raise InstantiationError(cls, str(ex)) from ex

    def _register(self, cls: type, factory: Factory | None) -> None:
        if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
            raise UnsupportedTypeError(f"Only dataclasses can be registered, got {cls!r}")

        self._factories[cls] = factory or cls
        self._shapes.pop(cls, None)

        try:
            type_shape = self._describe(cls)
            for nested in _composite_targets(type_shape):
                if nested not in self._factories:
                    self._register(nested, None)
            for field_shape in type_shape:
                if field_shape.shape.is_collection and _is_composite(field_shape.shape.element):
                    self._check_element(cls, field_shape)
        except ShapeError:
            del self._factories[cls]
            raise

        if self._cache_shapes:
            self._shapes[cls] = type_shape

        self._logger.debug(f"Registered {cls.__qualname__} with {len(type_shape.fields)} fields")

    def _check_element(self, owner: type, field_shape: FieldShape) -> None:
        """
        Collection elements are separated by RS, which is also what a nested
        composite, mapping or collection field inside an element would use.
        Element types are therefore limited to scalar and enum fields.
        """
        element = field_shape.shape.element.target
        nested = [f.name for f in self._describe(element) if not f.shape.is_leaf]
        if nested:
            raise UnsupportedTypeError(
                f"{owner.__qualname__}.{field_shape.name}: elements of type "
                f"{element.__qualname__} may only hold scalar and enum fields, "
                f"found {', '.join(nested)}"
            )

    def _describe(self, cls: type) -> TypeShape:
        try:
            hints = typing.get_type_hints(cls, include_extras=True)
        except NameError as ex:
            raise UnsupportedTypeError(
                f"Cannot resolve annotations of {cls.__qualname__}: {ex}"
            ) from ex

        type_shape = TypeShape(
            cls=cls,
            factory=self._factories[cls],
            frozen=cls.__dataclass_params__.frozen,
        )
        for f in dataclasses.fields(cls):
            type_shape.fields[f.name] = FieldShape(name=f.name, shape=classify(hints[f.name]))
        return type_shape


def _composite_targets(type_shape: TypeShape) -> list[type]:
    targets = []
    for field_shape in type_shape:
        shape = field_shape.shape
        for candidate in (shape, shape.element, shape.value):
            if _is_composite(candidate):
                targets.append(candidate.target)
    return targets


def _is_composite(shape: Shape | None) -> bool:
    return shape is not None and shape.kind is StructuralKind.COMPOSITE
