"""
Module-level shortcuts over the shared serializer built from the
environment configuration.

    from delimcodec.api import register, serialize, deserialize

    @register
    @dataclass
    class Car:
        model: str | None = None

    serialize(stream, Car(model="Volvo XC60"))
    car = deserialize(stream, Car)
"""
from typing import Any, TypeVar

from delimcodec.bootstrap.deps import get_registry, get_serializer
from delimcodec.core.ports.channel import InputChannel, OutputChannel

T = TypeVar("T")


def register(cls: type[T] | None = None, *, factory=None):
    return get_registry().register(cls, factory=factory)


def serialize(channel: OutputChannel, value: Any) -> None:
    get_serializer().serialize(channel, value)


def deserialize(channel: InputChannel, cls: type[T]) -> T:
    return get_serializer().deserialize(channel, cls)


def dumps(value: Any) -> bytes:
    return get_serializer().dumps(value)


def loads(data: bytes, cls: type[T]) -> T:
    return get_serializer().loads(data, cls)
