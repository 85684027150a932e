from typing import Protocol, Any, TypeVar

from delimcodec.core.ports.channel import InputChannel, OutputChannel

T = TypeVar("T")


class Serializer(Protocol):
    """
    Defines the interface for writing objects to, and reading them back
    from, caller-owned byte channels.

    Implementations must be:
    - stateless between calls
    - all-or-nothing: a failed call returns no partial value
    - free of side effects on the value being written
    """

    def serialize(self, channel: OutputChannel, value: Any) -> None:
        """Encode `value` and write the bytes to `channel`."""

    def deserialize(self, channel: InputChannel, cls: type[T]) -> T:
        """Read all bytes from `channel` and rebuild an instance of `cls`."""
