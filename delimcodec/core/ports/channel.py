from typing import Protocol, Any


class InputChannel(Protocol):
    """
    Readable byte source owned by the caller, such as an open binary
    file or an `io.BytesIO`. The codec reads it to the end and never
    closes it.
    """

    def read(self) -> bytes:
        """Return every remaining byte of the channel."""


class OutputChannel(Protocol):
    """
    Writable byte sink owned by the caller. The codec writes one encoded
    value per call and leaves flushing and closing to the owner.
    """

    def write(self, data: bytes) -> Any:
        """Write all of `data` to the channel."""
