import logging
from typing import Any, TypeVar

from delimcodec.core.codec.decoder import Decoder
from delimcodec.core.codec.encoder import Encoder
from delimcodec.core.errors import ChannelError, FormatError, MalformedEncodingError
from delimcodec.core.ports.channel import InputChannel, OutputChannel
from delimcodec.core.ports.serializer import Serializer
from delimcodec.core.shapes.registry import ShapeRegistry

T = TypeVar("T")


class DelimitedSerializer(Serializer):
    """
    Entry point of the codec.

    Writes registered dataclass instances to caller-owned byte channels as
    a delimited token stream and reads them back. The token stream is text;
    `charset` only decides how that text becomes bytes.

    Each call is independent: nothing is shared between calls except the
    registry, whose shapes are read-only once registered.
    """

    def __init__(self, registry: ShapeRegistry | None = None, charset: str = "utf-8") -> None:
        self.registry = registry or ShapeRegistry()
        self.charset = charset
        self._encoder = Encoder(self.registry)
        self._decoder = Decoder(self.registry)
        self._logger = logging.getLogger("core.facade")

    def serialize(self, channel: OutputChannel, value: Any) -> None:
        data = self.dumps(value)
        try:
            channel.write(data)
        except OSError as ex:
            raise ChannelError(f"Unable to write to output channel: {ex}") from ex

    def deserialize(self, channel: InputChannel, cls: type[T]) -> T:
        try:
            data = channel.read()
        except OSError as ex:
            raise ChannelError(f"Unable to read from input channel: {ex}") from ex
        return self.loads(data, cls)

    def dumps(self, value: Any) -> bytes:
        text = self._encoder.encode(value)
        try:
            data = text.encode(self.charset)
        except UnicodeEncodeError as ex:
            raise FormatError(f"Encoded value is not representable in {self.charset}: {ex}") from ex

        self._logger.debug(f"Encoded {type(value).__qualname__} into {len(data)} bytes")
        return data

    def loads(self, data: bytes, cls: type[T]) -> T:
        try:
            text = data.decode(self.charset)
        except UnicodeDecodeError as ex:
            raise MalformedEncodingError(f"Input is not valid {self.charset}: {ex}") from ex

        value = self._decoder.decode(text, cls)
        self._logger.debug(f"Decoded {len(data)} bytes into {cls.__qualname__}")
        return value
