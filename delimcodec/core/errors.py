class CodecError(Exception):
    """Base class of every failure raised by the codec."""


class ChannelError(CodecError):
    """Reading from or writing to the byte channel failed."""


class InstantiationError(CodecError):
    """A destination type could not be built from its zero-argument factory."""

    def __init__(self, cls: type, reason: str) -> None:
        super().__init__(f"Unable to instantiate {cls.__qualname__}: {reason}")
        self.cls = cls


class UnknownFieldError(CodecError, KeyError):
    """An encoded field name has no match in the destination type."""

    def __init__(self, cls: type, name: str) -> None:
        super().__init__(f"{cls.__qualname__} has no field '{name}'")
        self.cls = cls
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class UnknownVariantError(CodecError, ValueError):
    """An encoded enum constant does not exist in the destination enum."""

    def __init__(self, enum_cls: type, text: str) -> None:
        super().__init__(f"'{text}' is not a member of {enum_cls.__qualname__}")
        self.enum_cls = enum_cls
        self.text = text


class FormatError(CodecError, ValueError):
    """Scalar text cannot be parsed as its declared subkind."""


class MalformedEncodingError(CodecError, ValueError):
    """A token does not have the delimiter structure expected for its field."""


class ShapeError(CodecError, TypeError):
    """A type cannot be described as a structural shape."""


class UnsupportedTypeError(ShapeError):
    """The annotation is outside the supported type universe."""


class UnregisteredTypeError(ShapeError):
    """A composite type was used without being registered."""
