class Separators:
    """
    Fixed encoding alphabet of the delimited token stream.

    Only the field separator escalates with nesting depth: a composite at
    depth `d` joins its fields with `chr(FIELD + d)`. The collection and
    object separators are the same at every depth.
    """
    FIELD: int = 179
    COLLECTION: int = 29    # GS - group separator
    OBJECT: int = 30        # RS - record separator
    KEY_VALUE: str = "="
    NULL: str = "null"

    COLLECTION_CHAR: str = chr(COLLECTION)
    OBJECT_CHAR: str = chr(OBJECT)

    CHECKED_DEPTH: int = 64
    """Nesting depth a configured charset is guaranteed to cover."""

    @classmethod
    def field(cls, depth: int) -> str:
        return chr(cls.FIELD + depth)

    @classmethod
    def alphabet(cls, max_depth: int = CHECKED_DEPTH) -> str:
        """Every separator used by values nested up to `max_depth`."""
        fields = "".join(cls.field(depth) for depth in range(max_depth + 1))
        return fields + cls.COLLECTION_CHAR + cls.OBJECT_CHAR + cls.KEY_VALUE
