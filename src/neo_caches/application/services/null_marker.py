"""Null marker sentinel.

Stands in for a deliberately cached None so that "entry holds None" stays
distinguishable from "no entry" at the store level. Internal to the typed
cache adapter; not exported.
"""


class _NullMarker:
    """Immutable process-wide singleton."""

    __slots__ = ()

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __eq__(self, other: object) -> bool:
        return isinstance(other, _NullMarker)

    def __hash__(self) -> int:
        return 0x4E554C4C

    def __repr__(self) -> str:
        return "[NullMarker]"

    def __reduce__(self):
        # Out-of-process stores unpickle back to the singleton
        return (_NullMarker, ())

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


NULL_MARKER = _NullMarker()


def to_stored(value):
    """Substitute the marker for None before writing to a store."""
    return NULL_MARKER if value is None else value


def from_stored(value):
    """Substitute None back for the marker after reading from a store."""
    return None if isinstance(value, _NullMarker) else value
