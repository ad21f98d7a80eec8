from __future__ import annotations


class LlmOutputFormatError(Exception):
    """Base class for errors raised by the field/schema core."""


class InvalidKind(LlmOutputFormatError, ValueError):
    """A field kind outside text/singleSelect/multipleSelect."""

    def __init__(self, value):
        super().__init__(f"Unknown field kind: {value!r}")
        self.value = value


class IndexOutOfRange(LlmOutputFormatError, IndexError):
    def __init__(self, index, size: int):
        super().__init__(f"Index {index!r} out of range for {size} element(s)")
        self.index = index
        self.size = size


class MalformedState(LlmOutputFormatError, ValueError):
    """Share-link state that cannot be decoded into a field list."""
