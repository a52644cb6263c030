"""
SecretBuffer — A mutable holder for passwords that can be wiped in place.

Passwords read from configuration are stored as UTF-8 bytes in a bytearray.
The bytes are only turned into text for the duration of a single request
(reveal()) and are zero-filled by clear(), so a credential set can be
released deterministically instead of waiting for garbage collection.
"""

from typing import Optional, Union


class SecretBuffer:
    """Clearable byte buffer for a single secret value."""

    __slots__ = ("_data",)

    def __init__(self, value: Optional[Union[str, bytes, bytearray]] = None):
        if value is None:
            self._data = bytearray()
        elif isinstance(value, str):
            self._data = bytearray(value.encode("utf-8"))
        else:
            self._data = bytearray(value)

    def reveal(self) -> str:
        """Return the secret as text. Callers must not keep the result."""
        return self._data.decode("utf-8")

    def copy(self) -> "SecretBuffer":
        return SecretBuffer(self._data)

    def clear(self) -> None:
        """Overwrite every byte with zero, then empty the buffer."""
        for i in range(len(self._data)):
            self._data[i] = 0
        del self._data[:]

    @property
    def is_cleared(self) -> bool:
        return len(self._data) == 0

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.clear()

    def __repr__(self) -> str:
        return "SecretBuffer(<cleared>)" if self.is_cleared else "SecretBuffer(******)"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SecretBuffer):
            return NotImplemented
        return self._data == other._data

    __hash__ = None
