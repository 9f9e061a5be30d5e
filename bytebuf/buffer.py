# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Growable byte buffer with tail truncation, clamped slicing and a NUL terminator.

Intent:
  - Keep one owned bytearray per buffer; slices and copies never alias it.
  - Keep growth amortized: capacity jumps to the next unit boundary.
  - Keep failures atomic: an operation that cannot allocate leaves the buffer
    exactly as it was.

Defined here:
  - Buf: the buffer itself (append, truncate/clear, view/copy, indexed access).
"""

from __future__ import annotations

import operator
from collections.abc import Iterator

from .capacity import Allocator, Storage

DEFAULT_UNIT = 1024
FILL_BYTE = 0x20
SUMMARY_PREFIX_LEN = 10


def _as_bytes(value: object) -> bytes | memoryview:
    """Return the raw bytes of a string-like value, or raise TypeError."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, Buf):
        return bytes(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return memoryview(value).cast("B")
    raise TypeError("requires buf/string/bytes")


def _until_nul(data: bytes | memoryview) -> bytes | memoryview:
    """Cut `data` at its first NUL, the way a C string ends."""
    end = bytes(data).find(b"\0")
    return data if end == -1 else data[:end]


def _as_byte(value: object, first_of_char: bool = False) -> int:
    """Single byte value from an int, a one-byte bytes-like or a one-char str.

    With `first_of_char`, a multi-byte character stores its first UTF-8 byte.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 0xFF:
            raise ValueError("byte must be in range(0, 256)")
        return value
    if isinstance(value, str):
        if len(value) != 1:
            raise ValueError("requires a single char")
        encoded = value.encode("utf-8")
        if len(encoded) != 1 and not first_of_char:
            raise ValueError("requires a single-byte char")
        return encoded[0]
    raw = _as_bytes(value)
    if len(raw) != 1:
        raise ValueError("requires a single char")
    return raw[0]


class Buf:
    """Contiguous, growable byte buffer.

    Capacity grows in multiples of `unit` and always keeps one spare byte for
    the terminator. Not synchronized: callers serialize mutation themselves.
    """

    __hash__ = None

    def __init__(self, unit: int = DEFAULT_UNIT, allocator: Allocator | None = None):
        self._storage = Storage(unit, allocator)

    @staticmethod
    def is_buf(obj: object) -> bool:
        return isinstance(obj, Buf)

    def _spawn(self) -> Buf:
        return Buf(self.unit, self._storage.allocator)

    # -- properties -----------------------------------------------------

    @property
    def unit(self) -> int:
        return self._storage.unit

    @property
    def size(self) -> int:
        return self._storage.size

    @property
    def capacity(self) -> int:
        return self._storage.capacity

    @property
    def reallocations(self) -> int:
        """How many times the backing storage has been (re)allocated."""
        return self._storage.reallocations

    @property
    def length(self) -> int:
        return self._storage.size

    @length.setter
    def length(self, target: int) -> None:
        self.set_length(target)

    # -- append ---------------------------------------------------------

    def append_bytes(self, src: bytes | bytearray | memoryview, n: int | None = None) -> int:
        """Append the first `n` bytes of `src` (all of it by default).

        Returns:
            The number of bytes appended.

        Raises:
            AllocationFailure: If the buffer cannot grow; size is unchanged.
        """
        view = memoryview(src).cast("B")
        n = len(view) if n is None else operator.index(n)
        if n < 0 or n > len(view):
            raise ValueError(f"cannot append {n} bytes from a {len(view)}-byte source")

        storage = self._storage
        size = storage.size
        storage.ensure_capacity(size + n)
        storage.data[size : size + n] = view[:n]
        storage.set_size(size + n)
        return n

    def append_string(self, s: str | bytes | bytearray | memoryview) -> int:
        """Append `s` up to, not including, its first NUL byte."""
        return self.append_bytes(_until_nul(_as_bytes(s)))

    def append_byte(self, b: int) -> int:
        return self.append_bytes(bytes((_as_byte(b),)))

    def append_format(self, fmt: str, *args: object) -> int:
        """Append printf-style formatted text encoded as UTF-8."""
        return self.append_bytes((fmt % args).encode("utf-8"))

    def put(self, value: str | bytes | bytearray | memoryview | Buf) -> int:
        """Append any string-like value with C-string semantics; return bytes added."""
        return self.append_bytes(_until_nul(_as_bytes(value)))

    # -- truncate / clear -----------------------------------------------

    def remove_tail(self, n: int) -> int:
        """Drop up to `n` bytes from the end; return how many were dropped."""
        n = operator.index(n)
        if n < 0:
            raise ValueError("cannot remove a negative number of bytes")
        storage = self._storage
        removed = min(n, storage.size)
        storage.set_size(storage.size - removed)
        return removed

    def remove_head(self, n: int) -> int:
        """Drop up to `n` bytes from the front, shifting the rest down."""
        n = operator.index(n)
        if n < 0:
            raise ValueError("cannot remove a negative number of bytes")
        storage = self._storage
        removed = min(n, storage.size)
        if removed:
            rest = storage.size - removed
            # Equal-length slice assignment: never resizes the bytearray.
            storage.data[:rest] = storage.data[removed : storage.size]
            storage.set_size(rest)
        return removed

    def clear(self) -> int:
        """Empty the buffer, keeping its capacity; return the size discarded."""
        return self.remove_tail(self._storage.size)

    def set_length(self, target: int) -> int:
        """Truncate to `target`, or pad with spaces up to it; return the new size."""
        target = operator.index(target)
        if target < 0:
            raise ValueError("length must not be negative")
        storage = self._storage
        size = storage.size
        if target < size:
            self.remove_tail(size - target)
        elif target > size:
            storage.ensure_capacity(target)
            storage.data[size:target] = bytes((FILL_BYTE,)) * (target - size)
            storage.set_size(target)
        return storage.size

    def read(self, size: int | None = None) -> bytes:
        """Consume up to `size` bytes (everything if None) from the front."""
        size = self._storage.size if size is None else operator.index(size)
        if size < 0:
            size = self._storage.size
        chunk = bytes(self._storage.data[: min(size, self._storage.size)])
        self.remove_head(len(chunk))
        return chunk

    # -- views / copies -------------------------------------------------

    def as_string(self) -> memoryview:
        """Read-only view of the content followed by its NUL terminator.

        The view aliases internal storage and is only meaningful until the
        next mutating call.
        """
        storage = self._storage
        if not storage.capacity:
            return memoryview(b"\0")
        return memoryview(storage.data)[: storage.size + 1].toreadonly()

    def duplicate(self) -> Buf:
        """Independent copy with the same unit."""
        copy = self._spawn()
        copy.append_bytes(memoryview(self._storage.data)[: self._storage.size])
        return copy

    def slice(self, begin: int, end: int | None = None) -> Buf:
        """Copy of bytes [begin, end) with negative indices and clamping.

        Out-of-range bounds are clamped, never rejected; an empty range yields
        an empty buffer.
        """
        size = self._storage.size
        begin = operator.index(begin)
        end = size if end is None else operator.index(end)

        if begin < 0:
            begin += size
        if begin < 0:
            begin = 0
        if end < 0:
            end += size
        if end > size:
            end = size

        result = self._spawn()
        if begin < end:
            result._storage.ensure_capacity(end - begin)
            result.append_bytes(memoryview(self._storage.data)[begin:end])
        return result

    def inspect_summary(self) -> str:
        """Short diagnostic of the form ``<buf [SIZE] 'PREFIX..'>``."""
        storage = self._storage
        head = _until_nul(bytes(storage.data[: min(storage.size, SUMMARY_PREFIX_LEN)]))
        prefix = bytes(head).decode("utf-8", errors="replace")
        more = ".." if storage.size > SUMMARY_PREFIX_LEN else ""
        return f"<buf [{storage.size}] '{prefix}{more}'>"

    # -- indexed access -------------------------------------------------

    def get(self, i: int) -> int | None:
        """Byte at `i`, or None when `i` is outside [0, size)."""
        i = operator.index(i)
        if 0 <= i < self._storage.size:
            return self._storage.data[i]
        return None

    def set(self, i: int, byte: int | str | bytes) -> int | None:
        """Overwrite the byte at `i` and return it; None if `i` is outside [0, size).

        Indexed assignment never extends the buffer.
        """
        i = operator.index(i)
        if not 0 <= i < self._storage.size:
            return None
        value = _as_byte(byte, first_of_char=True)
        self._storage.data[i] = value
        return value

    # -- python protocol ------------------------------------------------

    def __len__(self) -> int:
        return self._storage.size

    def __bytes__(self) -> bytes:
        return bytes(self._storage.data[: self._storage.size])

    def __str__(self) -> str:
        return bytes(self).decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return self.inspect_summary()

    def __iter__(self) -> Iterator[int]:
        return iter(bytes(self))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Buf):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    def __getitem__(self, key: int | slice) -> int | Buf:
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("buf slices do not support a step")
            return self.slice(0 if key.start is None else key.start, key.stop)
        value = self.get(operator.index(key))
        if value is None:
            raise IndexError("buf index out of range")
        return value

    def __setitem__(self, key: int, value: int | str | bytes) -> None:
        if self.set(operator.index(key), value) is None:
            raise IndexError("buf index out of range")

    def __iadd__(self, value: str | bytes | bytearray | memoryview | Buf) -> Buf:
        self.put(value)
        return self
