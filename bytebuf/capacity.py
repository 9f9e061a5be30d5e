# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Capacity management for growable byte buffers.

Storage owns the backing ``bytearray`` and decides when and how far to grow
it. Capacity always moves in whole multiples of the unit and always leaves
room for one terminator byte past the logical size, so a NUL-terminated view
never needs a reallocation at read time.
"""

from __future__ import annotations

from collections.abc import Callable

from .errors import AllocationFailure, InvalidConstruction

MAX_UNIT = 1024 * 1024

Allocator = Callable[[int], bytearray]


def validate_unit(unit: int) -> int:
    """Return `unit` if it is a usable growth unit.

    Raises:
        TypeError: If `unit` is not an integer.
        InvalidConstruction: If `unit` is 0, negative or above MAX_UNIT.
    """
    if isinstance(unit, bool) or not isinstance(unit, int):
        raise TypeError("buf unit requires unsigned integer")
    if unit <= 0:
        raise InvalidConstruction("buf unit should not be 0")
    if unit > MAX_UNIT:
        raise InvalidConstruction("buf unit is too large")
    return unit


def grow_to(target_size: int, unit: int) -> int:
    """Smallest multiple of `unit` able to hold `target_size` bytes plus a terminator."""
    return -(-(target_size + 1) // unit) * unit


class Storage:
    """Backing allocation plus the logical size it holds.

    `capacity` is simply the length of the owned bytearray. It starts at zero;
    the first growth allocates one unit (or more for a larger target).
    """

    def __init__(self, unit: int, allocator: Allocator | None = None):
        self.unit = validate_unit(unit)
        self.allocator: Allocator = allocator or bytearray
        self.data = bytearray()
        self.size = 0
        self.reallocations = 0

    @property
    def capacity(self) -> int:
        return len(self.data)

    def ensure_capacity(self, target_size: int) -> None:
        """Guarantee room for `target_size` bytes plus a terminator.

        Existing bytes keep their positions. Growth happens at most once per
        call and jumps to the next unit boundary.

        Raises:
            AllocationFailure: If the allocator cannot provide the memory. The
                storage is unchanged in that case.
        """
        if target_size < 0:
            raise ValueError("target size must not be negative")
        if target_size + 1 <= self.capacity:
            return

        wanted = grow_to(target_size, self.unit)
        try:
            fresh = self.allocator(wanted)
        except (MemoryError, OverflowError) as error:
            raise AllocationFailure(f"No memory for {wanted} bytes") from error
        if len(fresh) != wanted:
            raise AllocationFailure(f"allocator returned {len(fresh)} of {wanted} bytes")

        fresh[: self.size] = self.data[: self.size]
        self.data = fresh
        self.reallocations += 1

    def set_size(self, size: int) -> None:
        """Record a new logical size and write the terminator after it."""
        if self.capacity:
            self.data[size] = 0
        self.size = size
