# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial
"""Exception types raised by the buffer core.

Only two conditions are errors: a growth request the allocator cannot
satisfy, and a buffer constructed with an unusable growth unit. Out-of-range
indices and slice bounds are defined behaviour, not errors.
"""

from __future__ import annotations


class BufError(Exception):
    """Base exception for buffer failures."""


class AllocationFailure(BufError, MemoryError):
    """Raised when capacity cannot be grown; the buffer is left untouched."""


class InvalidConstruction(BufError, ValueError):
    """Raised when a buffer is created with unit 0 or above the maximum."""
