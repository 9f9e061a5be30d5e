# SPDX-License-Identifier: GPL-3.0-or-later OR LicenseRef-Commercial

"""Growable byte buffers with amortized appends and clamped slicing."""

from .buffer import DEFAULT_UNIT, FILL_BYTE, SUMMARY_PREFIX_LEN, Buf
from .capacity import MAX_UNIT, Storage, grow_to, validate_unit
from .errors import AllocationFailure, BufError, InvalidConstruction

__all__ = [
    "AllocationFailure",
    "Buf",
    "BufError",
    "DEFAULT_UNIT",
    "FILL_BYTE",
    "InvalidConstruction",
    "MAX_UNIT",
    "SUMMARY_PREFIX_LEN",
    "Storage",
    "grow_to",
    "validate_unit",
]
