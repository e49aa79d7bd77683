"""Boundary generation for multipart bodies."""

from __future__ import annotations

import random


def generate_boundary(rng: random.Random | None = None) -> str:
    """
    Generate a boundary shaped like a version 4 UUID.

    The value is drawn from ``rng`` (or the module level ``random`` generator)
    and is not suitable for anything security related.
    """
    getrandbits = rng.getrandbits if rng is not None else random.getrandbits
    bits = getrandbits(128)
    # Force the version nibble to 4 and the variant bits to 10.
    bits &= ~(0xF000 << 64)
    bits |= 0x4000 << 64
    bits &= ~(0xC000 << 48)
    bits |= 0x8000 << 48
    h = f"{bits:032x}"
    return f"{h[:8]}-{h[8:12]}-{h[12:16]}-{h[16:20]}-{h[20:]}"
