"""Run-length encoding for compact grid payloads."""

from __future__ import annotations

from typing import Sequence


def rle_encode(values: Sequence[int]) -> list[int]:
    """Encode a flat sequence as ``[value, count, value, count, ...]``."""
    out: list[int] = []
    if not values:
        return out
    current = values[0]
    run = 1
    for v in values[1:]:
        if v == current:
            run += 1
        else:
            out.append(current)
            out.append(run)
            current = v
            run = 1
    out.append(current)
    out.append(run)
    return out


def rle_decode(pairs: Sequence[int]) -> list[int]:
    out: list[int] = []
    for i in range(0, len(pairs), 2):
        out.extend([pairs[i]] * pairs[i + 1])
    return out
