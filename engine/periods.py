"""
Period specifications — compact text like "1-12,18,24-36" turned into a
boolean applicability mask over the horizon [start, end].

Index i of a mask means period start + i. Periods are non-negative integers. Parsing either returns a full mask
or raises; it never returns a partially filled one.
"""

from __future__ import annotations

import re
from typing import List, Tuple

import numpy as np

from core.errors import PeriodOutOfRangeError, PeriodSyntaxError
from core.utils import horizon_length

_TOKEN = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")


def _ranges(spec: str, start: int, end: int) -> List[Tuple[int, int]]:
    """Inclusive (first, last) pairs, each checked against [start, end] before use."""
    ranges: List[Tuple[int, int]] = []
    for raw in spec.split(","):
        token = raw.strip()
        match = _TOKEN.match(token)
        if match is None:
            raise PeriodSyntaxError(f"malformed period token {token!r} in {spec!r}")
        first = int(match.group(1))
        last = int(match.group(2)) if match.group(2) is not None else first
        if last < first:
            raise PeriodSyntaxError(f"reversed period range {token!r} in {spec!r}")
        if first < start or last > end:
            raise PeriodOutOfRangeError(
                f"period range {token!r} in {spec!r} is outside the horizon [{start}, {end}]"
            )
        ranges.append((first, last))
    return ranges


def parse_periods(spec: str, start: int, end: int) -> np.ndarray:
    """
    Parse a period spec into a read-only boolean mask of length end - start + 1.

    An empty (or blank) spec is valid and means "never applicable".
    Raises PeriodSyntaxError for malformed tokens and PeriodOutOfRangeError for
    periods outside [start, end].
    """
    if start < 0:
        raise PeriodOutOfRangeError(f"start period {start} is negative; periods are non-negative")
    if start > end:
        raise PeriodOutOfRangeError(f"start period {start} is after end period {end}")

    mask = np.zeros(horizon_length(start, end), dtype=bool)
    if spec is None or not str(spec).strip():
        mask.flags.writeable = False
        return mask

    for first, last in _ranges(str(spec), start, end):
        mask[first - start:last - start + 1] = True
    mask.flags.writeable = False
    return mask


def describe_periods(mask: np.ndarray, start: int) -> str:
    """Render a mask back to compact spec text, e.g. "1-4,7". Inverse of parse_periods."""
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return ""

    parts = []
    run_start = prev = int(idx[0])
    for i in idx[1:]:
        i = int(i)
        if i == prev + 1:
            prev = i
            continue
        parts.append((run_start, prev))
        run_start = prev = i
    parts.append((run_start, prev))

    return ",".join(
        str(a + start) if a == b else f"{a + start}-{b + start}" for a, b in parts
    )
