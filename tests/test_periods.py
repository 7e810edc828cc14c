"""Tests for period spec parsing."""

import time

import numpy as np
import pytest

from core.errors import PeriodOutOfRangeError, PeriodSpecError, PeriodSyntaxError
from engine.periods import describe_periods, parse_periods


@pytest.mark.parametrize(
    "start, end, spec, expected",
    [
        (1, 4, "2-3", [False, True, True, False]),
        (0, 5, "1-3", [False, True, True, True, False, False]),
        (0, 5, "", [False] * 6),
        (1, 6, "1,3,5-6", [True, False, True, False, True, True]),
        (1, 4, " 1 - 2 , 4 ", [True, True, False, True]),
        (1, 3, "2,2,1-2", [True, True, False]),
        (5, 5, "5", [True]),
    ],
)
def test_parse_periods(start, end, spec, expected):
    mask = parse_periods(spec, start, end)
    assert mask.dtype == bool
    assert mask.tolist() == expected


def test_none_and_blank_specs_are_never_applicable():
    assert not parse_periods(None, 1, 3).any()
    assert not parse_periods("   ", 1, 3).any()


def test_mask_is_read_only():
    mask = parse_periods("1-2", 1, 4)
    with pytest.raises(ValueError):
        mask[3] = True


@pytest.mark.parametrize("spec", ["a", "1-", "-3", "1--3", "1,,2", "1.5", "3-1", "1;2"])
def test_malformed_specs(spec):
    with pytest.raises(PeriodSyntaxError):
        parse_periods(spec, 1, 10)


@pytest.mark.parametrize("spec", ["0", "11", "5-11", "0-3"])
def test_out_of_range_specs(spec):
    with pytest.raises(PeriodOutOfRangeError):
        parse_periods(spec, 1, 10)


def test_start_after_end():
    with pytest.raises(PeriodOutOfRangeError):
        parse_periods("1", 5, 4)


def test_period_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_periods("x", 1, 2)
    with pytest.raises(PeriodSpecError):
        parse_periods("9", 1, 2)


@pytest.mark.parametrize("spec", ["1-4,7", "3", "1,3,5", "2-3,6-8", ""])
def test_describe_periods_inverts_parse(spec):
    mask = parse_periods(spec, 1, 8)
    assert describe_periods(mask, 1) == spec


def test_describe_periods_offset_start():
    mask = np.array([False, True, True, False, True])
    assert describe_periods(mask, 10) == "11-12,14"


def test_huge_out_of_range_span_rejected_without_expanding():
    began = time.perf_counter()
    with pytest.raises(PeriodOutOfRangeError):
        parse_periods("1-1000000000000", 1, 10)
    assert time.perf_counter() - began < 1.0


def test_wide_valid_range_fills_mask():
    mask = parse_periods("1-100000", 1, 100000)
    assert mask.all()


def test_negative_start_rejected():
    with pytest.raises(PeriodOutOfRangeError, match="non-negative"):
        parse_periods("", -2, 4)
