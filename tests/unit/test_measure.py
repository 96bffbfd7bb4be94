#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_measure.py
"""Unit tests for ordered-list marker measurement."""

import pytest

from styledmark.options import Font, Measurements
from styledmark.renderers.measure import measure_em, ordered_list_indent_step


@pytest.mark.unit
class TestMeasureEm:
    """Tests for em-width measurement with Pillow."""

    def test_requires_font(self):
        with pytest.raises(AssertionError):
            measure_em("12", None)

    def test_width_is_positive(self):
        assert measure_em("123", Font().resolve("large")) > 0

    def test_longer_text_is_wider(self):
        font = Font().resolve("large")
        assert measure_em("1234", font) > measure_em("12", font)

    def test_tabular_digits_have_equal_width(self):
        font = Font().with_monospaced_digits().resolve("large")
        assert measure_em("11", font) == pytest.approx(measure_em("88", font))


@pytest.mark.unit
class TestOrderedListIndentStep:
    """Tests for the ordered-list head indent step."""

    def test_never_below_default_step(self):
        measurements = Measurements()
        assert ordered_list_indent_step(Font(), 1, measurements, "large") >= measurements.head_indent_step

    def test_monotonic_in_highest_number(self):
        measurements = Measurements()
        steps = [ordered_list_indent_step(Font(), n, measurements, "large") for n in (1, 9, 99, 9999, 10**8)]
        assert steps == sorted(steps)

    def test_very_large_numbers_widen_step(self):
        measurements = Measurements()
        assert ordered_list_indent_step(Font(), 10**12, measurements, "large") > measurements.head_indent_step
