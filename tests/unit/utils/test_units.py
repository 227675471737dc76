"""Unit tests for size units and formatting."""

import pytest
from filebyte.utils.units import SizeUnit, format_size, pick_unit


class TestSizeUnit:
    """Tests for SizeUnit enum."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("auto", SizeUnit.AUTO),
            ("B", SizeUnit.BYTES),
            ("bytes", SizeUnit.BYTES),
            ("kb", SizeUnit.KB),
            ("Megabytes", SizeUnit.MB),
            (" gb ", SizeUnit.GB),
            ("terabytes", SizeUnit.TB),
        ],
    )
    def test_parse(self, text: str, expected: SizeUnit) -> None:
        """parse accepts short and long names case-insensitively."""
        assert SizeUnit.parse(text) == expected

    def test_parse_invalid(self) -> None:
        """parse rejects unknown names."""
        with pytest.raises(ValueError, match="Invalid size unit"):
            SizeUnit.parse("petabytes")

    def test_factor(self) -> None:
        """Factors are binary powers."""
        assert SizeUnit.BYTES.factor == 1
        assert SizeUnit.KB.factor == 1024
        assert SizeUnit.GB.factor == 1024**3


class TestPickUnit:
    """Tests for pick_unit function."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, SizeUnit.BYTES),
            (1023, SizeUnit.BYTES),
            (1024, SizeUnit.KB),
            (1024**2 - 1, SizeUnit.KB),
            (1024**2, SizeUnit.MB),
            (5 * 1024**4, SizeUnit.TB),
        ],
    )
    def test_boundaries(self, size: int, expected: SizeUnit) -> None:
        """The largest unit keeping the value at or above 1 is chosen."""
        assert pick_unit(size) == expected


class TestFormatSize:
    """Tests for format_size function."""

    def test_auto_kilobyte_boundary(self) -> None:
        """1024 bytes renders as one kilobyte."""
        assert format_size(1024) == "1 KB"

    def test_auto_below_boundary(self) -> None:
        """1023 bytes stays in bytes."""
        assert format_size(1023) == "1023 B"

    def test_auto_rounds_up_to_next_unit(self) -> None:
        """A value that rounds to 1024 moves up to the next unit."""
        assert format_size(1024 * 1024 - 1) == "1 MB"
        assert format_size(1024**3 - 1) == "1 GB"

    def test_auto_largest_unit_does_not_step_up(self) -> None:
        """Terabytes stay terabytes past 1024."""
        assert format_size(2048 * 1024**4) == "2048 TB"

    def test_fixed_unit_keeps_rounded_value(self) -> None:
        """Fixed units never change unit after rounding."""
        assert format_size(1024 * 1024 - 1, SizeUnit.KB) == "1024 KB"

    def test_fixed_unit_below_precision(self) -> None:
        """Non-zero sizes too small for the unit are shown as an upper bound."""
        assert format_size(1, SizeUnit.KB) == "<0.01 KB"
        assert format_size(1, SizeUnit.MB, decimals=0) == "<1 MB"
        assert format_size(0, SizeUnit.KB) == "0 KB"

    def test_fixed_megabyte(self) -> None:
        """1 MiB in MB renders as 1 MB."""
        assert format_size(1_048_576, SizeUnit.MB) == "1 MB"

    def test_fractional(self) -> None:
        """Fractions keep up to two decimals without trailing zeros."""
        assert format_size(1536) == "1.5 KB"
        assert format_size(1234567, SizeUnit.MB) == "1.18 MB"

    def test_fixed_unit_small_value(self) -> None:
        """Fixed units may render values below one."""
        assert format_size(512, SizeUnit.KB) == "0.5 KB"

    def test_zero(self) -> None:
        """Zero renders in bytes."""
        assert format_size(0) == "0 B"

    def test_bytes_unit(self) -> None:
        """The bytes unit renders the exact count."""
        assert format_size(1_048_576, SizeUnit.BYTES) == "1048576 B"

    def test_negative(self) -> None:
        """Negative sizes are rejected."""
        with pytest.raises(ValueError, match="negative"):
            format_size(-1)
