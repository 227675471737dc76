"""Size units and human-readable size formatting.

Sizes use binary (1024-based) scaling. ``AUTO`` picks the largest unit
that keeps the displayed value at or above 1.
"""

from enum import Enum


class SizeUnit(str, Enum):
    """Unit used to render byte counts."""

    AUTO = "auto"
    BYTES = "b"
    KB = "kb"
    MB = "mb"
    GB = "gb"
    TB = "tb"

    @classmethod
    def parse(cls, value: str) -> "SizeUnit":
        """Parse a unit name, accepting long forms such as ``megabytes``.

        Raises:
            ValueError: If the name is not a known unit.
        """
        key = value.strip().lower()
        unit = _ALIASES.get(key)
        if unit is None:
            msg = (
                f"Invalid size unit: {value!r} "
                "(expected auto, b/bytes, kb/kilobytes, mb/megabytes, gb/gigabytes, tb/terabytes)"
            )
            raise ValueError(msg)
        return unit

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def factor(self) -> int:
        return 1024 ** _EXPONENTS[self]


_ALIASES: dict[str, SizeUnit] = {
    "auto": SizeUnit.AUTO,
    "b": SizeUnit.BYTES,
    "bytes": SizeUnit.BYTES,
    "kb": SizeUnit.KB,
    "kilobytes": SizeUnit.KB,
    "mb": SizeUnit.MB,
    "megabytes": SizeUnit.MB,
    "gb": SizeUnit.GB,
    "gigabytes": SizeUnit.GB,
    "tb": SizeUnit.TB,
    "terabytes": SizeUnit.TB,
}

_LABELS: dict[SizeUnit, str] = {
    SizeUnit.AUTO: "",
    SizeUnit.BYTES: "B",
    SizeUnit.KB: "KB",
    SizeUnit.MB: "MB",
    SizeUnit.GB: "GB",
    SizeUnit.TB: "TB",
}

_EXPONENTS: dict[SizeUnit, int] = {
    SizeUnit.AUTO: 0,
    SizeUnit.BYTES: 0,
    SizeUnit.KB: 1,
    SizeUnit.MB: 2,
    SizeUnit.GB: 3,
    SizeUnit.TB: 4,
}

# Largest first, so auto selection stops at the first unit that fits
_AUTO_ORDER: tuple[SizeUnit, ...] = (
    SizeUnit.TB,
    SizeUnit.GB,
    SizeUnit.MB,
    SizeUnit.KB,
)

_NEXT_UNIT: dict[SizeUnit, SizeUnit] = {
    SizeUnit.KB: SizeUnit.MB,
    SizeUnit.MB: SizeUnit.GB,
    SizeUnit.GB: SizeUnit.TB,
}

DEFAULT_DECIMALS = 2


def pick_unit(size_bytes: int) -> SizeUnit:
    """Return the largest unit in which ``size_bytes`` renders as >= 1."""
    for unit in _AUTO_ORDER:
        if size_bytes >= unit.factor:
            return unit
    return SizeUnit.BYTES


def format_size(
    size_bytes: int,
    unit: SizeUnit = SizeUnit.AUTO,
    decimals: int = DEFAULT_DECIMALS,
) -> str:
    """Format a byte count in the given unit.

    Fixed units divide by the matching power of 1024. The value is
    rounded to ``decimals`` places with trailing zeros removed, so
    1024 bytes in ``AUTO`` renders as ``"1 KB"`` and 1536 as ``"1.5 KB"``.
    ``AUTO`` moves up a unit when rounding reaches 1024, so
    1048575 bytes renders as ``"1 MB"``. A non-zero size too small to
    show in a fixed unit renders as ``"<0.01 KB"``.

    Args:
        size_bytes: Byte count (must be non-negative).
        unit: Target unit, or ``AUTO`` to choose one.
        decimals: Maximum number of decimal places.

    Returns:
        Formatted size such as ``"12.34 MB"``.
    """
    if size_bytes < 0:
        msg = f"Size cannot be negative, got {size_bytes}"
        raise ValueError(msg)

    auto = unit == SizeUnit.AUTO
    if auto:
        unit = pick_unit(size_bytes)

    if unit == SizeUnit.BYTES:
        return f"{size_bytes} B"

    value = round(size_bytes / unit.factor, decimals)
    if auto and value >= 1024 and unit in _NEXT_UNIT:
        unit = _NEXT_UNIT[unit]
        value = round(size_bytes / unit.factor, decimals)

    if value == 0 and size_bytes > 0:
        return f"<{_trim(10.0**-decimals, decimals)} {unit.label}"
    return f"{_trim(value, decimals)} {unit.label}"


def _trim(value: float, decimals: int) -> str:
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
