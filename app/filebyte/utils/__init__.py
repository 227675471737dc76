"""Utility modules for filebyte.

This module exports commonly used utility functions.
"""

from filebyte.utils.formatting import (
    configure_logging,
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
    set_color,
)
from filebyte.utils.units import SizeUnit, format_size

__all__ = [
    "SizeUnit",
    "configure_logging",
    "console",
    "err_console",
    "format_size",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "set_color",
]
