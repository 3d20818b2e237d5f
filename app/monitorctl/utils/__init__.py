"""Utility modules for monitorctl.

This module exports commonly used utility functions.
"""

from monitorctl.utils.formatting import (
    console,
    create_directory_table,
    create_mapping_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from monitorctl.utils.log import setup_logging

__all__ = [
    "console",
    "create_directory_table",
    "create_mapping_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "setup_logging",
]
