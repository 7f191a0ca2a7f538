"""
cli/ - Command Line Interface

Hydrostatics, hydrostatic tables, GZ curves with criteria checks and
benchmarks over the template hulls.
"""

from .core import OutputFormat, CommandResult, format_output, setup_logging
from .commands import build_parser, main

__all__ = [
    "OutputFormat",
    "CommandResult",
    "format_output",
    "setup_logging",
    "build_parser",
    "main",
]
