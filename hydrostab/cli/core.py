"""
cli/core.py - Core CLI infrastructure

Output formatting, logging setup and template hull construction shared
by the sub-commands.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
import argparse
import json
import logging
import sys

from hydrostab.geometry.model import HullGeometry
from hydrostab.geometry.templates import TEMPLATES

logger = logging.getLogger(__name__)


class OutputFormat(Enum):
    """Output format options."""
    TEXT = "text"
    JSON = "json"


@dataclass
class CommandResult:
    """Result of a CLI command execution."""

    success: bool = True
    message: str = ""
    data: Any = None
    error: Optional[Dict[str, Any]] = None
    exit_code: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "error": self.error,
        }


def format_output(result: CommandResult, fmt: OutputFormat) -> str:
    """Format command result for display."""
    if fmt == OutputFormat.JSON:
        return json.dumps(result.to_dict(), indent=2, default=str)

    if not result.success:
        error = result.error or {}
        text = f"Error: {error.get('message', result.message)}"
        if error.get("recovery_hint"):
            text += f"\nHint: {error['recovery_hint']}"
        return text

    output = result.message
    if isinstance(result.data, dict):
        output += _format_mapping(result.data, indent=2)
    elif result.data is not None:
        output += f"\n{result.data}"
    return output


def _format_mapping(data: Dict[str, Any], indent: int) -> str:
    pad = " " * indent
    lines = []
    for key, value in data.items():
        if isinstance(value, dict):
            lines.append(f"\n{pad}{key}:")
            lines.append(_format_mapping(value, indent + 2))
        elif isinstance(value, list) and value and isinstance(value[0], dict):
            lines.append(f"\n{pad}{key}:")
            for row in value:
                lines.append(f"\n{pad}  " + ", ".join(f"{k}={v}" for k, v in row.items()))
        else:
            lines.append(f"\n{pad}{key}: {value}")
    return "".join(lines)


def setup_logging(level: str = "WARNING") -> None:
    """Configure console logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_hull(args: argparse.Namespace) -> HullGeometry:
    """Template hull from --hull and its dimension flags."""
    generator, _ = TEMPLATES[args.hull]
    kwargs: Dict[str, Any] = {}
    if args.length is not None:
        kwargs["length"] = args.length
    if args.beam is not None:
        kwargs["beam"] = args.beam
    if args.depth is not None:
        kwargs["depth" if args.hull == "barge" else "draft"] = args.depth
    if args.stations is not None:
        kwargs["num_stations"] = args.stations
    if args.waterlines is not None:
        kwargs["num_waterlines"] = args.waterlines

    hull = generator(**kwargs)
    logger.debug("Built %s hull: %s", args.hull, hull.name)
    return hull


def default_draft(hull: HullGeometry, hull_type: str) -> float:
    """Barge floats at half depth; Wigley at its design (top) waterline."""
    if hull_type == "barge":
        return hull.max_draft / 2.0
    return hull.max_draft
