"""
cli/commands.py - Sub-commands and entry point

    hydrostab hydrostatics --hull barge --draft 5
    hydrostab table --hull wigley --min-draft 1 --max-draft 6.25 --points 6
    hydrostab stability --hull barge --draft 5 --kg 3 --max-angle 60
    hydrostab benchmark --format json
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import argparse
import logging

from hydrostab.core.config import get_config
from hydrostab.core.constants import HYDROSTAB_VERSION
from hydrostab.errors import CancellationSignal, HydrostabError, error_response
from hydrostab.geometry.model import Loadcase
from hydrostab.geometry.templates import TEMPLATES
from hydrostab.physics.hydrostatics import HydrostaticsCalculator
from hydrostab.stability.criteria import StabilityCriteriaChecker
from hydrostab.stability.gz_curve import GZCurveCalculator, resolve_method
from hydrostab.stability.requests import (
    HydrostaticsRequest,
    HydrostaticsTableRequest,
    StabilityRequest,
)

from .core import (
    CommandResult,
    OutputFormat,
    build_hull,
    default_draft,
    format_output,
    setup_logging,
)

logger = logging.getLogger(__name__)

# Benchmark tolerances (relative)
BARGE_TOLERANCE = 0.005
WIGLEY_TOLERANCE = 0.02


# =============================================================================
# COMMANDS
# =============================================================================

def _density(args: argparse.Namespace) -> float:
    return args.rho if args.rho is not None else get_config().default_rho_kg_m3


def _loadcase(args: argparse.Namespace) -> Loadcase:
    return Loadcase(rho=_density(args), kg=args.kg)


def cmd_hydrostatics(args: argparse.Namespace) -> CommandResult:
    """Hydrostatics at one draft."""
    hull = build_hull(args)
    request = HydrostaticsRequest(
        draft=args.draft if args.draft is not None else default_draft(hull, args.hull),
        heel_angle_deg=args.heel,
    )

    result = HydrostaticsCalculator().compute_from_request(hull, _loadcase(args), request)
    return CommandResult(
        message=f"Hydrostatics for {hull.name} at draft {result.draft_m:g} m",
        data=result.to_dict(),
    )


def cmd_table(args: argparse.Namespace) -> CommandResult:
    """Hydrostatics over an evenly spaced draft range."""
    hull = build_hull(args)
    request = HydrostaticsTableRequest(
        min_draft=args.min_draft,
        max_draft=args.max_draft if args.max_draft is not None else hull.max_draft,
        points=args.points,
    )

    table = HydrostaticsCalculator().compute_table_from_request(hull, _loadcase(args), request)
    columns = ("draft_m", "volume_m3", "displacement_kg", "kb_m", "lcb_m",
               "bmt_m", "gmt_m", "waterplane_area_m2", "tpc", "cb")
    rows = []
    for row in table:
        values = row.to_dict()
        rows.append({c: values[c] for c in columns})

    return CommandResult(
        message=f"Hydrostatic table for {hull.name}: {len(rows)} drafts",
        data={"rows": rows},
    )


def cmd_stability(args: argparse.Namespace) -> CommandResult:
    """GZ curve and IMO criteria."""
    hull = build_hull(args)
    request = StabilityRequest(
        draft=args.draft if args.draft is not None else default_draft(hull, args.hull),
        min_angle=args.min_angle,
        max_angle=args.max_angle,
        angle_step=args.step,
        method=resolve_method(args.method),
        flooding_angle_deg=args.flooding_angle,
    )

    curve = GZCurveCalculator().compute_from_request(hull, _loadcase(args), request)
    report = StabilityCriteriaChecker().check_from_request(curve, request)

    return CommandResult(
        success=True,
        message=report.summary,
        data={"curve": curve.to_dict(), "criteria": report.to_dict()},
        exit_code=0 if report.all_criteria_passed else 3,
    )


def cmd_benchmark(args: argparse.Namespace) -> CommandResult:
    """Template hulls against their analytical references."""
    calculator = HydrostaticsCalculator()
    rho = _density(args)
    report: Dict[str, Any] = {}
    all_passed = True

    for hull_type, tolerance in (("barge", BARGE_TOLERANCE), ("wigley", WIGLEY_TOLERANCE)):
        generator, reference_fn = TEMPLATES[hull_type]
        hull = generator()
        draft = default_draft(hull, hull_type)
        reference = reference_fn(hull.lpp, hull.beam, draft, rho)
        result = calculator.compute_at_draft(hull, Loadcase(rho=rho), draft)

        checks = {
            "volume_m3": (result.volume_m3, reference.volume_m3),
            "kb_m": (result.kb_m.value, reference.kb_m),
            "lcb_m": (result.lcb_m.value, reference.lcb_m),
            "bmt_m": (result.bmt_m.value, reference.bmt_m),
            "cb": (result.cb.value, reference.cb),
            "cwp": (result.cwp.value, reference.cwp),
        }
        entries = []
        for name, (computed, expected) in checks.items():
            error = abs(computed - expected) / abs(expected)
            passed = error <= tolerance
            all_passed = all_passed and passed
            entries.append({
                "quantity": name,
                "computed": round(computed, 4),
                "reference": round(expected, 4),
                "error_pct": round(100.0 * error, 3),
                "passed": passed,
            })
        report[hull.name] = entries

    return CommandResult(
        message="Benchmark passed" if all_passed else "Benchmark FAILED",
        data=report,
        exit_code=0 if all_passed else 1,
    )


COMMANDS = {
    "hydrostatics": cmd_hydrostatics,
    "table": cmd_table,
    "stability": cmd_stability,
    "benchmark": cmd_benchmark,
}


# =============================================================================
# PARSER
# =============================================================================

def _add_hull_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--hull", choices=sorted(TEMPLATES), default="barge", help="Template hull")
    parser.add_argument("--length", type=float, default=None, help="Hull length (m)")
    parser.add_argument("--beam", type=float, default=None, help="Hull beam (m)")
    parser.add_argument("--depth", type=float, default=None,
                        help="Barge depth or Wigley design draft (m)")
    parser.add_argument("--stations", type=int, default=None, help="Number of stations")
    parser.add_argument("--waterlines", type=int, default=None, help="Number of waterlines")
    parser.add_argument("--rho", type=float, default=None, help="Water density (kg/m³)")
    parser.add_argument("--kg", type=float, default=None, help="Vertical centre of gravity (m)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Hull hydrostatics and intact stability",
        prog="hydrostab",
    )
    parser.add_argument("--version", action="version", version=f"hydrostab {HYDROSTAB_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default from HYDROSTAB_LOG_LEVEL)",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.TEXT.value,
        help="Output format",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    hydro = sub.add_parser("hydrostatics", help="Hydrostatics at one draft")
    _add_hull_arguments(hydro)
    hydro.add_argument("--draft", type=float, default=None, help="Draft (m)")
    hydro.add_argument("--heel", type=float, default=0.0, help="Heel angle for TCB (deg)")

    table = sub.add_parser("table", help="Hydrostatics over a draft range")
    _add_hull_arguments(table)
    table.add_argument("--min-draft", type=float, default=0.0, help="First draft (m)")
    table.add_argument("--max-draft", type=float, default=None, help="Last draft (m)")
    table.add_argument("--points", type=int, default=11, help="Number of drafts")

    stability = sub.add_parser("stability", help="GZ curve and IMO criteria")
    _add_hull_arguments(stability)
    stability.add_argument("--draft", type=float, default=None, help="Draft (m)")
    stability.add_argument("--min-angle", type=float, default=0.0, help="First heel angle (deg)")
    stability.add_argument("--max-angle", type=float, default=60.0, help="Last heel angle (deg)")
    stability.add_argument("--step", type=float, default=1.0, help="Heel increment (deg)")
    stability.add_argument("--method", default="WallSided", help="Righting-arm method")
    stability.add_argument("--flooding-angle", type=float, default=None, help="Angle of flooding (deg)")

    benchmark = sub.add_parser("benchmark", help="Barge and Wigley against analytical values")
    benchmark.add_argument("--rho", type=float, default=None, help="Water density (kg/m³)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Returns:
        Exit code: 0 ok, 1 benchmark failure, 2 invalid input,
        3 stability criteria not met, 130 interrupted
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else (args.log_level or get_config().log_level)
    setup_logging(level)
    fmt = OutputFormat(args.format)

    try:
        result = COMMANDS[args.command](args)
    except (HydrostabError, CancellationSignal) as e:
        logger.debug("Command %s failed: %s", args.command, e)
        result = CommandResult(success=False, error=error_response(e)["error"], exit_code=2)
    except ValueError as e:
        result = CommandResult(success=False, error={"message": str(e)}, exit_code=2)
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130

    print(format_output(result, fmt))
    return result.exit_code
