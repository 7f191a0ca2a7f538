"""
geometry/validation.py - Offset grid invariant checks

Each check returns a list of human-readable issues; validate_grid()
raises GeometryValidationError carrying all of them. Checks run before
any numerical work and never repair the input.
"""

from __future__ import annotations
from typing import List

import numpy as np

from hydrostab.errors import GeometryValidationError

# Cap on individually reported grid cells
MAX_REPORTED_CELLS = 10


def validate_positions(values: np.ndarray, label: str, axis: str) -> List[str]:
    """
    Check a station (x) or waterline (z) position vector.

    Positions must be present, finite, non-negative and strictly
    increasing with index.
    """
    issues: List[str] = []

    if values.ndim != 1:
        return [f"{label} positions must be a 1-D sequence, got shape {values.shape}"]

    if values.size == 0:
        return [f"At least one {label.lower()} is required"]

    if not np.all(np.isfinite(values)):
        bad = [int(i) for i in np.flatnonzero(~np.isfinite(values))[:MAX_REPORTED_CELLS]]
        issues.append(f"{label} {axis} values must be finite (indices {bad})")
        return issues

    for i in np.flatnonzero(values < 0)[:MAX_REPORTED_CELLS]:
        issues.append(f"{label} {axis} values must be non-negative. Found {values[i]} at index {int(i)}")

    steps = np.diff(values)
    for i in np.flatnonzero(steps <= 0)[:MAX_REPORTED_CELLS]:
        issues.append(
            f"{label} {axis} values must be strictly increasing. "
            f"Found {values[i]} >= {values[i + 1]} at index {int(i) + 1}"
        )

    return issues


def validate_stations(stations_x: np.ndarray) -> List[str]:
    """Check station longitudinal positions."""
    return validate_positions(stations_x, "Station", "X")


def validate_waterlines(waterlines_z: np.ndarray) -> List[str]:
    """Check waterline heights above keel."""
    return validate_positions(waterlines_z, "Waterline", "Z")


def validate_offsets(offsets: np.ndarray, n_stations: int, n_waterlines: int) -> List[str]:
    """
    Check the half-breadth grid.

    Missing cells are encoded as NaN by the record builder, so a NaN is
    reported as a missing offset rather than a bad value.
    """
    issues: List[str] = []

    if offsets.shape != (n_stations, n_waterlines):
        return [
            f"Offset grid shape {offsets.shape} does not match "
            f"{n_stations} stations x {n_waterlines} waterlines"
        ]

    missing = np.argwhere(np.isnan(offsets))
    for s, w in missing[:MAX_REPORTED_CELLS]:
        issues.append(f"Missing offset at station {int(s)}, waterline {int(w)}")
    if len(missing) > MAX_REPORTED_CELLS:
        issues.append(f"... {len(missing) - MAX_REPORTED_CELLS} more missing offsets")

    infinite = np.argwhere(np.isinf(offsets))
    for s, w in infinite[:MAX_REPORTED_CELLS]:
        issues.append(f"Half-breadth must be finite at station {int(s)}, waterline {int(w)}")

    with np.errstate(invalid="ignore"):
        negative = np.argwhere(offsets < 0)
    for s, w in negative[:MAX_REPORTED_CELLS]:
        issues.append(
            f"Half-breadth must be non-negative at station {int(s)}, waterline {int(w)}. "
            f"Found {offsets[s, w]}"
        )

    return issues


def collect_issues(stations_x: np.ndarray, waterlines_z: np.ndarray, offsets: np.ndarray) -> List[str]:
    """All invariant violations of a grid."""
    issues = validate_stations(stations_x)
    issues.extend(validate_waterlines(waterlines_z))
    if stations_x.ndim == 1 and waterlines_z.ndim == 1:
        issues.extend(validate_offsets(offsets, stations_x.size, waterlines_z.size))
    return issues


def validate_grid(stations_x: np.ndarray, waterlines_z: np.ndarray, offsets: np.ndarray) -> None:
    """
    Validate a dense offset grid.

    Raises:
        GeometryValidationError: If any invariant is violated
    """
    issues = collect_issues(stations_x, waterlines_z, offsets)
    if issues:
        raise GeometryValidationError(issues)
