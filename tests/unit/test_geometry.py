"""
Unit tests for hydrostab/geometry/

Tests HullGeometry construction, invariant checks, Loadcase and the
template hulls.
"""

import pytest
import numpy as np

from hydrostab.errors import GeometryError, GeometryValidationError
from hydrostab.geometry.model import HullGeometry, Loadcase, Offset, Station, Waterline
from hydrostab.geometry.templates import (
    barge_reference,
    rectangular_barge,
    wigley_hull,
    wigley_reference,
)
from hydrostab.geometry.validation import MAX_REPORTED_CELLS, collect_issues


def _records(n_stations=3, n_waterlines=2, half_breadth=1.0):
    stations = [Station(i, 10.0 * i) for i in range(n_stations)]
    waterlines = [Waterline(j, 1.0 * j) for j in range(n_waterlines)]
    offsets = [
        Offset(i, j, half_breadth)
        for i in range(n_stations) for j in range(n_waterlines)
    ]
    return stations, waterlines, offsets


class TestHullGeometry:
    """Test HullGeometry construction."""

    def test_from_arrays(self):
        hull = HullGeometry.from_arrays([0.0, 5.0, 10.0], [0.0, 1.0], np.ones((3, 2)))
        assert hull.n_stations == 3
        assert hull.n_waterlines == 2
        assert hull.max_draft == 1.0

    def test_default_lpp_and_beam(self):
        hull = HullGeometry.from_arrays([2.0, 5.0, 12.0], [0.0, 1.0], [[1.0, 2.0], [1.5, 3.0], [0.0, 0.5]])
        assert hull.lpp == pytest.approx(10.0)
        assert hull.beam == pytest.approx(6.0)

    def test_explicit_lpp_and_beam(self):
        hull = HullGeometry.from_arrays([0.0, 10.0], [0.0, 1.0], np.ones((2, 2)), lpp=9.5, beam=2.2)
        assert hull.lpp == 9.5
        assert hull.beam == 2.2

    def test_non_positive_lpp_rejected(self):
        with pytest.raises(GeometryValidationError, match="Lpp"):
            HullGeometry.from_arrays([0.0, 10.0], [0.0, 1.0], np.ones((2, 2)), lpp=0.0)

    def test_arrays_are_read_only_copies(self):
        source = np.ones((2, 2))
        hull = HullGeometry.from_arrays([0.0, 10.0], [0.0, 1.0], source)
        source[0, 0] = 99.0
        assert hull.offsets[0, 0] == 1.0
        with pytest.raises(ValueError):
            hull.offsets[0, 0] = 5.0
        with pytest.raises(ValueError):
            hull.stations_x[0] = 5.0

    def test_from_records(self):
        stations, waterlines, offsets = _records()
        hull = HullGeometry.from_records(stations, waterlines, offsets, name="Box")
        assert hull.name == "Box"
        assert hull.offsets.shape == (3, 2)
        assert list(hull.stations_x) == [0.0, 10.0, 20.0]
        assert hull.stations[2] == Station(2, 20.0)
        assert hull.waterlines[1] == Waterline(1, 1.0)

    def test_from_records_unordered_input(self):
        stations, waterlines, offsets = _records()
        hull = HullGeometry.from_records(reversed(stations), reversed(waterlines), reversed(offsets))
        assert list(hull.stations_x) == [0.0, 10.0, 20.0]

    def test_iter_offsets_round_trip(self):
        stations, waterlines, offsets = _records(half_breadth=2.5)
        hull = HullGeometry.from_records(stations, waterlines, offsets)
        assert list(hull.iter_offsets()) == offsets

    def test_to_dict(self):
        hull = rectangular_barge(10.0, 4.0, 2.0)
        data = hull.to_dict()
        assert data["lpp"] == 10.0
        assert data["beam"] == 4.0
        assert len(data["offsets"]) == 5


class TestGeometryValidation:
    """Test invariant checks."""

    def test_missing_offset(self):
        stations, waterlines, offsets = _records()
        with pytest.raises(GeometryValidationError) as exc_info:
            HullGeometry.from_records(stations, waterlines, offsets[:-1])
        assert "Missing offset at station 2, waterline 1" in exc_info.value.issues

    def test_duplicate_offset(self):
        stations, waterlines, offsets = _records()
        with pytest.raises(GeometryValidationError, match="Duplicate offset"):
            HullGeometry.from_records(stations, waterlines, offsets + [offsets[0]])

    def test_unknown_index(self):
        stations, waterlines, offsets = _records()
        with pytest.raises(GeometryValidationError, match="unknown station"):
            HullGeometry.from_records(stations, waterlines, offsets + [Offset(7, 0, 1.0)])

    def test_duplicate_station_index(self):
        stations, waterlines, offsets = _records()
        stations[2] = Station(1, 20.0)
        with pytest.raises(GeometryValidationError, match="Duplicate station indices"):
            HullGeometry.from_records(stations, waterlines, offsets)

    def test_non_increasing_stations(self):
        with pytest.raises(GeometryValidationError, match="strictly increasing"):
            HullGeometry.from_arrays([0.0, 10.0, 10.0], [0.0, 1.0], np.ones((3, 2)))

    def test_non_increasing_waterlines(self):
        with pytest.raises(GeometryValidationError, match="Waterline Z"):
            HullGeometry.from_arrays([0.0, 10.0], [1.0, 0.5], np.ones((2, 2)))

    def test_negative_position(self):
        with pytest.raises(GeometryValidationError, match="non-negative"):
            HullGeometry.from_arrays([-1.0, 10.0], [0.0, 1.0], np.ones((2, 2)))

    def test_negative_half_breadth(self):
        offsets = np.ones((2, 2))
        offsets[1, 0] = -0.5
        with pytest.raises(GeometryValidationError, match="Half-breadth must be non-negative"):
            HullGeometry.from_arrays([0.0, 10.0], [0.0, 1.0], offsets)

    def test_empty_stations(self):
        with pytest.raises(GeometryError):
            HullGeometry.from_arrays([], [0.0, 1.0], np.ones((0, 2)))

    def test_shape_mismatch(self):
        with pytest.raises(GeometryValidationError, match="shape"):
            HullGeometry.from_arrays([0.0, 10.0], [0.0, 1.0], np.ones((3, 2)))

    def test_all_issues_collected(self):
        offsets = np.ones((2, 2))
        offsets[0, 0] = -1.0
        issues = collect_issues(np.array([0.0, 0.0]), np.array([0.0, 1.0]), offsets)
        assert len(issues) == 2

    def test_missing_cells_capped(self):
        offsets = np.full((20, 2), np.nan)
        issues = collect_issues(np.arange(20.0), np.array([0.0, 1.0]), offsets)
        missing = [i for i in issues if i.startswith("Missing offset")]
        assert len(missing) == MAX_REPORTED_CELLS
        assert issues[MAX_REPORTED_CELLS] == "... 30 more missing offsets"


class TestLoadcase:
    """Test Loadcase invariants."""

    def test_defaults(self):
        lc = Loadcase()
        assert lc.rho == 1025.0
        assert lc.kg is None
        assert not lc.has_kg

    def test_invalid_density(self):
        with pytest.raises(ValueError, match="density"):
            Loadcase(rho=0.0)
        with pytest.raises(ValueError):
            Loadcase(rho=-1000.0)

    def test_negative_kg(self):
        with pytest.raises(ValueError, match="KG"):
            Loadcase(kg=-1.0)


class TestTemplates:
    """Test the benchmark hull generators."""

    def test_barge_grid(self):
        hull = rectangular_barge(100.0, 20.0, 10.0)
        assert hull.n_stations == 5
        assert hull.n_waterlines == 3
        assert np.all(hull.offsets == 10.0)

    def test_barge_reference(self):
        ref = barge_reference(100.0, 20.0, 5.0)
        assert ref.volume_m3 == pytest.approx(10000.0)
        assert ref.displacement_kg == pytest.approx(10250000.0)
        assert ref.bmt_m == pytest.approx(20.0 ** 2 / 12.0 / 5.0)

    def test_wigley_closed_at_keel_and_ends(self):
        hull = wigley_hull()
        assert np.allclose(hull.offsets[:, 0], 0.0)
        assert np.allclose(hull.offsets[0, :], 0.0)
        assert np.allclose(hull.offsets[-1, :], 0.0)
        assert hull.offsets[10, -1] == pytest.approx(5.0)

    def test_wigley_reference_coefficients(self):
        ref = wigley_reference(100.0, 10.0, 6.25)
        assert ref.cb == pytest.approx(0.444, rel=0.01)
        assert ref.cp == pytest.approx(ref.cb / ref.cm)

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            rectangular_barge(length=-1.0)
        with pytest.raises(ValueError):
            wigley_hull(num_stations=2)
