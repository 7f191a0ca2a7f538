"""
Unit tests for hydrostab/physics/curves.py
"""

import pytest

from hydrostab.core.cancellation import CancellationToken
from hydrostab.errors import CancellationSignal, DraftOutOfRangeError
from hydrostab.physics.curves import CURVE_TYPES, CurvesGenerator
from hydrostab.physics.hydrostatics import draft_range


class TestDraftRange:
    """Test draft_range."""

    def test_endpoints_exact(self):
        drafts = draft_range(0.5, 6.25, 7)
        assert len(drafts) == 7
        assert drafts[0] == 0.5
        assert drafts[-1] == 6.25

    def test_invalid(self):
        with pytest.raises(ValueError):
            draft_range(0.0, 5.0, 1)
        with pytest.raises(ValueError):
            draft_range(5.0, 5.0, 3)


class TestHydrostaticCurves:
    """Test CurvesGenerator.generate."""

    def setup_method(self):
        self.generator = CurvesGenerator()

    def test_barge_displacement_linear(self, barge, seawater):
        curve = self.generator.generate_curve(barge, seawater, "displacement", 1.0, 9.0, 5)
        assert [p.x for p in curve.points] == [1.0, 3.0, 5.0, 7.0, 9.0]
        for point in curve.points:
            assert point.y == pytest.approx(1025.0 * 2000.0 * point.x, rel=1e-9)
        assert curve.x_label == "Draft (m)"

    def test_several_curves_share_drafts(self, wigley, seawater):
        curves = self.generator.generate(wigley, seawater, ["KB", "awp", "tpc"], 1.0, 6.0, 6)
        assert set(curves) == {"kb", "awp", "tpc"}
        drafts = [p.x for p in curves["kb"].points]
        assert drafts == [p.x for p in curves["awp"].points]

    def test_undefined_points_skipped(self, barge):
        """Without a loadcase GMt is undefined at every draft."""
        curve = self.generator.generate_curve(barge, None, "gmt", 1.0, 5.0, 3)
        assert curve.points == []
        assert curve.skipped_drafts == [1.0, 3.0, 5.0]

    def test_zero_draft_bmt_skipped(self, barge, seawater):
        curve = self.generator.generate_curve(barge, seawater, "bmt", 0.0, 4.0, 3)
        assert curve.skipped_drafts == [0.0]
        assert len(curve.points) == 2

    def test_unknown_curve_type(self, barge, seawater):
        with pytest.raises(ValueError, match="Unknown curve type"):
            self.generator.generate(barge, seawater, ["freeboard"], 1.0, 5.0, 3)

    def test_draft_range_beyond_hull(self, barge, seawater):
        with pytest.raises(DraftOutOfRangeError):
            self.generator.generate_curve(barge, seawater, "kb", 1.0, 12.0, 3)

    def test_all_types_known(self):
        assert {"displacement", "kb", "lcb", "gmt", "awp", "tpc", "mct"} <= set(CURVE_TYPES)

    def test_to_dict(self, barge, seawater):
        data = self.generator.generate_curve(barge, seawater, "kb", 2.0, 4.0, 2).to_dict()
        assert data["type"] == "kb"
        assert data["points"][0] == {"x": 2.0, "y": 1.0}


class TestBonjeanCurves:
    """Test CurvesGenerator.bonjean_curves."""

    def setup_method(self):
        self.generator = CurvesGenerator()

    def test_barge_sections(self, barge):
        curves = self.generator.bonjean_curves(barge)
        assert len(curves) == barge.n_stations
        for curve in curves:
            assert [p.x for p in curve.points] == [0.0, 5.0, 10.0]
            assert [p.y for p in curve.points] == pytest.approx([0.0, 100.0, 200.0])

    def test_wigley_ends_closed(self, wigley):
        curves = self.generator.bonjean_curves(wigley)
        assert curves[0].points[-1].y == pytest.approx(0.0)
        midship = curves[10]
        assert midship.station_x == pytest.approx(50.0)
        assert midship.points[-1].y == pytest.approx(2.0 / 3.0 * 10.0 * 6.25, rel=1e-9)

    def test_cancelled(self, barge):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(CancellationSignal):
            self.generator.bonjean_curves(barge, cancellation=token)
