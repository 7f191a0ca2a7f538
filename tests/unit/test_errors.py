"""
Unit tests for hydrostab/errors/taxonomy.py
"""

import pytest

from hydrostab.errors import (
    AngleRangeError,
    CancellationSignal,
    CurveCoverageError,
    DraftOutOfRangeError,
    ErrorCategory,
    FloodingAngleError,
    GeometryError,
    GeometryValidationError,
    HydrostabError,
    MissingKGError,
    StabilityError,
    UndefinedMetacentricHeightError,
    UndefinedQuantityError,
    UnknownMethodError,
    error_response,
)


class TestErrorHierarchy:
    """Test error classes and categories."""

    def test_geometry_errors(self):
        assert issubclass(GeometryValidationError, GeometryError)
        assert issubclass(DraftOutOfRangeError, GeometryError)
        assert GeometryError.category is ErrorCategory.GEOMETRY

    def test_stability_errors(self):
        for cls in (AngleRangeError, UnknownMethodError, MissingKGError,
                    UndefinedMetacentricHeightError, CurveCoverageError, FloodingAngleError):
            assert issubclass(cls, StabilityError)
            assert cls.category is ErrorCategory.STABILITY

    def test_codes_unique(self):
        classes = [GeometryError, GeometryValidationError, DraftOutOfRangeError,
                   UndefinedQuantityError, StabilityError, AngleRangeError,
                   UnknownMethodError, MissingKGError, UndefinedMetacentricHeightError,
                   CurveCoverageError, FloodingAngleError]
        codes = [cls.code for cls in classes]
        assert len(set(codes)) == len(codes)


class TestErrorDetails:
    """Test messages and serialization."""

    def test_validation_error_message(self):
        error = GeometryValidationError(["first issue", "second issue"])
        assert "2 issue(s)" in error.message
        assert "first issue" in error.message
        assert error.issues == ["first issue", "second issue"]
        assert error.details["issue_count"] == 2

    def test_draft_out_of_range(self):
        error = DraftOutOfRangeError(12.0, 10.0)
        assert error.details["draft"] == 12.0
        assert "[GEOM_002]" in str(error)
        assert "Hint:" in str(error)

    def test_to_dict(self):
        data = MissingKGError("Departure").to_dict()
        assert data["code"] == "STAB_003"
        assert data["category"] == "stability"
        assert "Departure" in data["message"]
        assert data["details"]["loadcase"] == "Departure"

    def test_unknown_method_lists_available(self):
        error = UnknownMethodError("FullImmersion", ["WallSided"])
        assert "WallSided" in error.recovery_hint

    def test_error_response(self):
        assert error_response(AngleRangeError(0, 0, 1, "empty"))["error"]["code"] == "STAB_001"
        assert error_response(CancellationSignal())["error"]["retryable"] is True
        with pytest.raises(TypeError):
            error_response(ValueError("plain"))

    def test_base_error_default_message(self):
        error = HydrostabError()
        assert error.message
        assert error.details == {}
