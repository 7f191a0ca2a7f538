"""
HYDROSTAB Test Configuration and Fixtures

Template hulls and loadcases shared by unit and integration tests.
"""

import pytest

from hydrostab.core.config import set_config
from hydrostab.geometry.model import Loadcase
from hydrostab.geometry.templates import rectangular_barge, wigley_hull


# Barge used throughout: L=100, B=20, depth 10, floating at T=5
BARGE_LENGTH = 100.0
BARGE_BEAM = 20.0
BARGE_DEPTH = 10.0
BARGE_DRAFT = 5.0

# Wigley benchmark: L=100, B=10, T=6.25
WIGLEY_LENGTH = 100.0
WIGLEY_BEAM = 10.0
WIGLEY_DRAFT = 6.25


@pytest.fixture(autouse=True)
def reset_config():
    """Each test reads configuration from a clean environment."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def barge():
    """Rectangular barge, 5 stations x 3 waterlines."""
    return rectangular_barge(BARGE_LENGTH, BARGE_BEAM, BARGE_DEPTH)


@pytest.fixture
def fine_barge():
    """Rectangular barge on a finer, even-count grid."""
    return rectangular_barge(BARGE_LENGTH, BARGE_BEAM, BARGE_DEPTH, num_stations=10, num_waterlines=8)


@pytest.fixture
def wigley():
    """Wigley parabolic hull, 21 stations x 13 waterlines."""
    return wigley_hull(WIGLEY_LENGTH, WIGLEY_BEAM, WIGLEY_DRAFT)


@pytest.fixture
def seawater():
    """Seawater loadcase without KG."""
    return Loadcase(rho=1025.0, name="Seawater")


@pytest.fixture
def low_kg_loadcase():
    """Barge loadcase with a low centre of gravity (GMt ≈ 6.17 m)."""
    return Loadcase(rho=1025.0, kg=3.0, name="Low KG")


@pytest.fixture
def high_kg_loadcase():
    """Barge loadcase with KG above the metacentre (GMt ≈ -2.83 m)."""
    return Loadcase(rho=1025.0, kg=12.0, name="High KG")
