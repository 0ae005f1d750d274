# tests/test_packaging.py
from importlib.metadata import PackageNotFoundError, requires

import pytest


def _requirements():
    try:
        return requires("fare-estimator") or []
    except PackageNotFoundError:
        pytest.skip("fare-estimator is not installed")


def test_zone_database_ships_with_the_package():
    base = [r for r in _requirements() if "extra ==" not in r]
    assert any(r.startswith("tzdata") for r in base)


def test_numpy_only_needed_by_the_simulator():
    reqs = _requirements()
    base = [r for r in reqs if "extra ==" not in r]
    assert not any(r.startswith("numpy") for r in base)
    assert any(r.startswith("numpy") and "sim" in r for r in reqs)
