"""
Shared fixtures for the fission simulator tests.
"""

import numpy as np
import pytest

from mc_fission.reference import ReferenceTable, load_reference_table


@pytest.fixture(scope="session")
def table():
    """Bundled reference table, loaded once for the whole session."""
    return load_reference_table()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def target_only_table():
    """A table that knows the targets but no possible fragment."""
    return ReferenceTable.from_records([
        {"symbol": "U", "atomic_number": 92, "mass_number": 233},
        {"symbol": "U", "atomic_number": 92, "mass_number": 235},
        {"symbol": "Pu", "atomic_number": 94, "mass_number": 239},
    ])


@pytest.fixture
def heavy_only_table(table):
    """Bundled table with every nuclide of A < 118 removed.

    For U-235 the heavier fragment always has A >= 118 and the lighter
    one A <= 117, so no split can fully resolve.
    """
    return ReferenceTable.from_records(
        r for r in table.records() if r["mass_number"] >= 118
    )
