"""
Constants for the Stochastic Fission Product Simulator
======================================================

Defines the prompt-neutron multiplicity table, the neutron-induction
convention, and the locations of bundled nuclear data.

Neutron Multiplicity
--------------------
The number of prompt neutrons released by a single fission event is drawn
from a fixed discrete distribution:

    nu = 1   with weight 60
    nu = 2   with weight 30
    nu = 3   with weight 10

The weights are normalised at sampling time, giving P = 0.6 / 0.3 / 0.1
and a mean multiplicity of 1.5 neutrons per fission.  This is a modelling
simplification; real U-235 thermal fission has nu ~ 2.43.
"""

import os

import numpy as np

# =============================================================================
# NEUTRON MULTIPLICITY
# =============================================================================

NEUTRON_MULTIPLICITIES = (1, 2, 3)
"""Possible prompt-neutron counts per fission event."""

NEUTRON_WEIGHTS = (60, 30, 10)
"""Relative sampling weights, index-aligned with NEUTRON_MULTIPLICITIES."""

NEUTRON_PROBABILITIES = np.asarray(NEUTRON_WEIGHTS, dtype=np.float64) / sum(NEUTRON_WEIGHTS)
"""Normalised multiplicity probabilities [0.6, 0.3, 0.1]."""

MEAN_MULTIPLICITY = float(np.dot(NEUTRON_MULTIPLICITIES, NEUTRON_PROBABILITIES))
"""Expected neutrons per fission (1.5)."""

# =============================================================================
# NEUTRON INDUCTION
# =============================================================================

INDUCING_NEUTRONS = 1
"""Neutrons absorbed by the target nucleus before it splits.

The compound nucleus has mass number A + INDUCING_NEUTRONS, so a
conserving split satisfies A_heavy + A_light + nu = A + 1.
"""

# =============================================================================
# CHARGE APPORTIONMENT
# =============================================================================

CHARGE_BASIS_TARGET = "target"
"""Split charge by the target mass number: Z_heavy = Z * amu // A."""

CHARGE_BASIS_COMPOUND = "compound"
"""Split charge by the compound mass number, truncating to percent first:
Z_heavy = (Z * ((amu * 100) // (A + 1))) // 100."""

CHARGE_BASES = (CHARGE_BASIS_TARGET, CHARGE_BASIS_COMPOUND)

# =============================================================================
# BUNDLED DATA
# =============================================================================

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data")
"""Directory holding bundled reference data."""

ISOTOPES_FILE = os.path.join(DATA_DIR, "isotopes.json")
"""Reference isotope list: [{symbol, atomic_number, mass_number}, ...]."""
