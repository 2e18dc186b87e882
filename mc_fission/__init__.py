"""
Stochastic Fission Product Simulator
====================================

A Monte Carlo model of neutron-induced fission.  A fissile nucleus
absorbs one neutron and splits into two fragments plus 1-3 prompt
neutrons, with charge and nucleon number conserved.  Fragments are
identified against a bundled table of known isotopes; repeated trials
are aggregated into per-element counts, per-isotope counts and element
shares.

The mass/charge split is a simplified heuristic, not a fission-yield
evaluation.

Modules
-------
constants
    Neutron multiplicity table, induction convention, data paths.
isotope
    Isotope value type and the fissile catalogue (U-233, U-235, Pu-239).
reference
    Immutable (Z, A) -> symbol reference table and its JSON loader.
sampler
    Weighted prompt-neutron multiplicity sampler.
fission
    Single fission event simulator with fragment resolution.
trials
    Repeated-trial driver (serial or process pool).
tallies
    Pure aggregate views over the collected fragments.
analysis
    Confidence intervals, neutron statistics, mass yield.
"""

from .isotope import Isotope, Products, FISSILES, fissile, fragment, random_fissile, u233, u235, pu239
from .reference import ReferenceTable, ReferenceLoadError, load_reference_table
from .sampler import NeutronSampler
from .fission import (
    FissionEvent,
    FissionSimulator,
    UnresolvedFragment,
    simulate_fission,
)
from .trials import TrialDriver, TrialResult, run_trials
from .tallies import count_symbols, count_isotope_groups, count_probabilities, count_neutrons

__version__ = "0.1.0"
