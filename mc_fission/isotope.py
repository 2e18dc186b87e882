"""
Isotope Value Type and Fissile Catalogue
========================================

An isotope (nuclide) is identified by its atomic number Z (protons) and
mass number A (protons + neutrons).  The chemical symbol is attached once
the (Z, A) pair has been matched against the reference table; freshly
computed fission fragments carry an empty symbol until then.

Fissile Catalogue
-----------------
U-233  (Z=92, A=233)
U-235  (Z=92, A=235)
Pu-239 (Z=94, A=239)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

import numpy as np


@dataclass(frozen=True)
class Isotope:
    """A nuclide identifier.

    Attributes
    ----------
    symbol : str
        Chemical element symbol (e.g. ``"U"``).  Empty if unresolved.
    atomic_number : int
        Proton count Z (>= 0).
    mass_number : int
        Nucleon count A (> 0, A >= Z).
    """

    symbol: str
    atomic_number: int
    mass_number: int

    def __post_init__(self):
        if self.atomic_number < 0:
            raise ValueError(
                f"atomic_number must be non-negative, got {self.atomic_number}"
            )
        if self.mass_number <= 0:
            raise ValueError(
                f"mass_number must be positive, got {self.mass_number}"
            )
        if self.mass_number < self.atomic_number:
            raise ValueError(
                f"mass_number ({self.mass_number}) must be >= "
                f"atomic_number ({self.atomic_number})"
            )

    @property
    def name(self) -> str:
        """Display name, symbol + mass number (e.g. ``"Xe-140"``)."""
        return f"{self.symbol}-{self.mass_number}"

    @property
    def resolved(self) -> bool:
        """True once a chemical symbol has been attached."""
        return self.symbol != ""

    @property
    def neutron_number(self) -> int:
        """Neutron count N = A - Z."""
        return self.mass_number - self.atomic_number

    def with_symbol(self, symbol: str) -> Isotope:
        """Return a copy carrying *symbol*."""
        return replace(self, symbol=symbol)

    def to_dict(self) -> Dict:
        return {
            "symbol": self.symbol,
            "atomic_number": self.atomic_number,
            "mass_number": self.mass_number,
        }

    def __str__(self) -> str:
        if self.resolved:
            return self.name
        return f"(Z={self.atomic_number}, A={self.mass_number})"


Products = List[Isotope]
"""Ordered collection of fission fragments (heavier, lighter, heavier, ...)."""


def fragment(atomic_number: int, mass_number: int) -> Isotope:
    """Build an unresolved fission fragment (no symbol yet)."""
    return Isotope("", atomic_number, mass_number)


# =============================================================================
# FISSILE CATALOGUE
# =============================================================================

def u233() -> Isotope:
    """Uranium-233."""
    return Isotope("U", 92, 233)


def u235() -> Isotope:
    """Uranium-235."""
    return Isotope("U", 92, 235)


def pu239() -> Isotope:
    """Plutonium-239."""
    return Isotope("Pu", 94, 239)


FISSILES = (u233(), u235(), pu239())
"""Fixed set of known-good simulation inputs."""


def fissile(name: str) -> Isotope:
    """Look up a fissile isotope by display name (``"U-235"``).

    Raises
    ------
    KeyError
        If *name* is not in the fissile catalogue.
    """
    for iso in FISSILES:
        if iso.name.lower() == name.strip().lower():
            return iso
    known = ", ".join(iso.name for iso in FISSILES)
    raise KeyError(f"Unknown fissile isotope '{name}'. Known: {known}")


def random_fissile(rng: Optional[np.random.Generator] = None) -> Isotope:
    """Pick a fissile isotope uniformly at random."""
    if rng is None:
        rng = np.random.default_rng()
    return FISSILES[int(rng.integers(len(FISSILES)))]
