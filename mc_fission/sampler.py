"""
Prompt-Neutron Multiplicity Sampler
===================================

Draws the number of neutrons released by one fission event from a fixed
discrete distribution (weights 60/30/10 for 1/2/3 neutrons by default).

Each draw is independent; the only state carried between calls is the
underlying ``numpy.random.Generator``.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .constants import NEUTRON_MULTIPLICITIES, NEUTRON_WEIGHTS


class NeutronSampler:
    """Weighted discrete sampler for neutron multiplicity.

    Parameters
    ----------
    rng : np.random.Generator, optional
        Random number generator.  A fresh non-deterministic generator is
        created if omitted.
    values : sequence of int
        Possible neutron counts.
    weights : sequence of float
        Relative weights, same length as *values*.  Normalised internally.
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        values: Sequence[int] = NEUTRON_MULTIPLICITIES,
        weights: Sequence[float] = NEUTRON_WEIGHTS,
    ):
        if len(values) == 0:
            raise ValueError("values must not be empty")
        if len(values) != len(weights):
            raise ValueError(
                f"values ({len(values)}) and weights ({len(weights)}) "
                f"must have the same length"
            )
        w = np.asarray(weights, dtype=np.float64)
        if np.any(w < 0.0):
            raise ValueError(f"weights must be non-negative, got {list(weights)}")
        total = float(np.sum(w))
        if total <= 0.0:
            raise ValueError("weights must have a positive sum")

        self.rng = rng if rng is not None else np.random.default_rng()
        self.values = np.asarray(values, dtype=np.int64)
        self._probs = w / total
        self._cumulative = np.cumsum(self._probs)

    @property
    def probabilities(self) -> np.ndarray:
        """Normalised probability of each value."""
        return self._probs.copy()

    @property
    def mean(self) -> float:
        """Expected neutrons per draw."""
        return float(np.dot(self.values, self._probs))

    def sample(self) -> int:
        """Draw one neutron count."""
        # Inverse-CDF lookup, as for outgoing-group sampling in transport
        xi = self.rng.random()
        idx = int(np.searchsorted(self._cumulative, xi, side="right"))
        idx = min(idx, len(self.values) - 1)
        return int(self.values[idx])

    def sample_many(self, n: int) -> np.ndarray:
        """Draw *n* independent neutron counts at once."""
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        xi = self.rng.random(n)
        idx = np.searchsorted(self._cumulative, xi, side="right")
        idx = np.minimum(idx, len(self.values) - 1)
        return self.values[idx]

    def __repr__(self) -> str:
        pairs = ", ".join(
            f"{v}:{p:.3f}" for v, p in zip(self.values.tolist(), self._probs.tolist())
        )
        return f"NeutronSampler({pairs})"
