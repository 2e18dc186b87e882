"""
Post-Processing Analysis of Fission Trials
==========================================

Statistical summaries of a completed trial run:

  - Confidence intervals on element shares (binomial, normal approx.)
  - Prompt-neutron statistics and a chi-square goodness-of-fit test
    against the sampling distribution
  - Mass-yield distribution (fragments per mass number)

References
----------
- Lux & Koblinger, "Monte Carlo Particle Transport Methods," 1991
"""

from __future__ import annotations

from typing import Dict, Iterable, Sequence

import numpy as np
from scipy import stats

from .constants import NEUTRON_MULTIPLICITIES, NEUTRON_WEIGHTS
from .isotope import Isotope
from .tallies import count_neutrons, count_symbols


# =====================================================================
# Element shares
# =====================================================================
def probability_intervals(
    products: Sequence[Isotope],
    confidence: float = 0.95,
) -> Dict[str, Dict[str, float]]:
    """Element shares with normal-approximation confidence intervals.

    For an element seen k times in n fragments:
        p      = k / n
        sigma  = sqrt(p (1 - p) / n)
        CI     = p +/- z * sigma,   z = Phi^-1(0.5 + confidence / 2)

    Parameters
    ----------
    products : sequence of Isotope
        Product Collection.
    confidence : float
        Confidence level in (0, 1).

    Returns
    -------
    dict
        ``{symbol: {"percent", "std", "ci_half"}}`` in percent units.
        Empty if there are no products.
    """
    if not 0.0 < confidence < 1.0:
        raise ValueError(f"confidence must be in (0, 1), got {confidence}")

    counts = count_symbols(products)
    n = sum(counts.values())
    if n == 0:
        return {}

    z_val = stats.norm.ppf(0.5 + confidence / 2.0)
    out = {}
    for sym, k in counts.items():
        p = k / n
        std = np.sqrt(p * (1.0 - p) / n)
        out[sym] = {
            "percent": 100.0 * p,
            "std": 100.0 * float(std),
            "ci_half": 100.0 * float(z_val * std),
        }
    return out


# =====================================================================
# Neutron multiplicity
# =====================================================================
def neutron_statistics(
    neutrons: Iterable[int],
    values: Sequence[int] = NEUTRON_MULTIPLICITIES,
    weights: Sequence[float] = NEUTRON_WEIGHTS,
) -> Dict:
    """Summary statistics of recorded prompt-neutron counts.

    The chi-square test compares observed counts per multiplicity with
    the expected counts from *weights*.  A small p-value means the
    recorded counts are unlikely under the sampling distribution.

    Returns
    -------
    dict
        'n', 'mean', 'std', 'frequencies' {value: fraction},
        'chi2', 'p_value' (None when there are no samples).
    """
    arr = np.asarray(list(neutrons), dtype=np.int64)
    n = int(arr.size)
    if n == 0:
        return {
            "n": 0, "mean": 0.0, "std": 0.0,
            "frequencies": {int(v): 0.0 for v in values},
            "chi2": None, "p_value": None,
        }

    counts = count_neutrons(arr.tolist())
    observed = np.array([counts.get(int(v), 0) for v in values], dtype=np.float64)
    probs = np.asarray(weights, dtype=np.float64)
    probs = probs / probs.sum()
    expected = probs * observed.sum()

    # Multiplicities outside *values* make the test meaningless
    if observed.sum() != n:
        chi2, p_value = None, None
    else:
        res = stats.chisquare(observed, expected)
        chi2, p_value = float(res.statistic), float(res.pvalue)

    return {
        "n": n,
        "mean": float(np.mean(arr)),
        "std": float(np.std(arr, ddof=1)) if n > 1 else 0.0,
        "frequencies": {int(v): float(o / n) for v, o in zip(values, observed)},
        "chi2": chi2,
        "p_value": p_value,
    }


# =====================================================================
# Fragment distributions
# =====================================================================
def mass_yield(products: Iterable[Isotope]) -> Dict[int, int]:
    """Fragments per mass number, sorted by A."""
    out: Dict[int, int] = {}
    for prod in products:
        out[prod.mass_number] = out.get(prod.mass_number, 0) + 1
    return dict(sorted(out.items()))
