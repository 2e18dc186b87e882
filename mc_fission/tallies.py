"""
Fission Product Tallies
=======================

Aggregate views over a Product Collection.  All functions are pure: they
recompute from the full collection on every call and never mutate it.

- **count_symbols**: occurrences per element symbol.
- **count_isotope_groups**: occurrences per isotope, grouped by element.
- **count_probabilities**: share of each element in percent.
- **count_neutrons**: occurrences per prompt-neutron multiplicity.
"""

from collections import Counter
from typing import Dict, Iterable

from .isotope import Isotope

SymbolCounts = Dict[str, int]
IsotopeGroups = Dict[str, Dict[str, int]]
SymbolProbabilities = Dict[str, float]


def count_symbols(products: Iterable[Isotope]) -> SymbolCounts:
    """Count how many times each chemical element occurs."""
    return dict(Counter(prod.symbol for prod in products))


def count_isotope_groups(products: Iterable[Isotope]) -> IsotopeGroups:
    """Count each isotope, grouped by element symbol.

    Returns
    -------
    dict
        ``{symbol: {"symbol-A": count, ...}, ...}``
    """
    groups: IsotopeGroups = {}
    for prod in products:
        by_name = groups.setdefault(prod.symbol, {})
        by_name[prod.name] = by_name.get(prod.name, 0) + 1
    return groups


def count_probabilities(products: Iterable[Isotope]) -> SymbolProbabilities:
    """Occurrence share of each element, in percent.

    Returns an empty mapping when there are no products.
    """
    counts = count_symbols(products)
    total = sum(counts.values())
    if total == 0:
        return {}
    return {sym: 100.0 * c / total for sym, c in counts.items()}


def count_neutrons(neutrons: Iterable[int]) -> Dict[int, int]:
    """Count occurrences of each prompt-neutron multiplicity."""
    return dict(sorted(Counter(int(n) for n in neutrons).items()))
