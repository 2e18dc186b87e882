"""
Reference Isotope Table
=======================

Immutable lookup from (atomic number, mass number) to element symbol,
built once from the bundled list of known isotopes and shared read-only
by every simulation call.

The table is an explicit value: the composition root (CLI, test fixture,
batch driver) calls :func:`load_reference_table` once and hands the
result to the simulator.  There is no module-level cache.

Dataset Format
--------------
A JSON list of records::

    [{"symbol": "Xe", "atomic_number": 54, "mass_number": 140}, ...]
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .constants import ISOTOPES_FILE
from .isotope import Isotope

REQUIRED_FIELDS = ("symbol", "atomic_number", "mass_number")


class ReferenceLoadError(RuntimeError):
    """The reference dataset could not be read or parsed."""


class ReferenceTable:
    """Read-only (Z, A) -> symbol lookup.

    Parameters
    ----------
    entries : mapping of {(int, int): str}
        Symbol keyed by (atomic_number, mass_number).  Copied on
        construction; later changes to *entries* are not seen.

    Raises
    ------
    ReferenceLoadError
        If a key breaks 0 <= Z <= A or has A <= 0.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[Tuple[int, int], str]):
        entries = dict(entries)
        for (z, a), symbol in entries.items():
            if z < 0 or a <= 0 or a < z:
                raise ReferenceLoadError(
                    f"{symbol} is not a valid nuclide: Z={z}, A={a}"
                )
        self._entries = MappingProxyType(entries)

    @classmethod
    def from_records(cls, records: Iterable[Dict]) -> ReferenceTable:
        """Build a table from ``{symbol, atomic_number, mass_number}`` records.

        Later records overwrite earlier ones with the same (Z, A).

        Raises
        ------
        ReferenceLoadError
            If a record is malformed or breaks 0 <= Z <= A, A > 0.
        """
        entries: Dict[Tuple[int, int], str] = {}
        for i, rec in enumerate(records):
            if not isinstance(rec, dict):
                raise ReferenceLoadError(f"Record {i} is not an object: {rec!r}")
            missing = [f for f in REQUIRED_FIELDS if f not in rec]
            if missing:
                raise ReferenceLoadError(
                    f"Record {i} is missing field(s): {', '.join(missing)}"
                )
            symbol = rec["symbol"]
            z = rec["atomic_number"]
            a = rec["mass_number"]
            if not isinstance(symbol, str) or not symbol:
                raise ReferenceLoadError(f"Record {i} has an invalid symbol: {symbol!r}")
            # bool is an int subclass; reject it explicitly
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in (z, a)):
                raise ReferenceLoadError(
                    f"Record {i} ({symbol}) has non-integer Z/A: {z!r}, {a!r}"
                )
            entries[(z, a)] = symbol
        return cls(entries)

    # ---- Lookup ----
    def lookup(self, atomic_number: int, mass_number: int) -> Optional[str]:
        """Return the symbol for (Z, A), or None if the nuclide is unknown."""
        return self._entries.get((atomic_number, mass_number))

    def resolve(self, isotope: Isotope) -> Isotope:
        """Return a copy of *isotope* with its symbol looked up.

        The symbol is empty if (Z, A) is not in the table.
        """
        symbol = self.lookup(isotope.atomic_number, isotope.mass_number)
        return isotope.with_symbol(symbol or "")

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ReferenceTable({len(self)} isotopes, {len(self.symbols())} elements)"

    # ---- Pickling (MappingProxyType is not picklable) ----
    def __getstate__(self):
        return dict(self._entries)

    def __setstate__(self, state):
        self._entries = MappingProxyType(dict(state))

    # ---- Views ----
    @property
    def entries(self) -> Mapping[Tuple[int, int], str]:
        """Read-only view of the underlying mapping."""
        return self._entries

    def symbols(self) -> Set[str]:
        """All element symbols present in the table."""
        return set(self._entries.values())

    def records(self) -> List[Dict]:
        """Table contents as records, sorted by (Z, A)."""
        return [
            {"symbol": sym, "atomic_number": z, "mass_number": a}
            for (z, a), sym in sorted(self._entries.items())
        ]


def load_reference_table(path: Optional[str] = None) -> ReferenceTable:
    """Load the reference isotope table from JSON.

    Parameters
    ----------
    path : str, optional
        Dataset file.  Defaults to the bundled ``data/isotopes.json``.

    Returns
    -------
    ReferenceTable

    Raises
    ------
    ReferenceLoadError
        If the file cannot be read, is not valid JSON, is not a list of
        well-formed records, or contains no records.
    """
    if path is None:
        path = ISOTOPES_FILE

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ReferenceLoadError(f"Cannot read reference dataset {path}: {e}") from e
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ReferenceLoadError(f"Invalid JSON in reference dataset {path}: {e}") from e

    if not isinstance(data, list):
        raise ReferenceLoadError(
            f"Reference dataset {path} must be a list, got {type(data).__name__}"
        )

    table = ReferenceTable.from_records(data)
    if len(table) == 0:
        raise ReferenceLoadError(f"Reference dataset {path} contains no isotopes")
    return table
