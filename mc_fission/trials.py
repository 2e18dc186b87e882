"""
Fission Trial Driver
====================

Runs the fission simulator a fixed number of times on one isotope and
collects every identified fragment into a single Product Collection,
together with the prompt-neutron counts.

Unresolved Trials
-----------------
A trial whose split contains an unknown nuclide contributes nothing to
the Product Collection.  It is counted and kept on the result, and the
run continues with the next trial; there is no retry.

Neutron Recording Policy
------------------------
``record_failed_neutrons=True`` (default)
    The neutron count of every attempted trial is recorded.  The count is
    sampled before the fragments are identified, so it exists for
    unresolved trials too.
``record_failed_neutrons=False``
    Only successful trials' neutron counts are recorded, so
    ``len(neutrons) == len(products) // 2``.

Parallel Execution
------------------
With ``n_workers > 1`` the trials are split into contiguous chunks and
run on a ``multiprocessing.Pool``.  Each chunk draws from an independent
generator spawned from ``np.random.SeedSequence(seed)``; the reference
table is built before the pool starts and is pickled to the workers.
Chunks are merged in chunk order, so a given ``(seed, n_workers)`` pair is
reproducible.  Counts do not depend on merge order.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from multiprocessing import Pool
from typing import List, Optional, Tuple

import numpy as np

from .constants import CHARGE_BASIS_TARGET
from .fission import FissionEvent, FissionSimulator, UnresolvedFragment
from .isotope import Isotope, Products
from .reference import ReferenceTable, load_reference_table


# =====================================================================
# Result data class
# =====================================================================
@dataclass
class TrialResult:
    """Everything collected from one batch of fission trials.

    Attributes
    ----------
    isotope : Isotope
        Target isotope.
    n_trials : int
        Trials attempted.
    products : list of Isotope
        Identified fragments, two per successful trial (heavier, lighter).
    neutrons : list of int
        Prompt-neutron counts, per the recording policy.
    unresolved : list of UnresolvedFragment
        Discarded trials.
    wall_time : float
        Wall-clock time of the run [s].
    """

    isotope: Isotope
    n_trials: int
    products: Products = field(default_factory=list)
    neutrons: List[int] = field(default_factory=list)
    unresolved: List[UnresolvedFragment] = field(default_factory=list, repr=False)
    wall_time: float = 0.0

    @property
    def n_successful(self) -> int:
        return len(self.products) // 2

    @property
    def n_unresolved(self) -> int:
        return len(self.unresolved)

    @property
    def success_fraction(self) -> float:
        """Fraction of trials that produced two identified fragments."""
        if self.n_trials == 0:
            return 0.0
        return self.n_successful / self.n_trials

    def summary(self) -> str:
        """Return a formatted summary of the run."""
        mean_nu = float(np.mean(self.neutrons)) if self.neutrons else 0.0
        lines = [
            "",
            "=" * 70,
            f"  Fission Trials: {self.isotope.name}",
            "=" * 70,
            "",
            f"  Trials          = {self.n_trials:,}",
            f"  Successful      = {self.n_successful:,} "
            f"({self.success_fraction * 100:.2f}%)",
            f"  Unresolved      = {self.n_unresolved:,}",
            f"  Fragments       = {len(self.products):,}",
            f"  Mean nu         = {mean_nu:.4f}",
            "",
            f"  Wall time       = {self.wall_time:.2f} s",
            f"  Trials/sec      = {self.n_trials / max(self.wall_time, 0.01):,.0f}",
            "=" * 70,
        ]
        return "\n".join(lines)

    def print_summary(self) -> None:
        print(self.summary())


# =====================================================================
# Serial loop
# =====================================================================
def _run_serial(
    simulator: FissionSimulator,
    isotope: Isotope,
    trials: int,
    record_failed_neutrons: bool,
    verbose: bool = False,
) -> Tuple[Products, List[int], List[UnresolvedFragment]]:
    """Run *trials* fissions sequentially on one simulator."""
    products: Products = []
    neutrons: List[int] = []
    unresolved: List[UnresolvedFragment] = []

    report_every = max(1, trials // 10)

    for i in range(trials):
        outcome = simulator.simulate(isotope)

        if isinstance(outcome, FissionEvent):
            products.append(outcome.heavier)
            products.append(outcome.lighter)
            neutrons.append(outcome.neutrons)
        else:
            unresolved.append(outcome)
            if record_failed_neutrons:
                neutrons.append(outcome.neutrons)

        if verbose and ((i + 1) % report_every == 0 or i + 1 == trials):
            print(f"  Trial {i + 1:>8,}/{trials:,}  "
                  f"fragments={len(products):>8,}  "
                  f"unresolved={len(unresolved):>7,}")

    return products, neutrons, unresolved


def _run_chunk(args):
    """Pool worker: run one chunk with its own generator."""
    table, isotope, n, seed_seq, record_failed_neutrons, charge_basis = args
    rng = np.random.default_rng(seed_seq)
    simulator = FissionSimulator(table, rng, charge_basis=charge_basis)
    return _run_serial(simulator, isotope, n, record_failed_neutrons)


def _chunk_sizes(trials: int, n_chunks: int) -> List[int]:
    """Split *trials* into *n_chunks* near-equal contiguous sizes."""
    base, extra = divmod(trials, n_chunks)
    return [base + (1 if i < extra else 0) for i in range(n_chunks)]


# =====================================================================
# Driver
# =====================================================================
class TrialDriver:
    """Repeated-fission driver.

    Parameters
    ----------
    table : ReferenceTable
        Known isotopes, loaded once by the caller.
    seed : int or None
        Random seed.  None uses non-deterministic seeding.
    n_workers : int
        Worker processes (1 = run in-process, sequentially).
    record_failed_neutrons : bool
        Neutron recording policy (see module docstring).
    charge_basis : {"target", "compound"}
        Passed to the simulator.
    """

    def __init__(
        self,
        table: ReferenceTable,
        seed: Optional[int] = None,
        n_workers: int = 1,
        record_failed_neutrons: bool = True,
        charge_basis: str = CHARGE_BASIS_TARGET,
    ):
        if n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {n_workers}")
        self.table = table
        self.seed = seed
        self.n_workers = n_workers
        self.record_failed_neutrons = record_failed_neutrons
        self.charge_basis = charge_basis
        self._seed_seq = np.random.SeedSequence(seed)
        # Validates charge_basis up front; reused for serial runs
        self._simulator = FissionSimulator(
            table, np.random.default_rng(self._seed_seq), charge_basis=charge_basis
        )

    def run(self, isotope: Isotope, trials: int, verbose: bool = False) -> TrialResult:
        """Simulate *trials* fissions of *isotope*.

        Raises
        ------
        ValueError
            If *trials* is negative.
        """
        if trials < 0:
            raise ValueError(f"trials must be non-negative, got {trials}")

        t_start = time.perf_counter()
        if verbose:
            print(f"\n  Simulating {trials:,} fissions of {isotope.name} "
                  f"({self.n_workers} worker(s))")

        if self.n_workers == 1 or trials < self.n_workers:
            products, neutrons, unresolved = _run_serial(
                self._simulator, isotope, trials,
                self.record_failed_neutrons, verbose,
            )
        else:
            products, neutrons, unresolved = self._run_parallel(isotope, trials)

        result = TrialResult(
            isotope=isotope,
            n_trials=trials,
            products=products,
            neutrons=neutrons,
            unresolved=unresolved,
            wall_time=time.perf_counter() - t_start,
        )
        if verbose:
            result.print_summary()
        return result

    def _run_parallel(
        self, isotope: Isotope, trials: int
    ) -> Tuple[Products, List[int], List[UnresolvedFragment]]:
        sizes = _chunk_sizes(trials, self.n_workers)
        child_seeds = self._seed_seq.spawn(self.n_workers)
        work_items = [
            (self.table, isotope, n, ss, self.record_failed_neutrons, self.charge_basis)
            for n, ss in zip(sizes, child_seeds)
        ]

        with Pool(self.n_workers) as pool:
            chunks = pool.map(_run_chunk, work_items)

        products: Products = []
        neutrons: List[int] = []
        unresolved: List[UnresolvedFragment] = []
        for p, n, u in chunks:
            products.extend(p)
            neutrons.extend(n)
            unresolved.extend(u)
        return products, neutrons, unresolved


def run_trials(
    isotope: Isotope,
    trials: int,
    table: Optional[ReferenceTable] = None,
    seed: Optional[int] = None,
    **kwargs,
) -> Tuple[Products, List[int]]:
    """Simulate *trials* fissions and return ``(products, neutrons)``.

    Loads the bundled reference table when *table* is not given.  Extra
    keyword arguments go to :class:`TrialDriver`.
    """
    if table is None:
        table = load_reference_table()
    result = TrialDriver(table, seed=seed, **kwargs).run(isotope, trials)
    return result.products, result.neutrons
