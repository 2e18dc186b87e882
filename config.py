"""
Central Configuration for the Fission Product Simulator

Parameters are grouped in tiers:
  Tier 1: Run Defaults (what to simulate)
  Tier 2: Model Options (neutron policy, charge apportionment)
  Tier 3: Output (file names, chart geometry)

Usage:
    from config import build_settings, print_summary
    settings = build_settings(trials=50000, seed=7)
    print_summary(settings)
"""

from dataclasses import dataclass, fields
from typing import Optional

from mc_fission.constants import CHARGE_BASES, CHARGE_BASIS_TARGET
from mc_fission.isotope import fissile


# =============================================================================
# TIER 1: RUN DEFAULTS
# =============================================================================

DEFAULT_ISOTOPE = "U-235"          # fissile target
DEFAULT_TRIALS = 10000             # fission events per run
DEFAULT_SEED = None                # None = non-deterministic
DEFAULT_WORKERS = 1                # 1 = sequential, in-process

# =============================================================================
# TIER 2: MODEL OPTIONS
# =============================================================================

RECORD_FAILED_NEUTRONS = True      # record nu for unresolved trials too
CHARGE_BASIS = CHARGE_BASIS_TARGET # "target" (Z*amu//A) or "compound"

# =============================================================================
# TIER 3: OUTPUT
# =============================================================================

OUTPUT_DIR = "results"
SYMBOLS_FILE = "symbols-count.json"
ISOTOPES_FILE = "isotopes-count.json"
PROBABILITIES_FILE = "probs.json"
REPORT_FILE = "report.md"

PRODUCTS_CHART = "products"        # bar chart, element counts
PROBABILITIES_CHART = "probs"      # donut chart, element shares
GROUP_CHART_DIR = "charts"         # one bar chart per element

CHART_DPI = 150
PRODUCTS_FIGSIZE = (25.6, 10.8)    # in (2560 x 1080 px at 100 dpi)
GROUP_FIGSIZE = (7.2, 5.12)        # in (720 x 512 px at 100 dpi)
PROBABILITIES_FIGSIZE = (32.0, 18.0)


# =============================================================================
# RUN SETTINGS
# =============================================================================

@dataclass
class RunSettings:
    """Resolved settings for one simulation run."""

    isotope: str = DEFAULT_ISOTOPE
    trials: int = DEFAULT_TRIALS
    seed: Optional[int] = DEFAULT_SEED
    workers: int = DEFAULT_WORKERS
    record_failed_neutrons: bool = RECORD_FAILED_NEUTRONS
    charge_basis: str = CHARGE_BASIS
    output_dir: str = OUTPUT_DIR
    charts: bool = True
    report: bool = True


def build_settings(**overrides):
    """Build RunSettings from the tier defaults plus *overrides*.

    Overrides whose value is None keep the default, except ``seed``
    where None is a meaningful value.

    Raises:
        ValueError: on unknown keys or invalid values.
        KeyError: if the isotope is not in the fissile catalogue.
    """
    known = {f.name for f in fields(RunSettings)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

    values = {k: v for k, v in overrides.items() if v is not None or k == "seed"}
    settings = RunSettings(**values)

    fissile(settings.isotope)
    if settings.trials < 0:
        raise ValueError(f"trials must be non-negative, got {settings.trials}")
    if settings.workers < 1:
        raise ValueError(f"workers must be >= 1, got {settings.workers}")
    if settings.charge_basis not in CHARGE_BASES:
        raise ValueError(
            f"charge_basis must be one of {CHARGE_BASES}, got '{settings.charge_basis}'"
        )
    return settings


# =============================================================================
# SUMMARY OUTPUT
# =============================================================================

def print_summary(settings=None):
    """Print a formatted summary of the run settings.

    Args:
        settings: RunSettings instance (defaults if not provided)
    """
    if settings is None:
        settings = build_settings()

    seed = "random" if settings.seed is None else settings.seed
    print("=" * 72)
    print("     FISSION PRODUCT SIMULATION - RUN SETTINGS")
    print("=" * 72)
    print(f"  Target isotope:         {settings.isotope:>10}")
    print(f"  Trials:                 {settings.trials:10,d}")
    print(f"  Seed:                   {seed!s:>10}")
    print(f"  Workers:                {settings.workers:10d}")
    print(f"  Record failed nu:       {settings.record_failed_neutrons!s:>10}")
    print(f"  Charge basis:           {settings.charge_basis:>10}")
    print(f"  Output directory:       {settings.output_dir}")
    print("=" * 72)


if __name__ == "__main__":
    print_summary()
