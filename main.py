#!/usr/bin/env python3
"""
Stochastic Fission Product Simulator - Master Runner
=====================================================

Simulates repeated neutron-induced fission of one fissile isotope and
writes the aggregated fission-product views.

Analysis sequence:
  [1/5] Reference data  - Load the known-isotope table
  [2/5] Simulation      - Run the fission trials
  [3/5] Aggregation     - Element counts, isotope groups, element shares
  [4/5] Persistence     - JSON files
  [5/5] Reporting       - Charts and markdown report

Usage:
    python main.py
    python main.py --isotope Pu-239 --trials 50000 --seed 42
    python main.py --workers 4 --no-charts
"""

import argparse
import contextlib
import os
import sys
import time
import traceback

from config import build_settings, print_summary
from mc_fission.isotope import fissile, FISSILES
from mc_fission.reference import load_reference_table, ReferenceLoadError
from mc_fission.trials import TrialDriver
from mc_fission.tallies import (
    count_symbols, count_isotope_groups, count_probabilities, count_neutrons,
)
from utils.tables import print_tally_table, ranked_rows


# =============================================================================
# Banner
# =============================================================================

BANNER = r"""
================================================================================

     Stochastic Fission Product Simulator

     Model:     neutron capture -> binary split + 1-3 prompt neutrons
     Targets:   U-233, U-235, Pu-239
     Output:    element counts, isotope groups, element shares

================================================================================
"""


# =============================================================================
# Helper
# =============================================================================

def step_header(step, total, title):
    """Print a progress step header."""
    tag = f"[{step}/{total}]"
    print(f"\n{'=' * 80}")
    print(f"  {tag} {title}")
    print(f"{'=' * 80}")


# =============================================================================
# Step runners
# =============================================================================

def run_simulation(settings, table, verbose=True):
    """[2/5] Simulation: run the fission trials."""
    isotope = fissile(settings.isotope)
    driver = TrialDriver(
        table,
        seed=settings.seed,
        n_workers=settings.workers,
        record_failed_neutrons=settings.record_failed_neutrons,
        charge_basis=settings.charge_basis,
    )
    return driver.run(isotope, settings.trials, verbose=verbose)


def run_aggregation(result):
    """[3/5] Aggregation: compute the three aggregate views."""
    views = {
        'symbols': count_symbols(result.products),
        'groups': count_isotope_groups(result.products),
        'probabilities': count_probabilities(result.products),
        'neutrons': count_neutrons(result.neutrons),
    }

    print_tally_table(
        "Most frequent elements",
        ranked_rows(views['probabilities'], top=10),
        unit="%",
    )
    print_tally_table(
        "Prompt neutrons",
        [(f"nu = {nu}", c) for nu, c in views['neutrons'].items()],
        unit="trials",
    )
    return views


def run_persistence(views, output_dir):
    """[4/5] Persistence: write the JSON files."""
    from utils.results import save_results

    paths = save_results(
        views['symbols'], views['groups'], views['probabilities'], output_dir,
    )
    for p in paths.values():
        print(f"  Results saved: {p}")
    return paths


def run_charts(views, result, output_dir):
    """[5/5a] Charts: bar, donut and per-element PNGs."""
    from utils.plotting import (
        plot_symbol_counts, plot_probabilities, plot_isotope_groups,
        plot_mass_yield,
    )
    from mc_fission.analysis import mass_yield

    paths = [
        plot_symbol_counts(views['symbols'], output_dir, verbose=True),
        plot_probabilities(views['probabilities'], output_dir, verbose=True),
        plot_mass_yield(mass_yield(result.products), output_dir, verbose=True),
    ]
    group_paths = plot_isotope_groups(views['groups'], output_dir)
    print(f"  Element charts saved: {len(group_paths)} file(s)")
    return paths + group_paths


def run_report(result, output_dir):
    """[5/5b] Report: markdown summary with statistics."""
    import config
    from utils.report import generate_report

    path = generate_report(result, os.path.join(output_dir, config.REPORT_FILE))
    print(f"  Report saved: {path}")
    return path


# =============================================================================
# Main
# =============================================================================

def build_parser():
    """Command-line interface definition."""
    names = ", ".join(iso.name for iso in FISSILES)
    parser = argparse.ArgumentParser(
        description='Stochastic fission product simulator',
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        '--isotope', type=str, default=None,
        help=f'Fissile target (default: U-235)\n  one of: {names}'
    )
    parser.add_argument(
        '--trials', type=int, default=None,
        help='Number of fission trials (default: 10000)'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed (default: non-deterministic)'
    )
    parser.add_argument(
        '--workers', type=int, default=None,
        help='Worker processes (default: 1, sequential)'
    )
    parser.add_argument(
        '--charge-basis', type=str, default=None, choices=['target', 'compound'],
        help='Charge split rule:\n'
             '  target   = Z * amu // A (default)\n'
             '  compound = (Z * ((amu * 100) // (A + 1))) // 100'
    )
    parser.add_argument(
        '--successful-neutrons-only', action='store_true',
        help='Record neutron counts of successful trials only'
    )
    parser.add_argument(
        '--output', type=str, default=None,
        help='Output directory (default: results)'
    )
    parser.add_argument('--no-charts', action='store_true', help='Skip PNG charts')
    parser.add_argument('--no-report', action='store_true', help='Skip markdown report')
    parser.add_argument('--quiet', action='store_true', help='Suppress progress output')
    return parser


def main(argv=None):
    """CLI entry point.  Returns the process exit status."""
    args = build_parser().parse_args(argv)

    try:
        settings = build_settings(
            isotope=args.isotope,
            trials=args.trials,
            seed=args.seed,
            workers=args.workers,
            charge_basis=args.charge_basis,
            record_failed_neutrons=False if args.successful_neutrons_only else None,
            output_dir=args.output,
            charts=not args.no_charts,
            report=not args.no_report,
        )
    except (ValueError, KeyError) as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return 2

    if not args.quiet:
        return _run(settings)

    # Errors still go to stderr
    with open(os.devnull, "w") as devnull, contextlib.redirect_stdout(devnull):
        return _run(settings)


def _run(settings):
    print(BANNER)
    print_summary(settings)

    t_start = time.time()
    errors = []
    n_steps = 5

    # ---- [1/5] Reference data ----
    step_header(1, n_steps, "REFERENCE DATA - Known Isotope Table")
    try:
        table = load_reference_table()
    except ReferenceLoadError as e:
        print(f"  FATAL: {e}", file=sys.stderr)
        return 1
    print(f"  Loaded {len(table):,} isotopes of {len(table.symbols())} elements")

    # ---- [2/5] Simulation ----
    step_header(2, n_steps, f"SIMULATION - {settings.trials:,} Fissions of {settings.isotope}")
    result = run_simulation(settings, table)

    # ---- [3/5] Aggregation ----
    step_header(3, n_steps, "AGGREGATION - Counts and Shares")
    views = run_aggregation(result)

    # ---- [4/5] Persistence ----
    step_header(4, n_steps, "PERSISTENCE - JSON Files")
    try:
        run_persistence(views, settings.output_dir)
    except Exception as e:
        print(f"\n  *** PERSISTENCE FAILED: {e} ***", file=sys.stderr)
        traceback.print_exc()
        errors.append(("Persistence", str(e)))

    # ---- [5/5] Reporting ----
    step_header(5, n_steps, "REPORTING - Charts and Report")
    if settings.charts:
        try:
            run_charts(views, result, settings.output_dir)
        except Exception as e:
            print(f"\n  *** CHARTS FAILED: {e} ***", file=sys.stderr)
            traceback.print_exc()
            errors.append(("Charts", str(e)))
    if settings.report:
        try:
            run_report(result, settings.output_dir)
        except Exception as e:
            print(f"\n  *** REPORT FAILED: {e} ***", file=sys.stderr)
            traceback.print_exc()
            errors.append(("Report", str(e)))

    # ---- Final status ----
    t_elapsed = time.time() - t_start
    print(f"\n{'=' * 80}")
    print(f"  SIMULATION COMPLETE")
    print(f"  Successful trials: {result.n_successful:,}/{result.n_trials:,}")
    print(f"  Elapsed time:      {t_elapsed:.1f} s")
    if errors:
        print(f"\n  ERRORS ({len(errors)}):")
        for step, err in errors:
            print(f"    - {step}: {err}")
    else:
        print(f"  Status:            ALL STEPS PASSED")
    print(f"\n  Results saved to: {settings.output_dir}/")
    print(f"{'=' * 80}\n")

    return 1 if errors else 0


def cli():
    """Console-script wrapper."""
    sys.exit(main())


if __name__ == '__main__':
    cli()
