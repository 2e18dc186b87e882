"""
Fission Simulator - Markdown Report
Run summary, element shares and neutron statistics as markdown tables.
"""
import os
from datetime import datetime

from mc_fission.analysis import neutron_statistics, probability_intervals
from mc_fission.tallies import count_symbols
from utils.tables import markdown_table


def generate_report(result, path, top=20):
    """Write a markdown report for a completed trial run.

    Args:
        result: mc_fission.trials.TrialResult
        path: Output markdown file (parent directories are created)
        top: Number of elements to list (all if None)

    Returns:
        str: *path*
    """
    intervals = probability_intervals(result.products)
    ranked = sorted(intervals.items(), key=lambda kv: -kv[1]["percent"])
    if top is not None:
        ranked = ranked[:top]
    nstats = neutron_statistics(result.neutrons)
    counts = count_symbols(result.products)

    lines = [
        f"# Fission Product Report: {result.isotope.name}",
        "",
        f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
    ]

    lines.append(markdown_table(
        "Run",
        [
            ["Target", result.isotope.name],
            ["Trials", f"{result.n_trials:,}"],
            ["Successful", f"{result.n_successful:,}"],
            ["Unresolved", f"{result.n_unresolved:,}"],
            ["Success fraction", result.success_fraction],
            ["Wall time [s]", result.wall_time],
        ],
    ))

    lines.append(markdown_table(
        "Element Shares",
        [[sym, counts[sym], v["percent"], v["ci_half"]] for sym, v in ranked],
        headers=["Element", "Count", "Share [%]", "95% CI +/- [%]"],
    ))

    p_val = nstats["p_value"]
    lines.append(markdown_table(
        "Prompt Neutrons",
        [
            ["Recorded", nstats["n"]],
            ["Mean", nstats["mean"]],
            ["Std", nstats["std"]],
            ["Chi-square p-value", "n/a" if p_val is None else p_val],
        ] + [[f"P(nu={v})", f] for v, f in nstats["frequencies"].items()],
    ))

    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write("\n".join(lines) + "\n")
    return path
