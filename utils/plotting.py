"""
Fission Simulator - Plotting Utilities
Bar and donut charts of fission product tallies.
"""
import os

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

import config

plt.rcParams['font.size'] = 11
plt.rcParams['figure.dpi'] = config.CHART_DPI
plt.rcParams['axes.grid'] = True
plt.rcParams['grid.alpha'] = 0.3
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 13
plt.rcParams['legend.fontsize'] = 10

# Color palette (colorblind-safe)
COLORS = {
    'primary': '#2196F3',
    'secondary': '#FF9800',
    'danger': '#F44336',
    'success': '#4CAF50',
    'info': '#00BCD4',
    'dark': '#37474F',
    'neutron': '#9C27B0',
}


def save_figure(fig, name, output_dir, tight=True, verbose=False):
    """Save figure as PNG into *output_dir*.

    Args:
        fig: matplotlib Figure object
        name: Base filename (without extension)
        output_dir: Target directory (created if missing)
        tight: Apply tight_layout before saving (default True)
        verbose: Print the saved path

    Returns:
        str: Path to saved file
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f'{name}.png')
    if tight:
        fig.tight_layout()
    fig.savefig(path, dpi=config.CHART_DPI, bbox_inches='tight')
    plt.close(fig)
    if verbose:
        print(f"  Figure saved: {path}")
    return path


def _sorted_items(mapping):
    """Items sorted by descending value, ties by label."""
    return sorted(mapping.items(), key=lambda kv: (-kv[1], kv[0]))


def plot_symbol_counts(symbols, output_dir, name=config.PRODUCTS_CHART, verbose=False):
    """Bar chart of fission product counts per element.

    Args:
        symbols: Dict symbol -> count
        output_dir: Target directory
        name: Base filename (default 'products')
        verbose: Print the saved path

    Returns:
        str: Path to saved file
    """
    fig, ax = plt.subplots(figsize=config.PRODUCTS_FIGSIZE)
    items = _sorted_items(symbols)
    labels = [k for k, _ in items]
    values = [v for _, v in items]
    x = np.arange(len(labels))

    ax.bar(x, values, color=COLORS['primary'], width=0.8)
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=90, fontsize=8)
    ax.set_xlabel('Element')
    ax.set_ylabel('Count')
    ax.set_title('Fission products')
    if not items:
        ax.text(0.5, 0.5, 'No products', transform=ax.transAxes,
                ha='center', va='center', color=COLORS['dark'])
    return save_figure(fig, name, output_dir, verbose=verbose)


def plot_probabilities(probabilities, output_dir, name=config.PROBABILITIES_CHART,
                       verbose=False):
    """Donut chart of element occurrence shares.

    Wedge labels read "X (p.ppp)%".

    Args:
        probabilities: Dict symbol -> percent
        output_dir: Target directory
        name: Base filename (default 'probs')
        verbose: Print the saved path

    Returns:
        str: Path to saved file
    """
    fig, ax = plt.subplots(figsize=config.PROBABILITIES_FIGSIZE)
    items = _sorted_items(probabilities)

    if items:
        labels = [f"{sym} ({p:.3f})%" for sym, p in items]
        values = [p for _, p in items]
        cmap = plt.get_cmap('tab20')
        colors = [cmap(i % cmap.N) for i in range(len(values))]
        ax.pie(values, labels=labels, colors=colors, startangle=90,
               counterclock=False, textprops={'fontsize': 7},
               wedgeprops={'width': 0.4, 'edgecolor': 'white'})
    else:
        ax.text(0.5, 0.5, 'No products', transform=ax.transAxes,
                ha='center', va='center', color=COLORS['dark'])
    ax.set_aspect('equal')
    ax.set_title('Probability of occurrence')
    return save_figure(fig, name, output_dir, verbose=verbose)


def plot_isotope_groups(groups, output_dir, subdir=config.GROUP_CHART_DIR, verbose=False):
    """One bar chart per element showing its isotope counts.

    Args:
        groups: Dict symbol -> {isotope name -> count}
        output_dir: Target directory
        subdir: Sub-directory for the per-element charts (default 'charts')
        verbose: Print each saved path

    Returns:
        list of str: Paths to saved files, one per element
    """
    chart_dir = os.path.join(output_dir, subdir)
    paths = []
    for symbol in sorted(groups):
        isotopes = groups[symbol]
        # Order by mass number, not by name string
        names = sorted(isotopes, key=lambda n: int(n.rsplit('-', 1)[1]))
        values = [isotopes[n] for n in names]

        fig, ax = plt.subplots(figsize=config.GROUP_FIGSIZE)
        ax.bar(np.arange(len(names)), values, color=COLORS['secondary'])
        ax.set_xticks(np.arange(len(names)))
        ax.set_xticklabels(names, rotation=45, ha='right', fontsize=8)
        ax.set_ylabel('Count')
        ax.set_title(symbol)
        paths.append(save_figure(fig, symbol, chart_dir, verbose=verbose))
    return paths


def plot_mass_yield(yields, output_dir, name='mass_yield', verbose=False):
    """Fragment mass-yield curve (fragments per mass number).

    Args:
        yields: Dict mass number -> count
        output_dir: Target directory
        name: Base filename (default 'mass_yield')
        verbose: Print the saved path

    Returns:
        str: Path to saved file
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    if yields:
        a = np.array(sorted(yields))
        total = float(sum(yields.values()))
        y = np.array([yields[k] for k in a]) / total * 100.0
        ax.bar(a, y, width=1.0, color=COLORS['neutron'], alpha=0.8)
    ax.set_xlabel('Mass number A')
    ax.set_ylabel('Fragment yield (%)')
    ax.set_title('Fission fragment mass yield')
    return save_figure(fig, name, output_dir, verbose=verbose)
