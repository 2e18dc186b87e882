"""
Fission Simulator - Table Utilities
Value formatting, markdown tables for the run report, and console
tally tables for the aggregation step.
"""


def format_value(value, unit=''):
    """Format a numerical value with appropriate precision.

    Integers are printed exactly with thousands separators.  Floats pick
    their precision from magnitude:
      >= 1e6   -> scientific notation with 3 significant figures
      >= 100   -> 1 decimal place
      >= 1     -> 3 decimal places
      >= 0.001 -> 4 decimal places
      0        -> "0"
      < 0.001  -> scientific notation with 3 significant figures

    Args:
        value: Number or string to format
        unit: Optional unit string appended after the value

    Returns:
        str: Formatted value string (unit appended if provided)
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return f"{value} {unit}".strip()
    if isinstance(value, int):
        return f"{value:,} {unit}".strip()
    if value == 0:
        return f"0 {unit}".strip()
    if abs(value) >= 1e6:
        return f"{value:.3e} {unit}".strip()
    elif abs(value) >= 100:
        return f"{value:.1f} {unit}".strip()
    elif abs(value) >= 1:
        return f"{value:.3f} {unit}".strip()
    elif abs(value) >= 0.001:
        return f"{value:.4f} {unit}".strip()
    else:
        return f"{value:.3e} {unit}".strip()


def markdown_table(title, rows, headers=None):
    """Generate a markdown table string.

    Args:
        title: Table title (rendered as ### heading)
        rows: List of row sequences.  Numbers are formatted with
              format_value; everything else via str().
        headers: Column header list (default: Quantity | Value)

    Returns:
        str: Markdown table including title heading
    """
    if headers is None:
        headers = ['Quantity', 'Value']

    lines = [f"\n### {title}\n"]
    lines.append('| ' + ' | '.join(headers) + ' |')
    lines.append('|' + '|'.join(['---'] * len(headers)) + '|')

    for row in rows:
        formatted = []
        for item in row:
            if isinstance(item, (int, float)):
                formatted.append(format_value(item))
            else:
                formatted.append(str(item))
        # Pad short rows to match header count
        while len(formatted) < len(headers):
            formatted.append('')
        lines.append('| ' + ' | '.join(formatted) + ' |')

    return '\n'.join(lines)


def print_tally_table(title, rows, unit=''):
    """Print label/value rows under a dashed title, with a bar per row.

    Bars are scaled to the largest value so the console shows the shape
    of a tally at a glance.

    Args:
        title: Table title string
        rows: List of (label, value) pairs, printed in the given order
        unit: Unit string shown after every value
    """
    rule = '-' * max(60, len(title) + 4)
    print(f"\n{rule}\n  {title}\n{rule}")
    if not rows:
        print("  (none)\n")
        return
    width = max(len(str(label)) for label, _ in rows) + 2
    vals = [format_value(v, unit) for _, v in rows]
    vwidth = max(len(v) for v in vals) + 2
    peak = max(v for _, v in rows) or 1
    for (label, value), text in zip(rows, vals):
        bar = '#' * int(round(30 * value / peak))
        print(f"  {str(label):<{width}} {text:>{vwidth}}  {bar}")
    print()


def ranked_rows(mapping, top=None):
    """Rows (key, value) sorted by descending value, then key.

    Args:
        mapping: Dict of label -> number
        top: Keep only the first *top* rows (all if None)

    Returns:
        list of (key, value) tuples
    """
    rows = sorted(mapping.items(), key=lambda kv: (-kv[1], kv[0]))
    if top is not None:
        rows = rows[:top]
    return rows
