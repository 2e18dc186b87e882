"""
Fission Simulator - Result Persistence
Writes the aggregate views to JSON files.
"""
import json
import os

import config


def save_json(data, path):
    """Write *data* as indented JSON.

    Keys are written in insertion order, one-space indentation.

    Args:
        data: JSON-serialisable mapping
        path: Output file path (parent directories are created)

    Returns:
        str: *path*
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=1)
        f.write('\n')
    return path


def save_results(symbols, groups, probabilities, output_dir=config.OUTPUT_DIR):
    """Save symbol counts, isotope groups and probabilities.

    Args:
        symbols: Dict symbol -> count
        groups: Dict symbol -> {isotope name -> count}
        probabilities: Dict symbol -> percent
        output_dir: Target directory

    Returns:
        dict: Mapping of view name -> written file path
    """
    os.makedirs(output_dir, exist_ok=True)
    paths = {
        'symbols': save_json(symbols, os.path.join(output_dir, config.SYMBOLS_FILE)),
        'isotopes': save_json(groups, os.path.join(output_dir, config.ISOTOPES_FILE)),
        'probabilities': save_json(
            probabilities, os.path.join(output_dir, config.PROBABILITIES_FILE)
        ),
    }
    return paths


def load_json(path):
    """Read a JSON file written by save_json."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
