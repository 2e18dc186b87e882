"""
Tests for JSON persistence, charts, tables and the markdown report.
"""

import os

import pytest

import config
from mc_fission.isotope import u235
from mc_fission.trials import TrialDriver
from utils.plotting import (
    plot_isotope_groups, plot_mass_yield, plot_probabilities, plot_symbol_counts,
)
from utils.report import generate_report
from utils.results import load_json, save_json, save_results
from utils.tables import format_value, markdown_table, print_tally_table, ranked_rows


@pytest.fixture
def views():
    return {
        'symbols': {"Xe": 2, "Sr": 2, "Ba": 1},
        'groups': {
            "Xe": {"Xe-140": 1, "Xe-139": 1},
            "Sr": {"Sr-94": 2},
            "Ba": {"Ba-141": 1},
        },
        'probabilities': {"Xe": 40.0, "Sr": 40.0, "Ba": 20.0},
    }


def test_save_results_round_trip(views, tmp_path):
    out = str(tmp_path / "results")
    paths = save_results(views['symbols'], views['groups'], views['probabilities'], out)

    assert set(paths) == {'symbols', 'isotopes', 'probabilities'}
    assert os.path.basename(paths['symbols']) == config.SYMBOLS_FILE
    assert os.path.basename(paths['isotopes']) == config.ISOTOPES_FILE
    assert os.path.basename(paths['probabilities']) == config.PROBABILITIES_FILE

    assert load_json(paths['symbols']) == views['symbols']
    assert load_json(paths['isotopes']) == views['groups']
    assert load_json(paths['probabilities']) == views['probabilities']


def test_save_json_format(tmp_path):
    path = save_json({"Xe": 1}, str(tmp_path / "nested" / "x.json"))
    text = open(path, encoding='utf-8').read()
    assert text == '{\n "Xe": 1\n}\n'


def test_save_empty_views(tmp_path):
    paths = save_results({}, {}, {}, str(tmp_path))
    assert load_json(paths['symbols']) == {}


def test_charts_written(views, tmp_path):
    out = str(tmp_path)
    bar = plot_symbol_counts(views['symbols'], out)
    donut = plot_probabilities(views['probabilities'], out)
    groups = plot_isotope_groups(views['groups'], out)
    yields = plot_mass_yield({94: 2, 139: 1, 140: 1, 141: 1}, out)

    assert bar == os.path.join(out, "products.png")
    assert donut == os.path.join(out, "probs.png")
    assert yields == os.path.join(out, "mass_yield.png")
    assert sorted(os.path.basename(p) for p in groups) == ["Ba.png", "Sr.png", "Xe.png"]
    for p in [bar, donut, yields] + groups:
        assert os.path.getsize(p) > 0
    assert all(os.path.dirname(p) == os.path.join(out, "charts") for p in groups)


def test_charts_with_no_products(tmp_path):
    out = str(tmp_path)
    assert os.path.exists(plot_symbol_counts({}, out))
    assert os.path.exists(plot_probabilities({}, out))
    assert os.path.exists(plot_mass_yield({}, out))
    assert plot_isotope_groups({}, out) == []


@pytest.mark.parametrize("value, expected", [
    ("n/a", "n/a"),
    (True, "True"),
    (12345, "12,345"),
    (0.0, "0"),
    (2.5e7, "2.500e+07"),
    (123.456, "123.5"),
    (1.5, "1.500"),
    (0.05, "0.0500"),
    (1e-5, "1.000e-05"),
])
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_value_unit():
    assert format_value(40.0, "%") == "40.000 %"


def test_markdown_table():
    text = markdown_table("Run", [["Trials", 10000], ["Short"]])
    lines = text.strip().splitlines()
    assert lines[0] == "### Run"
    assert "| Quantity | Value |" in lines
    assert "| Trials | 10,000 |" in lines
    assert "| Short |  |" in lines


def test_ranked_rows():
    rows = ranked_rows({"Sr": 40.0, "Ba": 20.0, "Xe": 40.0})
    assert rows == [("Sr", 40.0), ("Xe", 40.0), ("Ba", 20.0)]
    assert ranked_rows({"a": 1, "b": 2}, top=1) == [("b", 2)]


def test_generate_report(table, tmp_path):
    result = TrialDriver(table, seed=12).run(u235(), 300)
    path = generate_report(result, str(tmp_path / "out" / "report.md"))
    text = open(path, encoding='utf-8').read()
    assert text.startswith("# Fission Product Report: U-235")
    assert "### Element Shares" in text
    assert "### Prompt Neutrons" in text
    assert "| Trials | 300 |" in text


def test_print_tally_table(capsys):
    print_tally_table("Prompt neutrons", [("nu = 1", 60), ("nu = 2", 30)], unit="trials")
    out = capsys.readouterr().out
    assert "Prompt neutrons" in out
    assert "60 trials" in out
    assert "#" * 30 in out
    assert "#" * 15 in out.splitlines()[-2]


def test_print_tally_table_empty(capsys):
    print_tally_table("Most frequent elements", [])
    assert "(none)" in capsys.readouterr().out
