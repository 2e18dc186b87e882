"""
Tests for the fission trial driver.
"""

import pytest

from mc_fission.isotope import pu239, u235
from mc_fission.tallies import count_isotope_groups, count_probabilities, count_symbols
from mc_fission.trials import TrialDriver, TrialResult, _chunk_sizes, run_trials


def test_zero_trials(table):
    products, neutrons = run_trials(u235(), 0, table=table, seed=1)
    assert products == []
    assert neutrons == []
    assert count_symbols(products) == {}
    assert count_isotope_groups(products) == {}
    assert count_probabilities(products) == {}


def test_negative_trials(table):
    with pytest.raises(ValueError):
        TrialDriver(table, seed=1).run(u235(), -1)


def test_u235_end_to_end(table):
    result = TrialDriver(table, seed=42).run(u235(), 10_000)

    assert isinstance(result, TrialResult)
    assert len(result.products) % 2 == 0
    assert len(result.products) <= 20_000
    assert result.n_successful + result.n_unresolved == 10_000
    assert result.n_successful > 0

    symbols = count_symbols(result.products)
    assert set(symbols) <= table.symbols()
    assert sum(symbols.values()) == len(result.products)

    probs = count_probabilities(result.products)
    assert sum(probs.values()) == pytest.approx(100.0, abs=1e-6)


def test_products_in_heavier_lighter_order(table):
    result = TrialDriver(table, seed=3).run(u235(), 500)
    for heavy, light in zip(result.products[0::2], result.products[1::2]):
        assert heavy.mass_number > light.mass_number
        assert heavy.atomic_number + light.atomic_number == 92


def test_neutrons_recorded_for_every_attempt(table):
    result = TrialDriver(table, seed=5, record_failed_neutrons=True).run(u235(), 2000)
    assert len(result.neutrons) == 2000
    assert set(result.neutrons) <= {1, 2, 3}


def test_neutrons_recorded_for_successes_only(table):
    result = TrialDriver(table, seed=5, record_failed_neutrons=False).run(u235(), 2000)
    assert len(result.neutrons) == result.n_successful
    assert len(result.neutrons) == len(result.products) // 2


def test_unresolved_trials_add_no_products(target_only_table):
    result = TrialDriver(target_only_table, seed=9).run(u235(), 300)
    assert result.products == []
    assert result.n_unresolved == 300
    assert result.success_fraction == 0.0
    assert len(result.neutrons) == 300
    assert count_probabilities(result.products) == {}


def test_seed_reproducibility(table):
    a = TrialDriver(table, seed=2024).run(pu239(), 1000)
    b = TrialDriver(table, seed=2024).run(pu239(), 1000)
    assert a.products == b.products
    assert a.neutrons == b.neutrons


def test_run_trials_returns_pair(table):
    products, neutrons = run_trials(u235(), 100, table=table, seed=6)
    assert len(neutrons) == 100
    assert len(products) % 2 == 0


def test_parallel_run(table):
    kwargs = dict(seed=7, n_workers=2)
    a = TrialDriver(table, **kwargs).run(u235(), 400)
    b = TrialDriver(table, **kwargs).run(u235(), 400)

    assert a.n_successful + a.n_unresolved == 400
    assert len(a.neutrons) == 400
    assert a.products == b.products
    assert count_symbols(a.products) == count_symbols(b.products)
    assert sum(count_probabilities(a.products).values()) == pytest.approx(100.0)


def test_fewer_trials_than_workers(table):
    result = TrialDriver(table, seed=1, n_workers=4).run(u235(), 3)
    assert result.n_trials == 3
    assert len(result.neutrons) == 3


def test_invalid_worker_count(table):
    with pytest.raises(ValueError):
        TrialDriver(table, n_workers=0)


def test_chunk_sizes():
    assert _chunk_sizes(10, 3) == [4, 3, 3]
    assert _chunk_sizes(4, 4) == [1, 1, 1, 1]
    assert sum(_chunk_sizes(10_001, 7)) == 10_001


def test_summary(table, capsys):
    result = TrialDriver(table, seed=1).run(u235(), 50, verbose=True)
    out = capsys.readouterr().out
    assert "U-235" in out
    assert "Trials" in result.summary()
