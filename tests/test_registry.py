"""Tests for seeder selection and phase ordering."""

import pytest

from preiposip.exceptions import UnknownSeederError
from preiposip.seeders.registry import (
    ALL,
    PHASES,
    SEEDERS,
    get_seeder,
    seeder_names,
    select_seeders,
)


def test_seeders_are_in_phase_order():
    phases = [spec.phase for spec in SEEDERS]
    assert phases == sorted(phases)
    assert set(phases) == set(PHASES)


def test_seeder_names_are_unique():
    assert len(seeder_names()) == len(set(seeder_names()))


def test_only_phase_six_is_test_data():
    assert [spec.name for spec in SEEDERS if spec.test_data] == ["investments", "engagement"]
    assert all(spec.phase == 6 for spec in SEEDERS if spec.test_data)


def test_foundation_runs_before_identity_and_catalog():
    names = seeder_names()
    assert names.index("foundation") < names.index("identity") < names.index("catalog")
    assert names.index("communication") < names.index("knowledge-base")
    assert names.index("catalog") < names.index("company-users")
    assert names.index("communication") < names.index("investments") < names.index("engagement")
    assert names[-1] == "engagement"


@pytest.mark.parametrize("names", [None, [], [ALL], ["plans", ALL]])
def test_select_all(names):
    assert select_seeders(names) == SEEDERS


def test_select_keeps_phase_order_and_collapses_duplicates():
    selected = select_seeders(["plans", "foundation", "plans"])
    assert [spec.name for spec in selected] == ["foundation", "plans"]


def test_get_seeder():
    spec = get_seeder("knowledge-base")
    assert spec.phase == 5
    assert "kb_articles" in spec.tables


def test_unknown_seeder_raises():
    with pytest.raises(UnknownSeederError) as exc_info:
        select_seeders(["foundation", "nope"])
    assert exc_info.value.name == "nope"
    assert exc_info.value.__cause__ is None


def test_every_seeder_declares_tables():
    for spec in SEEDERS:
        assert spec.tables, spec.name
        assert callable(spec.run)
