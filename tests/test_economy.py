from __future__ import annotations

import pytest

from adventure.domain.economy import as_amount, level_for_stars, level_progress, stars_to_next_level


@pytest.mark.parametrize("stars,level", [(0, 1), (9, 1), (10, 2), (19, 2), (20, 3), (105, 11)])
def test_level_for_stars(stars, level):
    assert level_for_stars(stars) == level


def test_level_helpers():
    assert stars_to_next_level(0) == 10
    assert stars_to_next_level(13) == 7
    assert level_progress(15) == pytest.approx(50.0)
    assert level_progress(20) == 0


def test_defaults_without_user(ledger):
    assert (ledger.level, ledger.total_gems, ledger.total_stars) == (1, 0, 0)
    assert ledger.add_stars(5) is None
    assert ledger.spend_gems(0) is False


async def test_add_stars_level_up(ledger, alice):
    result = ledger.add_stars(9)
    assert result.leveled_up is False and result.new_level == 1

    result = ledger.add_stars(1)
    assert result.leveled_up is True and result.new_level == 2
    assert ledger.total_stars == 10


async def test_add_stars_inside_level(ledger, alice):
    ledger.add_stars(10)
    result = ledger.add_stars(2)
    assert result == (False, 2)


async def test_gems_spend(ledger, alice):
    ledger.add_gems(30)
    assert ledger.total_gems == 30
    assert ledger.can_purchase(30)
    assert not ledger.can_purchase(31)
    assert ledger.spend_gems(31) is False
    assert ledger.total_gems == 30
    assert ledger.spend_gems(20) is True
    assert ledger.total_gems == 10


@pytest.mark.parametrize("value", [2.5, "3", None, True])
def test_as_amount_rejects_non_integers(value):
    with pytest.raises(ValueError):
        as_amount(value)


def test_as_amount_accepts_integral_values():
    assert as_amount(3) == 3
    assert as_amount(3.0) == 3
    assert as_amount(-2) == -2


async def test_fractional_amounts_rejected_everywhere(ledger, alice):
    ledger.add_gems(10)
    with pytest.raises(ValueError):
        ledger.spend_gems(2.5)
    with pytest.raises(ValueError):
        ledger.add_gems(2.5)
    with pytest.raises(ValueError):
        ledger.add_stars(0.5)
    assert (ledger.total_gems, ledger.total_stars) == (10, 0)
