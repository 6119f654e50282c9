"""Tests for the shared seeder helpers.

Covers:
- det_int / det_digits / det_letters — stable across calls, within range
- months_before / months_after — month arithmetic clamped to month end
- slugify — ASCII folding, ampersands, empty input
- first_or_create / update_or_create / require — against an AsyncMock session
"""

import datetime

import pytest

from preiposip.exceptions import MissingDependencyError
from preiposip.models.foundation import Setting
from preiposip.seeders.base import (
    REFERENCE_DATE,
    det_digits,
    det_int,
    det_letters,
    first_or_create,
    months_after,
    months_before,
    require,
    slugify,
    update_or_create,
)

# ---------------------------------------------------------------------------
# Deterministic values
# ---------------------------------------------------------------------------


def test_det_int_is_stable():
    assert det_int("wallet:testuser1", 1, 1000) == det_int("wallet:testuser1", 1, 1000)


def test_det_int_stays_in_range():
    values = [det_int(f"seed:{i}", 25, 200) for i in range(200)]
    assert min(values) >= 25
    assert max(values) <= 200


def test_det_int_differs_by_seed():
    values = {det_int(f"seed:{i}", 0, 10**9) for i in range(20)}
    assert len(values) > 1


def test_det_digits_has_exact_length_and_no_leading_zero():
    for i in range(50):
        digits = det_digits(f"pan:{i}", 8)
        assert len(digits) == 8
        assert digits.isdigit()
        assert digits[0] != "0"


def test_det_letters_are_uppercase():
    letters = det_letters("subscription", 6)
    assert len(letters) == 6
    assert letters.isalpha()
    assert letters.isupper()
    assert letters == det_letters("subscription", 6)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------


def test_months_before_simple():
    assert months_before(REFERENCE_DATE, 3) == datetime.date(2025, 10, 1)


def test_months_before_crosses_year():
    assert months_before(datetime.date(2026, 2, 15), 14) == datetime.date(2024, 12, 15)


def test_months_before_clamps_to_month_end():
    assert months_before(datetime.date(2026, 3, 31), 1) == datetime.date(2026, 2, 28)


def test_months_before_leap_year():
    assert months_before(datetime.date(2024, 3, 31), 1) == datetime.date(2024, 2, 29)


def test_months_after_is_inverse_shift():
    assert months_after(datetime.date(2026, 1, 31), 1) == datetime.date(2026, 2, 28)
    assert months_after(REFERENCE_DATE, 12) == datetime.date(2027, 1, 1)


# ---------------------------------------------------------------------------
# Slugs
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Terms & Conditions", "terms-and-conditions"),
        ("How do I complete KYC?", "how-do-i-complete-kyc"),
        ("  Café Société  ", "cafe-societe"),
        ("Pre-IPO -- Basics", "pre-ipo-basics"),
        ("???", "item"),
    ],
)
def test_slugify(text, expected):
    assert slugify(text) == expected


# ---------------------------------------------------------------------------
# Upserts
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_first_or_create_inserts_when_missing(mock_session):
    instance, created = await first_or_create(
        mock_session, Setting, {"key": "site_name"}, {"value": "PreIPOsip", "type": "string"}
    )
    assert created is True
    assert instance.key == "site_name"
    assert instance.value == "PreIPOsip"
    mock_session.add.assert_called_once_with(instance)
    mock_session.flush.assert_awaited_once()


@pytest.mark.asyncio
async def test_first_or_create_leaves_existing_row_untouched(mock_session, result_of):
    existing = Setting(key="site_name", value="Old", type="string")
    mock_session.execute.return_value = result_of(existing)

    instance, created = await first_or_create(
        mock_session, Setting, {"key": "site_name"}, {"value": "New"}
    )
    assert created is False
    assert instance is existing
    assert instance.value == "Old"
    mock_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_update_or_create_updates_existing_row(mock_session, result_of):
    existing = Setting(key="site_name", value="Old", type="string")
    mock_session.execute.return_value = result_of(existing)

    instance, created = await update_or_create(
        mock_session, Setting, {"key": "site_name"}, {"value": "New"}
    )
    assert created is False
    assert instance is existing
    assert instance.value == "New"
    mock_session.add.assert_not_called()
    mock_session.flush.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_or_create_inserts_when_missing(mock_session):
    instance, created = await update_or_create(
        mock_session, Setting, {"key": "min_investment"}, {"value": "1000", "type": "integer"}
    )
    assert created is True
    assert instance.value == "1000"
    mock_session.add.assert_called_once()


@pytest.mark.asyncio
async def test_require_returns_row(mock_session, result_of):
    existing = Setting(key="site_name", value="PreIPOsip", type="string")
    mock_session.execute.return_value = result_of(existing)
    assert await require(mock_session, Setting, "foundation", key="site_name") is existing


@pytest.mark.asyncio
async def test_require_names_the_seeder_to_run(mock_session):
    with pytest.raises(MissingDependencyError) as exc_info:
        await require(mock_session, Setting, "foundation", key="site_name")
    assert exc_info.value.seeder == "foundation"
    assert "Run the 'foundation' seeder first" in str(exc_info.value)
    assert "key='site_name'" in str(exc_info.value)
