from decimal import Decimal

import pytest

from preiposip.exceptions import MissingDependencyError
from preiposip.models.foundation import Setting
from preiposip.services.settings import cast_setting, setting_value


@pytest.mark.parametrize(
    ("value", "type_", "expected"),
    [
        ("true", "boolean", True),
        (" Yes ", "boolean", True),
        ("1", "boolean", True),
        ("false", "boolean", False),
        ("0", "boolean", False),
        ("10000", "integer", 10_000),
        ("1.5", "float", Decimal("1.5")),
        ("2.75", "number", Decimal("2.75")),
        ('{"a": [1, 2]}', "json", {"a": [1, 2]}),
        ("PreIPOsip", "string", "PreIPOsip"),
        ("anything", "text", "anything"),
    ],
)
def test_cast_setting(value, type_, expected):
    assert cast_setting(value, type_) == expected


def test_cast_setting_rejects_bad_integer():
    with pytest.raises(ValueError):
        cast_setting("ten", "integer")


@pytest.mark.asyncio
async def test_setting_value_is_typed(mock_session, result_of):
    mock_session.execute.return_value = result_of(
        Setting(key="referral_bonus_amount", value="500", type="integer", group="referral")
    )
    assert await setting_value(mock_session, "referral_bonus_amount") == 500


@pytest.mark.asyncio
async def test_missing_setting_points_at_foundation(mock_session):
    with pytest.raises(MissingDependencyError) as exc_info:
        await setting_value(mock_session, "tds_rate")
    assert exc_info.value.seeder == "foundation"
