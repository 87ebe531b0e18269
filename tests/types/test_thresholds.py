from decimal import Decimal

import pytest
from configmanager import Config

from group_manager.exceptions import InvalidConfigException
from group_manager.types.thresholds import Thresholds


def test_thresholds_from_default_config(mock_config: Config):
    thresholds = Thresholds.from_config(mock_config)

    assert thresholds == Thresholds(
        promotion_group_id=5,
        demotion_group_id=3,
        promotion_amount=Decimal(500),
        demotion_amount=Decimal(100),
    )


def test_thresholds_from_yaml(mock_config: Config):
    mock_config.yaml.loads(
        """
group_manager:
  promotion_group_id: 12
  demotion_group_id: 4
  promotion_amount: 1000.5
  demotion_amount: 250
"""
    )

    thresholds = Thresholds.from_config(mock_config)

    assert thresholds.promotion_group_id == 12
    assert thresholds.demotion_group_id == 4
    assert thresholds.promotion_amount == Decimal("1000.5")
    assert thresholds.demotion_amount == Decimal(250)


def test_thresholds_negative_amount(mock_config: Config):
    mock_config.group_manager.demotion_amount.value = -1.0

    with pytest.raises(InvalidConfigException):
        Thresholds.from_config(mock_config)


def test_thresholds_inverted_amounts(mock_config: Config, caplog):
    mock_config.group_manager.promotion_amount.value = 50.0

    thresholds = Thresholds.from_config(mock_config)

    assert thresholds.promotion_amount < thresholds.demotion_amount
    assert "above the promotion amount" in caplog.text


def test_thresholds_are_immutable(thresholds: Thresholds):
    with pytest.raises(AttributeError):
        thresholds.promotion_amount = Decimal(1)  # type: ignore[misc]
