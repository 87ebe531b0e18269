import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from configmanager import Config

from group_manager.exceptions import InvalidConfigException

LOGGER = logging.getLogger(__name__)


def _to_amount(name: str, value: Any) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise InvalidConfigException(
            f"'{name}' must be a number, got {value!r}"
        ) from e

    if not amount.is_finite() or amount < 0:
        raise InvalidConfigException(
            f"'{name}' must be a non-negative amount, got {value}"
        )

    return amount


def _to_group_id(name: str, value: Any) -> int:
    if value is None or isinstance(value, bool):
        raise InvalidConfigException(f"'{name}' must be a group ID, got {value!r}")

    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfigException(
            f"'{name}' must be a group ID, got {value!r}"
        ) from e


@dataclass(frozen=True)
class Thresholds:
    promotion_group_id: int
    demotion_group_id: int
    promotion_amount: Decimal
    demotion_amount: Decimal

    @classmethod
    def from_config(cls, config: Config) -> "Thresholds":
        section = config.group_manager
        thresholds = cls(
            promotion_group_id=_to_group_id(
                "promotion_group_id", section.promotion_group_id.value
            ),
            demotion_group_id=_to_group_id(
                "demotion_group_id", section.demotion_group_id.value
            ),
            promotion_amount=_to_amount(
                "promotion_amount", section.promotion_amount.value
            ),
            demotion_amount=_to_amount(
                "demotion_amount", section.demotion_amount.value
            ),
        )

        if thresholds.demotion_amount > thresholds.promotion_amount:
            LOGGER.warning(
                "Demotion amount (%s) is above the promotion amount (%s), "
                "users may be promoted and demoted on alternate runs.",
                thresholds.demotion_amount,
                thresholds.promotion_amount,
            )

        return thresholds
