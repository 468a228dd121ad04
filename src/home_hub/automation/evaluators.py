"""
Condition evaluators for triggers.

Conditions read live device state through the devices' numeric capability
query, never through the proxies' internals.
"""

import logging
from typing import TYPE_CHECKING

from .models import TriggerCondition

if TYPE_CHECKING:
    from home_hub.core.registry import DeviceRegistry

logger = logging.getLogger(__name__)


class ConditionEvaluator:
    """
    Evaluates trigger conditions against the device registry.

    The first registered device that reports the condition's attribute is
    compared against the threshold. If no device reports it, the condition
    is false.
    """

    def __init__(self, registry: "DeviceRegistry") -> None:
        self._registry = registry

    def evaluate(self, condition: TriggerCondition) -> bool:
        """
        Evaluate a condition.

        Args:
            condition: The condition to evaluate

        Returns:
            True if condition is met, False otherwise
        """
        found = self._registry.find_numeric_attribute(condition.attribute)
        if found is None:
            logger.debug(f"No device reports '{condition.attribute}', condition is false")
            return False

        proxy, value = found
        result = condition.operator.compare(value, condition.threshold)
        logger.debug(
            f"Condition {condition.describe()} on device {proxy.id} "
            f"(value={value}): {result}"
        )
        return result
