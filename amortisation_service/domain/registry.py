"""Strategy registry - maps an amortisation method to the strategy that computes it"""

from typing import List, Tuple, Union

from amortisation_service.domain.exceptions import UnsupportedMethodError
from amortisation_service.domain.models import AmortisationMethod
from amortisation_service.domain.strategies.base import AmortisationStrategy
from amortisation_service.domain.strategies.bullet_payment import BulletPaymentStrategy
from amortisation_service.domain.strategies.flat_rate import FlatRateStrategy
from amortisation_service.domain.strategies.reducing_balance import ReducingBalanceStrategy


class StrategyRegistry:
    """Ordered collection of strategies, searched with ``supports()``"""

    def __init__(self, strategies: Tuple[AmortisationStrategy, ...] = ()):
        self._strategies: List[AmortisationStrategy] = []
        for strategy in strategies:
            self.register(strategy)

    def register(self, strategy: AmortisationStrategy) -> None:
        if any(existing.name() == strategy.name() for existing in self._strategies):
            raise ValueError(f"Strategy already registered for {strategy.name()}")
        self._strategies.append(strategy)

    def resolve(self, method: Union[str, AmortisationMethod, None]) -> AmortisationStrategy:
        """
        Return the strategy handling ``method``.

        Raises:
            UnsupportedMethodError: when no registered strategy supports it
        """
        for strategy in self._strategies:
            if strategy.supports(method):
                return strategy

        label = method.value if isinstance(method, AmortisationMethod) else method
        raise UnsupportedMethodError(f"Amortisation method not supported: {label}")

    def strategies(self) -> Tuple[AmortisationStrategy, ...]:
        return tuple(self._strategies)

    def methods(self) -> List[str]:
        return [strategy.name() for strategy in self._strategies]


def default_registry() -> StrategyRegistry:
    """Registry with every implemented method"""
    return StrategyRegistry(
        (
            ReducingBalanceStrategy(),
            FlatRateStrategy(),
            BulletPaymentStrategy(),
        )
    )
