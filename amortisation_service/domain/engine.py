"""Calculation entry point - validate, dispatch, compute"""

from typing import Optional

from amortisation_service.domain.models import CalculationRequest, EMISchedule
from amortisation_service.domain.registry import StrategyRegistry, default_registry
from amortisation_service.domain.validation import validate_request


class AmortisationEngine:
    """
    Stateless front door to the strategies.

    Holds only the registry, so one instance can serve concurrent requests.
    """

    def __init__(self, registry: Optional[StrategyRegistry] = None):
        self.registry = registry or default_registry()

    def calculate(self, request: CalculationRequest) -> EMISchedule:
        """
        Validate the request and compute its schedule.

        Raises:
            ValidationError: bad input, including an unsupported method
            CalculationError: arithmetic failed for a valid request
        """
        method = validate_request(request)
        strategy = self.registry.resolve(method)
        return strategy.calculate(request)
