"""Flat rate amortisation"""

from decimal import Decimal

from amortisation_service.domain.models import AmortisationMethod, CalculationRequest, EMISchedule
from amortisation_service.domain.numeric import monthly_rate, to_currency
from amortisation_service.domain.strategies.base import AmortisationStrategy


class FlatRateStrategy(AmortisationStrategy):
    """
    Interest charged on the original principal for every period.

    EMI = (P + P × r × n) / n, with a constant interest share of P × r.
    """

    method = AmortisationMethod.FLAT_RATE

    def _calculate(self, request: CalculationRequest) -> EMISchedule:
        principal = request.principal
        tenure = request.tenure
        rate = monthly_rate(request.interest_rate)

        emi = to_currency((principal + principal * rate * tenure) / Decimal(tenure))
        interest = to_currency(principal * rate)

        def split(number: int, outstanding: Decimal):
            return emi, emi - interest, interest

        installments = self._generate_installments(principal, tenure, request.start_date, split)
        return self._assemble(request, rate, emi, installments)
