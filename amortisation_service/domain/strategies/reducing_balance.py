"""Reducing balance (equal EMI) amortisation"""

from decimal import Decimal

from amortisation_service.domain.models import AmortisationMethod, CalculationRequest, EMISchedule
from amortisation_service.domain.numeric import ZERO, monthly_rate, to_currency
from amortisation_service.domain.strategies.base import AmortisationStrategy


def calculate_emi(principal: Decimal, rate: Decimal, tenure: int) -> Decimal:
    """
    Equal monthly installment for a reducing balance loan.

    Formula: EMI = P × r × (1+r)^n / ((1+r)^n - 1)

    ``rate`` is the unrounded monthly rate. Only the final division is rounded
    to currency scale. With a zero rate the EMI is simply P / n.
    """
    if rate == ZERO:
        return to_currency(principal / Decimal(tenure))

    growth = (1 + rate) ** tenure
    numerator = principal * rate * growth
    denominator = growth - 1
    return to_currency(numerator / denominator)


class ReducingBalanceStrategy(AmortisationStrategy):
    """
    Constant EMI; interest accrues each month on the outstanding principal.

    The principal share grows and the interest share shrinks over the tenure.
    """

    method = AmortisationMethod.REDUCING_BALANCE

    def _calculate(self, request: CalculationRequest) -> EMISchedule:
        principal = request.principal
        rate = monthly_rate(request.interest_rate)
        emi = calculate_emi(principal, rate, request.tenure)

        def split(number: int, outstanding: Decimal):
            interest = to_currency(outstanding * rate)
            return emi, emi - interest, interest

        installments = self._generate_installments(principal, request.tenure, request.start_date, split)
        return self._assemble(request, rate, emi, installments)
