"""Bullet payment amortisation"""

from decimal import Decimal

from amortisation_service.domain.models import AmortisationMethod, CalculationRequest, EMISchedule
from amortisation_service.domain.numeric import ZERO, monthly_rate, to_currency
from amortisation_service.domain.strategies.base import AmortisationStrategy


class BulletPaymentStrategy(AmortisationStrategy):
    """
    Interest-only periods with the whole principal due at maturity.

    The schedule EMI is the regular interest payment; the final installment
    pays that interest plus the outstanding principal.
    """

    method = AmortisationMethod.BULLET_PAYMENT

    def _calculate(self, request: CalculationRequest) -> EMISchedule:
        principal = request.principal
        tenure = request.tenure
        rate = monthly_rate(request.interest_rate)
        interest = to_currency(principal * rate)

        def split(number: int, outstanding: Decimal):
            if number == tenure:
                return interest + outstanding, outstanding, interest
            return interest, ZERO, interest

        installments = self._generate_installments(principal, tenure, request.start_date, split)
        return self._assemble(request, rate, interest, installments)
