"""Amortisation strategy contract and the installment loop shared by all methods"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal, localcontext
from typing import Callable, List, Tuple, Union

from amortisation_service.domain.audit import build_audit_trail
from amortisation_service.domain.exceptions import CalculationError
from amortisation_service.domain.models import AmortisationMethod, CalculationRequest, EMISchedule, Installment
from amortisation_service.domain.numeric import ZERO, calculation_context, plain, to_currency
from amortisation_service.domain.validation import MAX_TENURE_MONTHS
from amortisation_service.utils.date_utils import add_months

# (installment_number, outstanding_balance) -> (payment, principal, interest)
PeriodSplit = Callable[[int, Decimal], Tuple[Decimal, Decimal, Decimal]]


class AmortisationStrategy(ABC):
    """
    One amortisation method.

    Subclasses set ``method`` and implement ``_calculate``. ``calculate`` wraps
    it with an isolated decimal context, a re-check of the arithmetic
    preconditions and error translation, so a caller gets either a complete
    schedule or a ``CalculationError``.
    """

    method: AmortisationMethod

    def name(self) -> str:
        return self.method.value

    def supports(self, method: Union[str, AmortisationMethod, None]) -> bool:
        """Case-insensitive exact match against this strategy's identifier"""
        if isinstance(method, AmortisationMethod):
            method = method.value
        if not isinstance(method, str):
            return False
        return method.lower() == self.name().lower()

    def calculate(self, request: CalculationRequest) -> EMISchedule:
        logging.debug(f"Starting {self.name()} calculation", extra={"loan_id": request.loan_id})

        try:
            with localcontext(calculation_context()):
                self.check_request(request)
                schedule = self._calculate(request)
        except CalculationError:
            logging.error(f"Calculation failed for loan {request.loan_id}", exc_info=True, extra={"loan_id": request.loan_id})
            raise
        except Exception as e:
            logging.error(f"Calculation failed for loan {request.loan_id}", exc_info=True, extra={"loan_id": request.loan_id})
            raise CalculationError(
                f"Failed to calculate amortisation schedule for loan {request.loan_id}: {e}",
                loan_id=request.loan_id,
                cause=e,
            ) from e

        logging.info(
            "Calculation completed",
            extra={
                "loan_id": request.loan_id,
                "method": self.name(),
                "emi": plain(schedule.emi),
                "total_interest": plain(schedule.total_interest),
                "installments": schedule.installment_count,
            },
        )
        return schedule

    def check_request(self, request: CalculationRequest) -> None:
        """Re-check arithmetic preconditions even though the validator already ran"""
        if request.principal is None or request.principal <= 0:
            raise CalculationError("Principal must be greater than zero", loan_id=request.loan_id, error_code="INVALID_INPUT")
        if request.interest_rate is None or request.interest_rate < 0:
            raise CalculationError("Interest rate must be non-negative", loan_id=request.loan_id, error_code="INVALID_INPUT")
        if request.tenure is None or request.tenure <= 0:
            raise CalculationError("Tenure must be greater than zero", loan_id=request.loan_id, error_code="INVALID_INPUT")
        if request.tenure > MAX_TENURE_MONTHS:
            raise CalculationError(
                f"Tenure cannot exceed {MAX_TENURE_MONTHS} months", loan_id=request.loan_id, error_code="INVALID_INPUT"
            )
        if request.start_date is None:
            raise CalculationError("Start date is required", loan_id=request.loan_id, error_code="INVALID_INPUT")

    @abstractmethod
    def _calculate(self, request: CalculationRequest) -> EMISchedule:
        """Build the schedule; runs inside the calculation decimal context"""

    def _generate_installments(
        self,
        principal: Decimal,
        tenure: int,
        start_date: date,
        split: PeriodSplit,
    ) -> List[Installment]:
        """
        Walk the balance down period by period.

        The final period always repays the whole outstanding balance and its
        interest becomes payment minus that balance, so every rounding cent
        lands in one place and the closing balance is exactly zero.
        """
        installments = []
        outstanding = principal
        cumulative_principal = ZERO
        cumulative_interest = ZERO

        for number in range(1, tenure + 1):
            payment, principal_part, interest = split(number, outstanding)

            if number == tenure:
                principal_part = outstanding
                interest = payment - principal_part

            closing = outstanding - principal_part
            cumulative_principal += principal_part
            cumulative_interest += interest

            installments.append(
                Installment(
                    installment_number=number,
                    due_date=add_months(start_date, number),
                    opening_balance=to_currency(outstanding),
                    emi=payment,
                    principal=to_currency(principal_part),
                    interest=interest,
                    closing_balance=to_currency(closing),
                    cumulative_principal=to_currency(cumulative_principal),
                    cumulative_interest=to_currency(cumulative_interest),
                )
            )
            outstanding = closing

        return installments

    def _assemble(
        self,
        request: CalculationRequest,
        monthly_rate: Decimal,
        emi: Decimal,
        installments: List[Installment],
    ) -> EMISchedule:
        """Aggregate totals from the generated rows and attach the audit trail"""
        total_interest = sum((inst.interest for inst in installments), ZERO)
        total_payment = request.principal + total_interest

        return EMISchedule(
            loan_id=request.loan_id,
            emi=to_currency(emi),
            total_interest=to_currency(total_interest),
            total_payment=to_currency(total_payment),
            schedule=tuple(installments),
            audit_trail=build_audit_trail(
                method=self.name(),
                formula=self.method.formula,
                principal=request.principal,
                annual_rate=request.interest_rate,
                monthly_rate=monthly_rate,
                tenure=request.tenure,
                emi=emi,
            ),
            calculation_method=self.name(),
        )
