"""Domain models - immutable dataclasses for loan calculation inputs and outputs"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class ProductType(str, Enum):
    """Loan product types. Informational only, never changes the arithmetic"""

    HOME_LOAN = "HOME_LOAN"
    PERSONAL_LOAN = "PERSONAL_LOAN"
    VEHICLE_LOAN = "VEHICLE_LOAN"
    GOLD_LOAN = "GOLD_LOAN"
    BUSINESS_LOAN = "BUSINESS_LOAN"
    EDUCATION_LOAN = "EDUCATION_LOAN"
    LOAN_AGAINST_PROPERTY = "LOAN_AGAINST_PROPERTY"

    @property
    def display_name(self) -> str:
        return _PRODUCT_DISPLAY_NAMES[self]


_PRODUCT_DISPLAY_NAMES = {
    ProductType.HOME_LOAN: "Home Loan",
    ProductType.PERSONAL_LOAN: "Personal Loan",
    ProductType.VEHICLE_LOAN: "Vehicle Loan",
    ProductType.GOLD_LOAN: "Gold Loan",
    ProductType.BUSINESS_LOAN: "Business Loan",
    ProductType.EDUCATION_LOAN: "Education Loan",
    ProductType.LOAN_AGAINST_PROPERTY: "Loan Against Property",
}


class AmortisationMethod(str, Enum):
    """Amortisation methods - the closed set a strategy can be registered for"""

    REDUCING_BALANCE = "REDUCING_BALANCE"
    FLAT_RATE = "FLAT_RATE"
    BULLET_PAYMENT = "BULLET_PAYMENT"
    DAILY_REDUCING = "DAILY_REDUCING"
    STEP_UP = "STEP_UP"
    STEP_DOWN = "STEP_DOWN"

    @property
    def display_name(self) -> str:
        return _METHOD_DETAILS[self][0]

    @property
    def formula(self) -> str:
        return _METHOD_DETAILS[self][1]

    @classmethod
    def parse(cls, value: Union[str, "AmortisationMethod", None]) -> Optional["AmortisationMethod"]:
        """Case-insensitive lookup; None when the value is missing or unknown"""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


_METHOD_DETAILS = {
    AmortisationMethod.REDUCING_BALANCE: ("Reducing Balance", "EMI = P × r × (1+r)^n / ((1+r)^n - 1)"),
    AmortisationMethod.FLAT_RATE: ("Flat Rate", "EMI = (P + (P × r × n)) / n"),
    AmortisationMethod.BULLET_PAYMENT: ("Bullet Payment", "Interest periodic, Principal at end"),
    AmortisationMethod.DAILY_REDUCING: ("Daily Reducing", "Interest = Outstanding × Daily Rate × Days"),
    AmortisationMethod.STEP_UP: ("Step-up EMI", "EMI increases at predefined intervals"),
    AmortisationMethod.STEP_DOWN: ("Step-down EMI", "EMI decreases at predefined intervals"),
}


@dataclass(frozen=True)
class CalculationRequest:
    """Loan parameters for one schedule calculation.

    Fields a caller may omit are optional so the validator can name the
    missing one instead of failing on construction.
    """

    loan_id: Optional[str]
    principal: Optional[Decimal]
    interest_rate: Optional[Decimal]  # annual rate in percent, e.g. 8.5
    tenure: Optional[int]  # months
    start_date: Optional[date]
    amortisation_method: Union[AmortisationMethod, str, None] = AmortisationMethod.REDUCING_BALANCE
    product_type: Optional[ProductType] = None
    frequency: str = "MONTHLY"
    options: Dict[str, Any] = field(default_factory=dict)
    requested_by: Optional[str] = None

    def is_option_enabled(self, key: str) -> bool:
        """True only when the option is present and is the boolean True"""
        if not self.options:
            return False
        return self.options.get(key) is True


@dataclass(frozen=True)
class Installment:
    """Single period in an amortisation schedule"""

    installment_number: int
    due_date: date
    opening_balance: Decimal
    emi: Decimal
    principal: Decimal
    interest: Decimal
    closing_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal

    # Only populated on schedules read back from storage
    payment_status: Optional[str] = None
    payment_date: Optional[date] = None
    amount_paid: Optional[Decimal] = None

    def with_payment(
        self,
        status: str,
        payment_date: Optional[date] = None,
        amount_paid: Optional[Decimal] = None,
    ) -> "Installment":
        """Return a copy carrying payment details; the original is untouched"""
        return replace(self, payment_status=status, payment_date=payment_date, amount_paid=amount_paid)


@dataclass(frozen=True)
class EMISchedule:
    """Complete output of a calculation"""

    loan_id: str
    emi: Decimal
    total_interest: Decimal
    total_payment: Decimal
    schedule: Tuple[Installment, ...]
    audit_trail: str
    calculation_method: str
    calculated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    cached: bool = False
    request_id: Optional[str] = None

    @property
    def installment_count(self) -> int:
        return len(self.schedule)

    def as_cached(self) -> "EMISchedule":
        return replace(self, cached=True)
