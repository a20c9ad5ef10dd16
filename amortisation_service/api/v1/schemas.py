"""Pydantic schemas for API request/response validation"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from amortisation_service.domain.models import CalculationRequest, EMISchedule, Installment, ProductType


class CalculationRequestSchema(BaseModel):
    """Request body for POST /v1/amortisation/calculate

    Domain constraints are enforced by the request validator so that the
    first failing rule is the one reported.
    """

    loan_id: Optional[str] = Field(None, max_length=64, description="Unique loan identifier")
    principal: Optional[Decimal] = Field(None, description="Loan principal amount")
    interest_rate: Optional[Decimal] = Field(None, description="Annual interest rate in percent, e.g. 8.5")
    tenure: Optional[int] = Field(None, description="Loan tenure in months")
    product_type: Optional[ProductType] = None
    amortisation_method: Optional[str] = Field(None, description="e.g. REDUCING_BALANCE")
    start_date: Optional[date] = None
    frequency: str = "MONTHLY"
    options: Dict[str, Any] = Field(default_factory=dict)
    requested_by: Optional[str] = None

    def to_domain(self) -> CalculationRequest:
        return CalculationRequest(
            loan_id=self.loan_id,
            principal=self.principal,
            interest_rate=self.interest_rate,
            tenure=self.tenure,
            start_date=self.start_date,
            amortisation_method=self.amortisation_method,
            product_type=self.product_type,
            frequency=self.frequency,
            options=dict(self.options),
            requested_by=self.requested_by,
        )


class InstallmentSchema(BaseModel):
    """Single installment in a schedule"""

    installment_number: int
    due_date: date
    opening_balance: Decimal
    emi: Decimal
    principal: Decimal
    interest: Decimal
    closing_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal
    payment_status: Optional[str] = None
    payment_date: Optional[date] = None
    amount_paid: Optional[Decimal] = None

    @classmethod
    def from_domain(cls, inst: Installment) -> "InstallmentSchema":
        return cls(
            installment_number=inst.installment_number,
            due_date=inst.due_date,
            opening_balance=inst.opening_balance,
            emi=inst.emi,
            principal=inst.principal,
            interest=inst.interest,
            closing_balance=inst.closing_balance,
            cumulative_principal=inst.cumulative_principal,
            cumulative_interest=inst.cumulative_interest,
            payment_status=inst.payment_status,
            payment_date=inst.payment_date,
            amount_paid=inst.amount_paid,
        )


class EMIScheduleResponse(BaseModel):
    """Response for calculate and schedule lookup endpoints"""

    request_id: Optional[str] = None
    loan_id: str
    calculated_at: datetime
    emi: Decimal
    total_interest: Decimal
    total_payment: Decimal
    installment_count: int
    schedule: List[InstallmentSchema]
    audit_trail: str
    calculation_method: str
    cached: bool = False

    @classmethod
    def from_domain(cls, schedule: EMISchedule) -> "EMIScheduleResponse":
        return cls(
            request_id=schedule.request_id,
            loan_id=schedule.loan_id,
            calculated_at=schedule.calculated_at,
            emi=schedule.emi,
            total_interest=schedule.total_interest,
            total_payment=schedule.total_payment,
            installment_count=schedule.installment_count,
            schedule=[InstallmentSchema.from_domain(inst) for inst in schedule.schedule],
            audit_trail=schedule.audit_trail,
            calculation_method=schedule.calculation_method,
            cached=schedule.cached,
        )


class ErrorResponse(BaseModel):
    """Error body for 4xx/5xx responses"""

    detail: str
