"""Request validation - runs before any arithmetic"""

from decimal import Decimal
from typing import Optional

from amortisation_service.config import settings
from amortisation_service.domain.exceptions import ValidationError
from amortisation_service.domain.models import AmortisationMethod, CalculationRequest

MAX_INTEREST_RATE = Decimal("50")
MAX_TENURE_MONTHS = 360


def validate_request(
    request: CalculationRequest,
    min_principal: Optional[Decimal] = None,
    max_principal: Optional[Decimal] = None,
) -> AmortisationMethod:
    """
    Check a calculation request against domain constraints.

    Constraints are checked in a fixed order and the first violation is
    reported:
    loan id → principal > 0 → principal within limits → rate >= 0 →
    rate <= 50 → tenure in 1..360 → start date → amortisation method

    Returns:
        The resolved amortisation method

    Raises:
        ValidationError: naming the first violated constraint
    """
    if min_principal is None:
        min_principal = settings.min_principal
    if max_principal is None:
        max_principal = settings.max_principal

    if not request.loan_id or not request.loan_id.strip():
        raise ValidationError("Loan ID is required")

    if request.principal is None or not request.principal.is_finite() or request.principal <= 0:
        raise ValidationError("Principal must be greater than zero")

    if request.principal < min_principal:
        raise ValidationError(f"Principal must be at least {min_principal}")
    if request.principal > max_principal:
        raise ValidationError(f"Principal cannot exceed {max_principal}")

    if request.interest_rate is None or not request.interest_rate.is_finite():
        raise ValidationError("Interest rate is required")
    if request.interest_rate < 0:
        raise ValidationError("Interest rate cannot be negative")

    if request.interest_rate > MAX_INTEREST_RATE:
        raise ValidationError(f"Interest rate cannot exceed {MAX_INTEREST_RATE}%")

    if request.tenure is None:
        raise ValidationError("Tenure is required")
    if request.tenure <= 0:
        raise ValidationError("Tenure must be at least 1 month")
    if request.tenure > MAX_TENURE_MONTHS:
        raise ValidationError(f"Tenure cannot exceed {MAX_TENURE_MONTHS} months")

    if request.start_date is None:
        raise ValidationError("Start date is required")

    method = AmortisationMethod.parse(request.amortisation_method)
    if method is None:
        raise ValidationError(f"Amortisation method is missing or unrecognized: {request.amortisation_method!r}")

    return method
