"""Domain-specific exceptions"""

from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Calculation request violates a domain constraint"""

    pass


class UnsupportedMethodError(ValidationError):
    """No registered strategy handles the requested amortisation method"""

    pass


class CalculationError(DomainException):
    """Arithmetic could not complete for a validated request"""

    def __init__(
        self,
        message: str,
        loan_id: Optional[str] = None,
        cause: Optional[BaseException] = None,
        error_code: str = "CALCULATION_FAILED",
    ):
        super().__init__(message)
        self.loan_id = loan_id
        self.cause = cause
        self.error_code = error_code
