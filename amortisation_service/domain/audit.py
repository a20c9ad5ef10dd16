"""Audit trail text stored alongside every schedule for compliance"""

from decimal import Decimal

from amortisation_service.domain.numeric import plain

REGULATORY_VERSION = "RBI-2024-v1"


def build_audit_trail(
    method: str,
    formula: str,
    principal: Decimal,
    annual_rate: Decimal,
    monthly_rate: Decimal,
    tenure: int,
    emi: Decimal,
) -> str:
    """Format the method, formula, inputs and computed EMI as one record"""
    return (
        f"Amortisation Method: {method} | "
        f"Formula: {formula} | "
        f"Parameters: P={plain(principal)}, Annual Rate={plain(annual_rate)}%, "
        f"Monthly Rate={plain(monthly_rate)}, n={tenure} | "
        f"Calculated EMI: {plain(emi)} | "
        f"Regulatory Version: {REGULATORY_VERSION}"
    )
