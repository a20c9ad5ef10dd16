"""Amortisation endpoints - schedule calculation and cached schedule lookup"""

import time
import logging
from dataclasses import replace
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from amortisation_service.api.v1.schemas import CalculationRequestSchema, EMIScheduleResponse, ErrorResponse
from amortisation_service.api.dependencies import get_engine, get_request_id, get_schedule_repository
from amortisation_service.config import settings
from amortisation_service.domain.engine import AmortisationEngine
from amortisation_service.domain.exceptions import CalculationError, ValidationError
from amortisation_service.domain.models import AmortisationMethod
from amortisation_service.infrastructure.database.repositories import ScheduleRepository
from amortisation_service.infrastructure.database.session import get_db
from amortisation_service.infrastructure.observability.logging import log_calculation
from amortisation_service.infrastructure.observability.metrics import record_cache_lookup, record_calculation

router = APIRouter()


@router.post(
    "/amortisation/calculate",
    response_model=EMIScheduleResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def calculate_schedule(
    request_body: CalculationRequestSchema,
    request: Request,
    db: Session = Depends(get_db),
    engine: AmortisationEngine = Depends(get_engine),
    repository: ScheduleRepository = Depends(get_schedule_repository),
):
    """
    Calculate a complete EMI schedule with principal/interest breakdown.

    Flow:
    1. Validate request and pick the strategy for the amortisation method
    2. Compute the schedule
    3. Store it in the schedule cache
    4. Return the schedule tagged with the request ID
    """
    start_time = time.time()
    request_id = get_request_id(request)
    parsed_method = AmortisationMethod.parse(request_body.amortisation_method)
    method = parsed_method.value if parsed_method else "unknown"

    logging.info(
        "Received calculation request",
        extra={
            "request_id": request_id,
            "loan_id": request_body.loan_id,
            "product_type": request_body.product_type.value if request_body.product_type else None,
            "method": method,
            "requested_by": request_body.requested_by,
        },
    )

    try:
        schedule = engine.calculate(request_body.to_domain())

        if settings.schedule_cache_enabled:
            repository.save(schedule)
            db.commit()

    except ValidationError as e:
        record_calculation(method, "validation_error", time.time() - start_time)
        logging.warning(f"Invalid calculation request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except CalculationError as e:
        db.rollback()
        record_calculation(method, "calculation_error", time.time() - start_time)
        logging.warning(f"Calculation failed for loan {e.loan_id}: {e}", extra={"request_id": request_id, "loan_id": e.loan_id})
        raise HTTPException(status_code=500, detail="Failed to calculate amortisation schedule")

    except Exception as e:
        db.rollback()
        record_calculation(method, "error", time.time() - start_time)
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration = time.time() - start_time
    record_calculation(schedule.calculation_method, "success", duration)
    log_calculation(request_id, schedule.loan_id, schedule.calculation_method, "success", duration * 1000)

    return EMIScheduleResponse.from_domain(replace(schedule, request_id=request_id))


@router.get(
    "/amortisation/schedule/{loan_id}",
    response_model=EMIScheduleResponse,
    responses={404: {"model": ErrorResponse}},
)
def get_schedule(
    loan_id: str,
    request: Request,
    repository: ScheduleRepository = Depends(get_schedule_repository),
):
    """
    Retrieve the last calculated schedule for a loan from the cache.

    Returns:
        Schedule with ``cached`` set, or 404 when none is stored
    """
    request_id = get_request_id(request)

    schedule = repository.get_by_loan_id(loan_id)
    record_cache_lookup(schedule is not None)

    if schedule is None:
        logging.warning("Schedule not found", extra={"request_id": request_id, "loan_id": loan_id})
        raise HTTPException(status_code=404, detail="Schedule not found")

    logging.info("Schedule retrieved", extra={"request_id": request_id, "loan_id": loan_id, "cached": schedule.cached})
    return EMIScheduleResponse.from_domain(replace(schedule, request_id=request_id))
