"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from amortisation_service.domain.engine import AmortisationEngine
from amortisation_service.infrastructure.database.repositories import ScheduleRepository
from amortisation_service.infrastructure.database.session import get_db

# Stateless, shared by every request
_engine = AmortisationEngine()


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_engine() -> AmortisationEngine:
    """Provide the amortisation engine"""
    return _engine


def get_schedule_repository(db: Session = Depends(get_db)) -> ScheduleRepository:
    """Provide schedule cache repository bound to the request session"""
    return ScheduleRepository(db)
