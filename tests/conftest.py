"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Callable, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from amortisation_service.api.main import create_app
from amortisation_service.domain.models import AmortisationMethod, CalculationRequest, ProductType
from amortisation_service.infrastructure.database.models import Base
from amortisation_service.infrastructure.database.session import get_db


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_request() -> Callable[..., CalculationRequest]:
    """Factory for calculation requests; keyword arguments override the defaults"""

    def _make(**overrides) -> CalculationRequest:
        fields = dict(
            loan_id="LN-1001",
            principal=Decimal("1000000"),
            interest_rate=Decimal("8.5"),
            tenure=240,
            start_date=date(2024, 1, 1),
            amortisation_method=AmortisationMethod.REDUCING_BALANCE,
            product_type=ProductType.HOME_LOAN,
            requested_by="underwriter-7",
        )
        fields.update(overrides)
        return CalculationRequest(**fields)

    return _make


@pytest.fixture
def home_loan_payload() -> dict:
    """JSON body for POST /v1/amortisation/calculate"""
    return {
        "loan_id": "LN-2001",
        "principal": "1000000",
        "interest_rate": "8.5",
        "tenure": 240,
        "product_type": "HOME_LOAN",
        "amortisation_method": "REDUCING_BALANCE",
        "start_date": "2024-01-01",
        "requested_by": "underwriter-7",
    }
