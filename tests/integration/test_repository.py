"""Integration tests for the schedule cache repository"""

from decimal import Decimal
from sqlalchemy.orm import Session
from amortisation_service.domain.strategies.reducing_balance import ReducingBalanceStrategy
from amortisation_service.infrastructure.database.models import InstallmentRecord, ScheduleRecord
from amortisation_service.infrastructure.database.repositories import ScheduleRepository


def test_save_and_fetch_schedule(db: Session, make_request):
    """Test stored schedule comes back as a cached copy"""
    schedule = ReducingBalanceStrategy().calculate(make_request(tenure=24))
    repository = ScheduleRepository(db)

    repository.save(schedule)
    db.commit()
    stored = repository.get_by_loan_id("LN-1001")

    assert stored is not None
    assert stored.cached is True
    assert schedule.cached is False
    assert stored.emi == schedule.emi
    assert stored.total_interest == schedule.total_interest
    assert stored.installment_count == 24
    assert [inst.installment_number for inst in stored.schedule] == list(range(1, 25))
    assert stored.schedule[-1].closing_balance == Decimal("0.00")
    assert all(inst.payment_status == "scheduled" for inst in stored.schedule)


def test_save_replaces_previous_schedule(db: Session, make_request):
    """Test one stored schedule per loan"""
    repository = ScheduleRepository(db)
    repository.save(ReducingBalanceStrategy().calculate(make_request(tenure=24)))
    db.commit()

    repository.save(ReducingBalanceStrategy().calculate(make_request(tenure=12)))
    db.commit()

    assert db.query(ScheduleRecord).count() == 1
    assert db.query(InstallmentRecord).count() == 12
    assert repository.get_by_loan_id("LN-1001").installment_count == 12


def test_missing_schedule(db: Session):
    """Test lookup of an unknown loan"""
    assert ScheduleRepository(db).get_by_loan_id("LN-404") is None
