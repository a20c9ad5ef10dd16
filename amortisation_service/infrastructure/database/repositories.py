"""Data access layer for cached EMI schedules"""

from typing import Optional

from sqlalchemy.orm import Session

from amortisation_service.domain.models import EMISchedule, Installment
from amortisation_service.infrastructure.database.models import InstallmentRecord, ScheduleRecord


class ScheduleRepository:
    """Stores the most recent schedule per loan and serves it back as a cached copy"""

    def __init__(self, db: Session):
        self.db = db

    def save(self, schedule: EMISchedule) -> ScheduleRecord:
        """Persist a schedule, replacing any earlier one for the same loan"""
        existing = self._get_record(schedule.loan_id)
        if existing is not None:
            self.db.delete(existing)
            self.db.flush()

        db_schedule = ScheduleRecord(
            loan_id=schedule.loan_id,
            emi=schedule.emi,
            total_interest=schedule.total_interest,
            total_payment=schedule.total_payment,
            calculation_method=schedule.calculation_method,
            audit_trail=schedule.audit_trail,
            calculated_at=schedule.calculated_at,
            installments=[
                InstallmentRecord(
                    installment_number=inst.installment_number,
                    due_date=inst.due_date,
                    opening_balance=inst.opening_balance,
                    emi=inst.emi,
                    principal=inst.principal,
                    interest=inst.interest,
                    closing_balance=inst.closing_balance,
                    cumulative_principal=inst.cumulative_principal,
                    cumulative_interest=inst.cumulative_interest,
                    status="scheduled",
                )
                for inst in schedule.schedule
            ],
        )
        self.db.add(db_schedule)
        self.db.flush()  # Get ID without committing

        return db_schedule

    def get_by_loan_id(self, loan_id: str) -> Optional[EMISchedule]:
        """Fetch the stored schedule as a domain value flagged ``cached``"""
        record = self._get_record(loan_id)
        if record is None:
            return None

        installments = tuple(
            Installment(
                installment_number=row.installment_number,
                due_date=row.due_date,
                opening_balance=row.opening_balance,
                emi=row.emi,
                principal=row.principal,
                interest=row.interest,
                closing_balance=row.closing_balance,
                cumulative_principal=row.cumulative_principal,
                cumulative_interest=row.cumulative_interest,
                payment_status=row.status,
                payment_date=row.payment_date,
                amount_paid=row.amount_paid,
            )
            for row in record.installments
        )

        schedule = EMISchedule(
            loan_id=record.loan_id,
            emi=record.emi,
            total_interest=record.total_interest,
            total_payment=record.total_payment,
            schedule=installments,
            audit_trail=record.audit_trail,
            calculation_method=record.calculation_method,
            calculated_at=record.calculated_at,
        )
        return schedule.as_cached()

    def _get_record(self, loan_id: str) -> Optional[ScheduleRecord]:
        return (
            self.db.query(ScheduleRecord)
            .filter(ScheduleRecord.loan_id == loan_id)
            .first()
        )
