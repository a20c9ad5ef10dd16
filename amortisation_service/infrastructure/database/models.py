"""SQLAlchemy ORM models for stored EMI schedules"""

import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

Money = Numeric(18, 2)


class ScheduleRecord(Base):
    """Last calculated schedule for a loan"""

    __tablename__ = "emi_schedule"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    loan_id = Column(String(64), nullable=False, unique=True, index=True)
    emi = Column(Money, nullable=False)
    total_interest = Column(Money, nullable=False)
    total_payment = Column(Money, nullable=False)
    calculation_method = Column(Text, nullable=False)
    audit_trail = Column(Text, nullable=False)
    calculated_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    installments = relationship(
        "InstallmentRecord",
        back_populates="schedule",
        cascade="all, delete-orphan",
        order_by="InstallmentRecord.installment_number",
    )


class InstallmentRecord(Base):
    """Individual installment within a stored schedule"""

    __tablename__ = "emi_installment"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    schedule_id = Column(Uuid(as_uuid=True), ForeignKey("emi_schedule.id", ondelete="CASCADE"), nullable=False)
    installment_number = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    opening_balance = Column(Money, nullable=False)
    emi = Column(Money, nullable=False)
    principal = Column(Money, nullable=False)
    interest = Column(Money, nullable=False)
    closing_balance = Column(Money, nullable=False)
    cumulative_principal = Column(Money, nullable=False)
    cumulative_interest = Column(Money, nullable=False)
    status = Column(Text, nullable=False, default="scheduled")
    payment_date = Column(Date, nullable=True)
    amount_paid = Column(Money, nullable=True)

    schedule = relationship("ScheduleRecord", back_populates="installments")
