# models/deal.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Float, Text, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class ScheduleStatus(str, enum.Enum):
     """Enumeration for payment schedule status."""
     PENDING = "pending"
     PAID = "paid"
     LATE = "late"


class Deal(Base):
     """
     Deal model - a sale, purchase or rental linking a client and, optionally,
     a property, together with its pricing terms.
     """
     __tablename__ = "deals"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     client_id = Column(
          Integer,
          ForeignKey("clients.id", ondelete="RESTRICT"),
          nullable=False,
          index=True
     )
     property_id = Column(
          Integer,
          ForeignKey("properties.id", ondelete="SET NULL"),
          nullable=True,
          index=True
     )

     # Terms
     type = Column(String(50), default="sale", nullable=False)  # sale, purchase, rent
     base_price = Column(Numeric(14, 2), nullable=False, default=0)
     discount = Column(Numeric(14, 2), nullable=False, default=0)
     tax_rate = Column(Float, nullable=False, default=0)
     commission_rate = Column(Float, nullable=False, default=0)
     status = Column(String(50), default="draft", nullable=False, index=True)  # draft, signed, closed, cancelled
     notes = Column(Text, nullable=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     client = relationship("Client", back_populates="deals")
     property = relationship("Property", back_populates="deals")
     schedules = relationship(
          "PaymentSchedule",
          back_populates="deal",
          cascade="all, delete-orphan",
          order_by="PaymentSchedule.due_date",
     )
     invoices = relationship("Invoice", back_populates="deal", cascade="all, delete-orphan")
     payments = relationship("Payment", back_populates="deal", cascade="all, delete-orphan")

     def __repr__(self):
          return f"<Deal(id={self.id}, client_id={self.client_id}, status='{self.status}')>"


class PaymentSchedule(Base):
     """
     One instalment of a deal. A schedule marked paid always points at the
     payment that settled it.
     """
     __tablename__ = "payment_schedules"

     id = Column(Integer, primary_key=True, autoincrement=True)
     deal_id = Column(Integer, ForeignKey("deals.id", ondelete="CASCADE"), nullable=False, index=True)
     label = Column(String(200), nullable=True)
     due_date = Column(Date, nullable=False, index=True)
     amount = Column(Numeric(14, 2), nullable=False)
     status = Column(String(20), default=ScheduleStatus.PENDING.value, nullable=False)
     payment_id = Column(Integer, ForeignKey("payments.id", ondelete="SET NULL"), nullable=True)

     deal = relationship("Deal", back_populates="schedules")
     payment = relationship("Payment", foreign_keys=[payment_id])

     def __repr__(self):
          return f"<PaymentSchedule(id={self.id}, deal_id={self.deal_id}, status='{self.status}')>"

     def mark_as_paid(self, payment_id: int) -> None:
          """Mark the schedule as settled by the given payment."""
          self.status = ScheduleStatus.PAID.value
          self.payment_id = payment_id
