# models/invoice.py
import enum
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class InvoiceStatus(str, enum.Enum):
     """Enumeration for invoice payment status."""
     OPEN = "open"
     PAID = "paid"
     CANCELLED = "cancelled"


class Invoice(Base):
     """
     Invoice model - billing record issued against a deal.

     `number` follows INV<YYYY><MM>-<NNNN>; the sequence restarts every month
     and the unique constraint rejects a concurrently issued duplicate.
     """
     __tablename__ = "invoices"

     id = Column(Integer, primary_key=True, autoincrement=True)

     # Foreign keys
     deal_id = Column(
          Integer,
          ForeignKey("deals.id", ondelete="CASCADE"),
          nullable=False,
          index=True
     )

     # Invoice details
     number = Column(String(32), unique=True, nullable=False, index=True)
     issue_date = Column(Date, nullable=False, index=True)
     due_date = Column(Date, nullable=True)
     amount = Column(Numeric(14, 2), nullable=False)
     status = Column(String(20), default=InvoiceStatus.OPEN.value, nullable=False, index=True)

     # Timestamps
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     # Relationships
     deal = relationship("Deal", back_populates="invoices")
     payments = relationship("Payment", back_populates="invoice")

     def __repr__(self):
          return f"<Invoice(id={self.id}, number='{self.number}', amount={self.amount}, status='{self.status}')>"

     @property
     def is_overdue(self) -> bool:
          """Check if invoice is past due date and still open."""
          from datetime import date
          return self.status == InvoiceStatus.OPEN.value and self.due_date is not None and self.due_date < date.today()
