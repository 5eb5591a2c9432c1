# models/payment.py
from sqlalchemy import Column, Integer, String, Numeric, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from .base import Base


class Payment(Base):
     """
     Payment model - money received against a deal, optionally settling an invoice.
     """
     __tablename__ = "payments"

     id = Column(Integer, primary_key=True, autoincrement=True)
     deal_id = Column(Integer, ForeignKey("deals.id", ondelete="CASCADE"), nullable=False, index=True)
     invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="SET NULL"), nullable=True, index=True)
     amount = Column(Numeric(14, 2), nullable=False)
     date = Column(Date, nullable=False, index=True)
     method = Column(String(50), nullable=True)  # cash, transfer, cheque, mobile money
     reference = Column(String(100), nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     deal = relationship("Deal", back_populates="payments")
     invoice = relationship("Invoice", back_populates="payments")

     def __repr__(self):
          return f"<Payment(id={self.id}, deal_id={self.deal_id}, amount={self.amount})>"
