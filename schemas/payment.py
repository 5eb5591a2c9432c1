# schemas/payment.py
"""
Pydantic schemas for payments and expenses.
"""
import datetime as dt
from typing import Optional
from pydantic import Field, ConfigDict

from .common import CamelModel
from .invoice import InvoiceDealSummary


class PaymentCreate(CamelModel):
     """Request body for POST /api/admin/payments."""

     deal_id: int = Field(..., gt=0, description="Deal the payment is made on")
     invoice_id: Optional[int] = Field(None, gt=0, description="Invoice settled by this payment")
     schedule_id: Optional[int] = Field(
          None,
          gt=0,
          description="Schedule to mark as paid by this payment",
     )
     amount: float = Field(..., gt=0, description="Amount received")
     date: Optional[dt.date] = Field(None, description="Payment date (defaults to today)")
     method: Optional[str] = Field(None, max_length=50)
     reference: Optional[str] = Field(None, max_length=100)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "dealId": 1,
                    "invoiceId": 1,
                    "scheduleId": 2,
                    "amount": 2500000.00,
                    "method": "transfer",
                    "reference": "VIR-2026-0042",
               }
          }
     )


class PaymentInvoiceSummary(CamelModel):
     id: int
     number: str
     status: str


class PaymentResponse(CamelModel):
     """Response for payment endpoints."""

     id: int
     deal_id: int
     invoice_id: Optional[int] = None
     amount: float
     date: dt.date
     method: Optional[str] = None
     reference: Optional[str] = None
     created_at: Optional[dt.datetime] = None

     deal: Optional[InvoiceDealSummary] = None
     invoice: Optional[PaymentInvoiceSummary] = None


class ExpenseCreate(CamelModel):
     date: Optional[dt.date] = None
     amount: float = Field(..., gt=0)
     category: Optional[str] = None
     description: Optional[str] = None


class ExpenseResponse(CamelModel):
     id: int
     date: dt.date
     amount: float
     category: Optional[str] = None
     description: Optional[str] = None
     created_at: Optional[dt.datetime] = None
