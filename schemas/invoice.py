# schemas/invoice.py
"""
Pydantic schemas for Invoice API request/response validation.
"""
from datetime import date, datetime
from typing import Optional
from pydantic import Field, ConfigDict
from enum import Enum

from .common import CamelModel


class InvoiceStatusEnum(str, Enum):
     """Invoice payment status options."""
     OPEN = "open"
     PAID = "paid"
     CANCELLED = "cancelled"


class InvoiceCreate(CamelModel):
     """Schema for creating a new invoice. The number is assigned by the server."""
     deal_id: int = Field(..., gt=0, description="Deal ID (must exist)")
     amount: float = Field(..., gt=0, description="Invoice amount")
     issue_date: Optional[date] = Field(None, description="Issue date (defaults to today)")
     due_date: Optional[date] = Field(None, description="Payment due date")
     status: InvoiceStatusEnum = Field(default=InvoiceStatusEnum.OPEN, description="Payment status")

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "dealId": 1,
                    "amount": 5000000.00,
                    "dueDate": "2026-11-30",
                    "status": "open"
               }
          }
     )


class InvoiceDealSummary(CamelModel):
     id: int
     client_id: int
     property_id: Optional[int] = None
     type: str
     status: str


class InvoiceResponse(CamelModel):
     """Schema for invoice response."""
     id: int
     deal_id: int
     number: str
     issue_date: date
     due_date: Optional[date] = None
     amount: float
     status: str
     is_overdue: bool = False
     created_at: Optional[datetime] = None

     # Optional related data
     deal: Optional[InvoiceDealSummary] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "id": 1,
                    "dealId": 1,
                    "number": "INV202610-0001",
                    "issueDate": "2026-10-19",
                    "dueDate": "2026-11-30",
                    "amount": 5000000.00,
                    "status": "open",
                    "isOverdue": False,
                    "createdAt": "2026-10-19T10:30:00"
               }
          }
     )
