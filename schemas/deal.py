# schemas/deal.py
"""
Pydantic schemas for deals and their payment schedules.
"""
from datetime import date, datetime
from typing import Optional
from pydantic import Field, ConfigDict

from .common import CamelModel
from .client import ClientResponse


class DealCreate(CamelModel):
     """Schema for creating a deal."""
     client_id: int = Field(..., gt=0, description="Client ID (must exist)")
     property_id: Optional[int] = Field(None, gt=0, description="Property ID, when the deal concerns one")
     type: str = Field(default="sale", description="sale, purchase or rent")
     base_price: float = Field(0, ge=0)
     discount: float = Field(0, ge=0)
     tax_rate: float = Field(0, ge=0)
     commission_rate: float = Field(0, ge=0)
     status: str = Field(default="draft", description="draft, signed, closed or cancelled")
     notes: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "clientId": 1,
                    "propertyId": 1,
                    "type": "sale",
                    "basePrice": 85000000,
                    "discount": 2000000,
                    "taxRate": 0.18,
                    "status": "draft",
               }
          }
     )


class DealUpdate(CamelModel):
     """Schema for updating a deal; only fields sent are changed."""
     client_id: Optional[int] = Field(None, gt=0)
     property_id: Optional[int] = Field(None, gt=0)
     type: Optional[str] = None
     base_price: Optional[float] = Field(None, ge=0)
     discount: Optional[float] = Field(None, ge=0)
     tax_rate: Optional[float] = Field(None, ge=0)
     commission_rate: Optional[float] = Field(None, ge=0)
     status: Optional[str] = None
     notes: Optional[str] = None


class DealPropertySummary(CamelModel):
     id: int
     slug: str
     title: str
     location: Optional[str] = None


class DealResponse(CamelModel):
     """Schema for deal response."""
     id: int
     client_id: int
     property_id: Optional[int] = None
     type: str
     base_price: float
     discount: float
     tax_rate: float
     commission_rate: float
     status: str
     notes: Optional[str] = None
     created_at: Optional[datetime] = None

     # Optional related data
     client: Optional[ClientResponse] = None
     property: Optional[DealPropertySummary] = None


class ScheduleCreate(CamelModel):
     label: Optional[str] = None
     due_date: date
     amount: float = Field(..., gt=0)
     status: Optional[str] = None


class ScheduleUpdate(CamelModel):
     """
     Schema for updating a schedule. Setting status to "paid" requires a
     payment id, either sent here or already recorded.
     """
     label: Optional[str] = None
     due_date: Optional[date] = None
     amount: Optional[float] = Field(None, gt=0)
     status: Optional[str] = None
     payment_id: Optional[int] = Field(None, gt=0)


class ScheduleResponse(CamelModel):
     id: int
     deal_id: int
     label: Optional[str] = None
     due_date: date
     amount: float
     status: str
     payment_id: Optional[int] = None
