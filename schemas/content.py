# schemas/content.py
"""
Pydantic schemas for storefront content: services, leads, CMS page blocks
and company information.
"""
from datetime import datetime
from typing import Optional
from pydantic import ConfigDict

from .common import CamelModel


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------

class ServiceCard(CamelModel):
     """Public shape of a service."""
     id: int
     title: str
     description: str = ""
     icon: Optional[str] = None
     slug: Optional[str] = None


class ServiceCreate(CamelModel):
     name: Optional[str] = None
     title: Optional[str] = None
     description: Optional[str] = None
     content: Optional[str] = None
     icon: Optional[str] = None
     slug: Optional[str] = None


class ServiceUpdate(ServiceCreate):
     pass


class ServiceResponse(ServiceCreate):
     id: int


# ---------------------------------------------------------------------------
# Leads
# ---------------------------------------------------------------------------

class LeadCreate(CamelModel):
     """Contact form submission."""
     name: Optional[str] = None
     email: Optional[str] = None
     phone: Optional[str] = None
     message: Optional[str] = None
     property_id: Optional[int] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "name": "Awa Koné",
                    "email": "awa@example.com",
                    "message": "Je souhaite visiter la villa.",
                    "propertyId": 1,
               }
          }
     )


class LeadUpdate(CamelModel):
     status: Optional[str] = None
     notes: Optional[str] = None


class LeadResponse(CamelModel):
     id: int
     name: str
     email: Optional[str] = None
     phone: Optional[str] = None
     message: str
     property_id: Optional[int] = None
     status: str
     notes: Optional[str] = None
     created_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Page content
# ---------------------------------------------------------------------------

class PageContentUpsert(CamelModel):
     section: Optional[str] = None
     key: Optional[str] = None
     value: Optional[str] = None


class PageContentResponse(CamelModel):
     id: int
     page: str
     section: str
     key: str
     value: Optional[str] = None


# ---------------------------------------------------------------------------
# Company info
# ---------------------------------------------------------------------------

class CompanyInfoCreate(CamelModel):
     key: Optional[str] = None
     value: Optional[str] = None
     category: Optional[str] = None
     label: Optional[str] = None
     order: Optional[int] = None


class CompanyInfoUpdate(CamelModel):
     value: Optional[str] = None
     category: Optional[str] = None
     label: Optional[str] = None
     order: Optional[int] = None
     is_active: Optional[bool] = None


class CompanyInfoResponse(CamelModel):
     id: int
     key: str
     value: str
     category: str
     label: Optional[str] = None
     order: int = 0
     is_active: bool = True
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
