# schemas/client.py
from datetime import datetime
from typing import Optional
from pydantic import Field

from .common import CamelModel


class ClientCreate(CamelModel):
     """Schema for creating a client."""
     name: str = Field(..., min_length=1, max_length=200)
     email: Optional[str] = None
     phone: Optional[str] = None
     address: Optional[str] = None
     notes: Optional[str] = None


class ClientUpdate(CamelModel):
     """Schema for updating a client; only fields sent are changed."""
     name: Optional[str] = Field(None, min_length=1, max_length=200)
     email: Optional[str] = None
     phone: Optional[str] = None
     address: Optional[str] = None
     notes: Optional[str] = None


class ClientResponse(CamelModel):
     id: int
     name: str
     email: Optional[str] = None
     phone: Optional[str] = None
     address: Optional[str] = None
     notes: Optional[str] = None
     created_at: Optional[datetime] = None


class ClientImportResponse(CamelModel):
     imported: int
     skipped: int
