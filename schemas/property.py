# schemas/property.py
"""
Pydantic schemas for Property API request/response validation.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import Field, ConfigDict

from .common import CamelModel
from .client import ClientResponse


class PropertyImageCreate(CamelModel):
     """Schema for adding a gallery image."""
     url: Optional[str] = None
     alt: Optional[str] = None
     order: int = 0


class PropertyImageResponse(CamelModel):
     id: int
     property_id: int
     url: str
     alt: Optional[str] = None
     order: int = 0


class PropertyCreate(CamelModel):
     """
     Schema for creating a property. `status` accepts a code (sale, rent,
     sold) or a French label; unrecognized values are stored as given.
     """
     slug: Optional[str] = None
     title: Optional[str] = None
     location: Optional[str] = None
     price: Optional[float] = Field(None, ge=0)
     status: Optional[str] = None
     category: Optional[str] = None
     description: Optional[str] = None
     area: Optional[float] = None
     bedrooms: Optional[int] = None
     bathrooms: Optional[int] = None
     main_image: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "slug": "villa-bingerville",
                    "title": "Villa 5 pièces à Bingerville",
                    "location": "Bingerville",
                    "price": 85000000,
                    "status": "à vendre",
                    "category": "villa",
               }
          }
     )


class PropertyUpdate(PropertyCreate):
     """Schema for updating a property; only fields sent are changed."""


class PropertyResponse(CamelModel):
     """Property with normalized status, French label and ordered images."""
     id: int
     slug: str
     title: str
     location: Optional[str] = None
     price: Optional[float] = None
     status: Optional[str] = None
     status_label: Optional[str] = None
     category: Optional[str] = None
     description: Optional[str] = None
     area: Optional[float] = None
     bedrooms: Optional[int] = None
     bathrooms: Optional[int] = None
     main_image: Optional[str] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     images: List[PropertyImageResponse] = []


class CoOwnerCreate(CamelModel):
     client_id: int = Field(..., gt=0)
     share: float = Field(0, ge=0, le=1, description="Fraction of the property held")


class CoOwnerResponse(CamelModel):
     id: int
     property_id: int
     client_id: int
     share: float
     client: Optional[ClientResponse] = None
