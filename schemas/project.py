# schemas/project.py
"""
Pydantic schemas for Project API request/response validation.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import ConfigDict

from .common import CamelModel


class ProjectMediaCreate(CamelModel):
     kind: str = "image"
     url: Optional[str] = None
     alt: Optional[str] = None
     order: int = 0


class ProjectMediaResponse(CamelModel):
     id: int
     project_id: int
     kind: str
     url: str
     alt: Optional[str] = None
     order: int = 0


class ProjectUpdate(CamelModel):
     """
     Schema for updating a project; only fields sent are changed. `status`
     accepts a phase code (planned, ongoing, delivered) or a French label.
     """
     title: Optional[str] = None
     slug: Optional[str] = None
     description: Optional[str] = None
     cover_image: Optional[str] = None
     status: Optional[str] = None
     category: Optional[str] = None
     location: Optional[str] = None
     surface: Optional[float] = None
     units: Optional[int] = None
     started_at: Optional[datetime] = None
     delivered_at: Optional[datetime] = None


class ProjectUpsert(ProjectUpdate):
     """
     Schema for POST /api/admin/projects: updates the project `id` when
     given, otherwise creates or replaces the project with this slug.
     """
     id: Optional[int] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "title": "Cité des Palmiers",
                    "slug": "cite-des-palmiers",
                    "status": "en cours",
                    "location": "Assinie",
                    "startedAt": "2025-03-01T00:00:00",
               }
          }
     )


class ProjectResponse(CamelModel):
     """Project with normalized phase and ordered medias."""
     id: int
     slug: str
     title: str
     description: Optional[str] = None
     cover_image: Optional[str] = None
     status: Optional[str] = None
     category: Optional[str] = None
     location: Optional[str] = None
     surface: Optional[float] = None
     units: Optional[int] = None
     started_at: Optional[datetime] = None
     delivered_at: Optional[datetime] = None
     created_at: Optional[datetime] = None
     updated_at: Optional[datetime] = None
     medias: List[ProjectMediaResponse] = []
