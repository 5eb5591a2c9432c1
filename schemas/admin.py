# schemas/admin.py
"""
Schemas for backoffice reporting: dashboard, stats, search and audit trail.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from .common import CamelModel
from .client import ClientResponse
from .content import ServiceResponse
from .deal import DealResponse
from .project import ProjectResponse
from .property import PropertyResponse


class DashboardResponse(CamelModel):
     deals_open: int
     invoices_open: int
     payments_month: float
     expenses_month: float


class StatusCount(CamelModel):
     status: Optional[str] = None
     count: int


class StatsResponse(CamelModel):
     total_properties: int
     total_projects: int
     total_clients: int
     total_deals: int
     properties_by_status: List[StatusCount]
     projects_by_status: List[StatusCount]
     recent_deals: List[DealResponse]


class SearchResponse(CamelModel):
     properties: List[PropertyResponse] = []
     projects: List[ProjectResponse] = []
     clients: List[ClientResponse] = []
     services: List[ServiceResponse] = []


class AuditLogResponse(CamelModel):
     id: int
     user_id: Optional[int] = None
     action: str
     entity: str
     entity_id: Optional[int] = None
     before: Optional[Dict[str, Any]] = None
     after: Optional[Dict[str, Any]] = None
     created_at: Optional[datetime] = None


class AuditLogPage(CamelModel):
     logs: List[AuditLogResponse]
     total: int
     limit: int
     offset: int
