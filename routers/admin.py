# routers/admin.py
"""
Backoffice reporting: dashboard, statistics, global search, audit trail
and exports.
"""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from database import get_session
from dependencies import require_role
from errors import APIError, store_errors
from models import AuditLog, Client, Deal, Expense, Invoice, Payment, Project, Property, Service, UserRole
from models.invoice import InvoiceStatus
from routers.projects import build_project_response, project_search_filter
from routers.properties import build_property_response, property_search_filter
from schemas.admin import AuditLogPage, DashboardResponse, SearchResponse, StatsResponse
from services.export_service import (
     CUSTOM_EXPORT_TYPES,
     custom_export_rows,
     properties_csv,
     rows_to_csv,
     workbook_bytes,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])

sales_team = require_role(UserRole.ADMIN, UserRole.SALES)

CLOSED_DEAL_STATUSES = ("closed", "cancelled")
SEARCH_LIMIT = 10
RECENT_DEALS = 5

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _month_start(today: Optional[date] = None) -> date:
     return (today or date.today()).replace(day=1)


@router.get("/dashboard", response_model=DashboardResponse, summary="Backoffice dashboard")
def dashboard(
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     """
     - **dealsOpen**: deals neither closed nor cancelled
     - **invoicesOpen**: invoices with status open
     - **paymentsMonth** / **expensesMonth**: sums since the 1st of the month
     """
     month_start = _month_start()
     with store_errors("Failed to load dashboard"):
          deals_open = db.query(func.count(Deal.id)).filter(Deal.status.notin_(CLOSED_DEAL_STATUSES)).scalar()
          invoices_open = (
               db.query(func.count(Invoice.id))
               .filter(Invoice.status == InvoiceStatus.OPEN.value)
               .scalar()
          )
          payments_month = (
               db.query(func.coalesce(func.sum(Payment.amount), 0))
               .filter(Payment.date >= month_start)
               .scalar()
          )
          expenses_month = (
               db.query(func.coalesce(func.sum(Expense.amount), 0))
               .filter(Expense.date >= month_start)
               .scalar()
          )

     return DashboardResponse(
          deals_open=deals_open or 0,
          invoices_open=invoices_open or 0,
          payments_month=float(payments_month or 0),
          expenses_month=float(expenses_month or 0),
     )


@router.get("/stats", response_model=StatsResponse, summary="Global statistics")
def stats(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     with store_errors("Failed to get stats"):
          properties_by_status = (
               db.query(Property.status, func.count(Property.id))
               .group_by(Property.status)
               .order_by(Property.status)
               .all()
          )
          projects_by_status = (
               db.query(Project.status, func.count(Project.id))
               .group_by(Project.status)
               .order_by(Project.status)
               .all()
          )
          recent_deals = (
               db.query(Deal)
               .options(selectinload(Deal.client), selectinload(Deal.property))
               .order_by(Deal.created_at.desc(), Deal.id.desc())
               .limit(RECENT_DEALS)
               .all()
          )
          return StatsResponse(
               total_properties=db.query(func.count(Property.id)).scalar(),
               total_projects=db.query(func.count(Project.id)).scalar(),
               total_clients=db.query(func.count(Client.id)).scalar(),
               total_deals=db.query(func.count(Deal.id)).scalar(),
               properties_by_status=[{"status": s, "count": c} for s, c in properties_by_status],
               projects_by_status=[{"status": s, "count": c} for s, c in projects_by_status],
               recent_deals=recent_deals,
          )


@router.get("/search", response_model=SearchResponse, summary="Search across the backoffice")
def search(
     q: Optional[str] = Query(None, description="Case-insensitive substring"),
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """Up to 10 matches each of properties, projects, clients and services."""
     q = (q or "").strip()
     if not q:
          return SearchResponse()

     with store_errors("Failed to search"):
          properties = (
               db.query(Property)
               .options(selectinload(Property.images))
               .filter(property_search_filter(q))
               .order_by(Property.id.desc())
               .limit(SEARCH_LIMIT)
               .all()
          )
          projects = (
               db.query(Project)
               .options(selectinload(Project.medias))
               .filter(project_search_filter(q))
               .order_by(Project.id.desc())
               .limit(SEARCH_LIMIT)
               .all()
          )
          clients = (
               db.query(Client)
               .filter(or_(
                    Client.name.icontains(q, autoescape=True),
                    Client.email.icontains(q, autoescape=True),
                    Client.phone.icontains(q, autoescape=True),
               ))
               .order_by(Client.name.asc())
               .limit(SEARCH_LIMIT)
               .all()
          )
          services = (
               db.query(Service)
               .filter(or_(
                    Service.name.icontains(q, autoescape=True),
                    Service.title.icontains(q, autoescape=True),
                    Service.description.icontains(q, autoescape=True),
               ))
               .order_by(Service.id.asc())
               .limit(SEARCH_LIMIT)
               .all()
          )
          return SearchResponse(
               properties=[build_property_response(p) for p in properties],
               projects=[build_project_response(p) for p in projects],
               clients=clients,
               services=services,
          )


@router.get("/audit-logs", response_model=AuditLogPage, summary="Audit trail")
def audit_logs(
     limit: int = Query(50, ge=1, le=500),
     offset: int = Query(0, ge=0),
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     """Newest first."""
     with store_errors("Failed to get audit logs"):
          logs = (
               db.query(AuditLog)
               .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
               .offset(offset)
               .limit(limit)
               .all()
          )
          total = db.query(func.count(AuditLog.id)).scalar()
     return AuditLogPage(logs=logs, total=total, limit=limit, offset=offset)


# ---------------------------------------------------------------------------
# Exports
# ---------------------------------------------------------------------------

@router.get("/export/properties.csv", summary="Properties as CSV")
def export_properties_csv(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     with store_errors("Failed to export"):
          content = properties_csv(db)
     return Response(
          content=content,
          media_type="text/csv; charset=utf-8",
          headers={"Content-Disposition": 'attachment; filename="properties.csv"'},
     )


@router.get("/export/all.xlsx", summary="Workbook of all transactions")
def export_workbook(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """Sheets: Properties, Services, Deals, Invoices, Payments, Expenses."""
     with store_errors("Failed to export"):
          content = workbook_bytes(db)
     return Response(
          content=content,
          media_type=XLSX_MEDIA_TYPE,
          headers={"Content-Disposition": 'attachment; filename="export.xlsx"'},
     )


@router.get("/export/custom", summary="Custom export")
def export_custom(
     type: Optional[str] = Query(None, description="properties, projects, clients or deals"),
     format: str = Query("json", description="json or csv"),
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     if type not in CUSTOM_EXPORT_TYPES:
          raise APIError(400, "Invalid type")

     with store_errors("Failed to export"):
          rows = custom_export_rows(db, type)

     if format == "csv":
          return Response(
               content=rows_to_csv(rows),
               media_type="text/csv; charset=utf-8",
               headers={"Content-Disposition": f'attachment; filename="{type}-export.csv"'},
          )
     return JSONResponse(content=rows)
