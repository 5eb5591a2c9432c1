# routers/content.py
"""
CMS page blocks and company information.

Values are free-form text; page blocks are addressed by (page, section, key)
and company information by its unique key.
"""
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import commit_or_conflict, get_session
from dependencies import require_role
from errors import APIError, store_errors
from models import CompanyInfo, PageContent, UserRole
from schemas.common import OkResponse
from schemas.content import (
     CompanyInfoCreate,
     CompanyInfoResponse,
     CompanyInfoUpdate,
     PageContentResponse,
     PageContentUpsert,
)
from services.audit_service import (
     ACTION_CREATE,
     ACTION_DELETE,
     ACTION_UPDATE,
     actor_id_from_claims,
     record_audit,
     snapshot,
)

page_router = APIRouter(prefix="/api/page", tags=["page content"])
company_router = APIRouter(prefix="/api/company-info", tags=["company info"])
admin_company_router = APIRouter(prefix="/api/admin/company-info", tags=["admin: company info"])


# ---------------------------------------------------------------------------
# Page content
# ---------------------------------------------------------------------------

@page_router.get("/{page}", response_model=Dict[str, Dict[str, Optional[str]]], summary="Page blocks")
def get_page(page: str, db: Session = Depends(get_session)):
     """All blocks of a page as {section: {key: value}}."""
     page = page.strip()
     with store_errors("Failed to get page content"):
          rows = (
               db.query(PageContent)
               .filter(PageContent.page == page)
               .order_by(PageContent.id)
               .all()
          )
     out: Dict[str, Dict[str, Optional[str]]] = {}
     for row in rows:
          out.setdefault(row.section, {})[row.key] = row.value
     return out


@page_router.post("/{page}", response_model=PageContentResponse, summary="Write a page block")
def upsert_page_block(page: str, body: PageContentUpsert, db: Session = Depends(get_session)):
     """Create the (page, section, key) block or replace its value."""
     page = page.strip()
     if not page or not body.section or not body.key:
          raise APIError(400, "page, section and key are required")

     row = (
          db.query(PageContent)
          .filter(
               PageContent.page == page,
               PageContent.section == body.section,
               PageContent.key == body.key,
          )
          .first()
     )
     if row:
          row.value = body.value
     else:
          row = PageContent(page=page, section=body.section, key=body.key, value=body.value)
          db.add(row)
     commit_or_conflict(db, "Page block already exists")
     db.refresh(row)
     return row


# ---------------------------------------------------------------------------
# Company info (public)
# ---------------------------------------------------------------------------

@company_router.get("", response_model=Dict[str, Dict[str, str]], summary="Company info by category")
def get_company_info(
     category: Optional[str] = Query(None, description="Restrict to one category"),
     db: Session = Depends(get_session)
):
     """Active entries grouped as {category: {key: value}}."""
     with store_errors("Failed to get company info", with_details=False):
          query = db.query(CompanyInfo).filter(CompanyInfo.is_active.is_(True))
          if category:
               query = query.filter(CompanyInfo.category == category)
          rows = query.order_by(CompanyInfo.category.asc(), CompanyInfo.order.asc()).all()

     organized: Dict[str, Dict[str, str]] = {}
     for info in rows:
          organized.setdefault(info.category, {})[info.key] = info.value
     return organized


@company_router.get("/{key}", response_model=CompanyInfoResponse, summary="One company info entry")
def get_company_info_entry(key: str, db: Session = Depends(get_session)):
     info = db.query(CompanyInfo).filter(CompanyInfo.key == key).first()
     if not info:
          raise APIError(404, "Info not found")
     return info


# ---------------------------------------------------------------------------
# Company info (backoffice)
# ---------------------------------------------------------------------------

@admin_company_router.post("", response_model=CompanyInfoResponse, summary="Create a company info entry")
def create_company_info(
     body: CompanyInfoCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     if not body.key or not body.value or not body.category:
          raise APIError(400, "key, value and category are required")

     info = CompanyInfo(
          key=body.key,
          value=body.value,
          category=body.category,
          label=body.label,
          order=body.order or 0,
     )
     db.add(info)
     commit_or_conflict(db, "Key already exists")
     db.refresh(info)

     record_audit(db, actor_id_from_claims(token), ACTION_CREATE, "CompanyInfo", info.id, after=snapshot(info))
     return info


@admin_company_router.put("/{key}", response_model=CompanyInfoResponse, summary="Update a company info entry")
def update_company_info(
     key: str,
     body: CompanyInfoUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     info = db.query(CompanyInfo).filter(CompanyInfo.key == key).first()
     if not info:
          raise APIError(404, "Info not found")

     before = snapshot(info)
     for field, value in body.model_dump(exclude_unset=True).items():
          if value is None and field in ("value", "category", "order", "is_active"):
               continue  # required columns
          setattr(info, field, value)
     db.commit()
     db.refresh(info)

     record_audit(db, actor_id_from_claims(token), ACTION_UPDATE, "CompanyInfo", info.id, before=before, after=snapshot(info))
     return info


@admin_company_router.delete("/{key}", response_model=OkResponse, summary="Delete a company info entry")
def delete_company_info(
     key: str,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     info = db.query(CompanyInfo).filter(CompanyInfo.key == key).first()
     if not info:
          raise APIError(404, "Info not found")

     before = snapshot(info)
     db.delete(info)
     db.commit()

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "CompanyInfo", before["id"], before=before)
     return OkResponse()
