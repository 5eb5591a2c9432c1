# routers/leads.py
"""
Contact leads: public submission and backoffice follow-up.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import ContactLead, Property, UserRole
from schemas.content import LeadCreate, LeadResponse, LeadUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leads", tags=["leads"])
admin_router = APIRouter(prefix="/api/admin/leads", tags=["admin: leads"])

ADMIN_LIST_LIMIT = 100


@router.post("", response_model=LeadResponse, summary="Submit the contact form")
def create_lead(body: LeadCreate, db: Session = Depends(get_session)):
     """
     Record a contact request, optionally about a property. A property id
     that does not exist is dropped rather than rejected.
     """
     if not body.name or not body.message:
          raise APIError(400, "name and message required")

     property_id = body.property_id or None
     if property_id is not None and not db.query(Property.id).filter(Property.id == property_id).first():
          logger.info("Lead references unknown property %s", property_id)
          property_id = None

     lead = ContactLead(
          name=body.name,
          email=body.email,
          phone=body.phone,
          message=body.message,
          property_id=property_id,
     )
     db.add(lead)
     db.commit()
     db.refresh(lead)
     return lead


@admin_router.get("", response_model=List[LeadResponse], summary="List leads")
def list_leads(
     status: Optional[str] = Query(None, description="Filter by lead status"),
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     """The 100 most recent leads."""
     with store_errors("Failed to get leads"):
          query = db.query(ContactLead)
          if status:
               query = query.filter(ContactLead.status == status)
          return (
               query.order_by(ContactLead.created_at.desc(), ContactLead.id.desc())
               .limit(ADMIN_LIST_LIMIT)
               .all()
          )


@admin_router.patch("/{lead_id}", response_model=LeadResponse, summary="Update a lead")
def update_lead(
     lead_id: RowId,
     body: LeadUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     lead = db.query(ContactLead).filter(ContactLead.id == lead_id).first()
     if not lead:
          raise APIError(404, "Lead not found")

     if body.status:
          lead.status = body.status
     if "notes" in body.model_fields_set:
          lead.notes = body.notes

     db.commit()
     db.refresh(lead)
     return lead
