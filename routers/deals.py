# routers/deals.py
"""
Deal and payment-schedule API routes (backoffice).

Deals are audited. A schedule can only be marked paid together with the
payment that settled it.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from database import get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import Client, Deal, Payment, PaymentSchedule, Property, ScheduleStatus, UserRole
from schemas.common import OkResponse
from schemas.deal import (
     DealCreate,
     DealResponse,
     DealUpdate,
     ScheduleCreate,
     ScheduleResponse,
     ScheduleUpdate,
)
from services.audit_service import (
     ACTION_CREATE,
     ACTION_DELETE,
     ACTION_UPDATE,
     actor_id_from_claims,
     record_audit,
     snapshot,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin: deals"])

sales_team = require_role(UserRole.ADMIN, UserRole.SALES)

PAID_WITHOUT_PAYMENT = "A paid schedule requires a paymentId"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _get_deal(db: Session, deal_id: int) -> Deal:
     deal = (
          db.query(Deal)
          .options(selectinload(Deal.client), selectinload(Deal.property))
          .filter(Deal.id == deal_id)
          .first()
     )
     if not deal:
          raise APIError(404, "Deal not found")
     return deal


def _check_references(db: Session, client_id: Optional[int], property_id: Optional[int]) -> None:
     if client_id is not None and not db.query(Client.id).filter(Client.id == client_id).first():
          raise APIError(404, "Client not found")
     if property_id is not None and not db.query(Property.id).filter(Property.id == property_id).first():
          raise APIError(404, "Property not found")


def _check_payment(db: Session, payment_id: Optional[int]) -> None:
     if payment_id is not None and not db.query(Payment.id).filter(Payment.id == payment_id).first():
          raise APIError(404, "Payment not found")


# ---------------------------------------------------------------------------
# Deals
# ---------------------------------------------------------------------------

@router.get("/deals", response_model=List[DealResponse], summary="List deals")
def list_deals(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """Newest first, with client and property."""
     with store_errors("Failed to list deals"):
          return (
               db.query(Deal)
               .options(selectinload(Deal.client), selectinload(Deal.property))
               .order_by(Deal.created_at.desc(), Deal.id.desc())
               .all()
          )


@router.post("/deals", response_model=DealResponse, summary="Create a deal")
def create_deal(
     body: DealCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     _check_references(db, body.client_id, body.property_id)

     deal = Deal(**body.model_dump())
     db.add(deal)
     db.commit()
     db.refresh(deal)

     record_audit(db, actor_id_from_claims(token), ACTION_CREATE, "Deal", deal.id, after=snapshot(deal))
     return deal


@router.put("/deals/{deal_id}", response_model=DealResponse, summary="Update a deal")
def update_deal(
     deal_id: RowId,
     body: DealUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     deal = _get_deal(db, deal_id)
     before = snapshot(deal)

     data = body.model_dump(exclude_unset=True)
     _check_references(db, data.get("client_id"), data.get("property_id"))
     for field, value in data.items():
          if value is None and field != "property_id" and field != "notes":
               continue  # required columns
          setattr(deal, field, value)
     db.commit()
     db.refresh(deal)

     record_audit(db, actor_id_from_claims(token), ACTION_UPDATE, "Deal", deal_id, before=before, after=snapshot(deal))
     return deal


@router.delete("/deals/{deal_id}", response_model=OkResponse, summary="Delete a deal")
def delete_deal(
     deal_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     """
     Delete a deal together with its schedules, invoices and payments.
     """
     deal = _get_deal(db, deal_id)
     before = snapshot(deal)

     db.delete(deal)
     db.commit()
     logger.info("Deleted deal %s", deal_id)

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "Deal", deal_id, before=before)
     return OkResponse()


# ---------------------------------------------------------------------------
# Payment schedules
# ---------------------------------------------------------------------------

@router.get("/deals/{deal_id}/schedules", response_model=List[ScheduleResponse], summary="List a deal's schedules")
def list_schedules(
     deal_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """Instalments ordered by due date."""
     return (
          db.query(PaymentSchedule)
          .filter(PaymentSchedule.deal_id == deal_id)
          .order_by(PaymentSchedule.due_date.asc(), PaymentSchedule.id.asc())
          .all()
     )


@router.post("/deals/{deal_id}/schedules", response_model=ScheduleResponse, summary="Add a schedule")
def create_schedule(
     deal_id: RowId,
     body: ScheduleCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """
     New instalments start pending. Use POST /api/admin/payments with a
     scheduleId to settle one.
     """
     _get_deal(db, deal_id)
     status = body.status or ScheduleStatus.PENDING.value
     if status == ScheduleStatus.PAID.value:
          raise APIError(400, PAID_WITHOUT_PAYMENT)

     schedule = PaymentSchedule(
          deal_id=deal_id,
          label=body.label,
          due_date=body.due_date,
          amount=body.amount,
          status=status,
     )
     db.add(schedule)
     db.commit()
     db.refresh(schedule)
     return schedule


@router.put("/schedules/{schedule_id}", response_model=ScheduleResponse, summary="Update a schedule")
def update_schedule(
     schedule_id: RowId,
     body: ScheduleUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """
     Partial update. A schedule ends up "paid" only when it references the
     payment that settled it (sent as paymentId or already recorded).
     """
     schedule = db.query(PaymentSchedule).filter(PaymentSchedule.id == schedule_id).first()
     if not schedule:
          raise APIError(404, "Schedule not found")

     data = body.model_dump(exclude_unset=True)
     status = data.get("status") or schedule.status
     payment_id = data["payment_id"] if "payment_id" in data else schedule.payment_id
     if status == ScheduleStatus.PAID.value and payment_id is None:
          raise APIError(400, PAID_WITHOUT_PAYMENT)
     _check_payment(db, data.get("payment_id"))

     for field, value in data.items():
          if value is None and field in ("due_date", "amount", "status"):
               continue  # required columns
          setattr(schedule, field, value)
     db.commit()
     db.refresh(schedule)
     return schedule
