# routers/payments.py
"""
Payment and expense API routes (backoffice).
"""
import logging
from datetime import date
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, selectinload

from database import get_session
from dependencies import require_role
from errors import APIError, store_errors
from models import Deal, Expense, Invoice, Payment, PaymentSchedule, UserRole
from schemas.payment import ExpenseCreate, ExpenseResponse, PaymentCreate, PaymentResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin: payments"])

sales_team = require_role(UserRole.ADMIN, UserRole.SALES)


@router.get("/payments", response_model=List[PaymentResponse], summary="List payments")
def list_payments(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """Most recent first, with deal and invoice."""
     with store_errors("Failed to list payments"):
          return (
               db.query(Payment)
               .options(selectinload(Payment.deal), selectinload(Payment.invoice))
               .order_by(Payment.date.desc(), Payment.id.desc())
               .all()
          )


@router.post("/payments", response_model=PaymentResponse, summary="Record a payment")
def create_payment(
     body: PaymentCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """
     Record money received on a deal.

     When **scheduleId** is given, that schedule is marked paid and linked
     to this payment in the same transaction.
     """
     if not db.query(Deal.id).filter(Deal.id == body.deal_id).first():
          raise APIError(404, "Deal not found")
     if body.invoice_id is not None and not db.query(Invoice.id).filter(Invoice.id == body.invoice_id).first():
          raise APIError(404, "Invoice not found")

     schedule = None
     if body.schedule_id is not None:
          schedule = (
               db.query(PaymentSchedule)
               .filter(PaymentSchedule.id == body.schedule_id, PaymentSchedule.deal_id == body.deal_id)
               .first()
          )
          if not schedule:
               raise APIError(404, "Schedule not found")

     payment = Payment(
          deal_id=body.deal_id,
          invoice_id=body.invoice_id,
          amount=body.amount,
          date=body.date or date.today(),
          method=body.method,
          reference=body.reference,
     )
     db.add(payment)
     db.flush()  # Flush to get the ID without committing

     if schedule is not None:
          schedule.mark_as_paid(payment.id)

     db.commit()
     db.refresh(payment)
     logger.info("Recorded payment %s on deal %s", payment.id, payment.deal_id)
     return payment


@router.get("/expenses", response_model=List[ExpenseResponse], summary="List expenses")
def list_expenses(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     with store_errors("Failed to list expenses"):
          return db.query(Expense).order_by(Expense.date.desc(), Expense.id.desc()).all()


@router.post("/expenses", response_model=ExpenseResponse, summary="Record an expense")
def create_expense(
     body: ExpenseCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     expense = Expense(
          date=body.date or date.today(),
          amount=body.amount,
          category=body.category,
          description=body.description,
     )
     db.add(expense)
     db.commit()
     db.refresh(expense)
     return expense
