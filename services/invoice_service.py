# services/invoice_service.py
"""
Invoice Service - Business logic layer for invoice operations.

Numbering follows INV<YYYY><MM>-<NNNN>: the sequence is the highest number
already issued with the current month's prefix plus one, restarting at 0001
every month. The read and the insert share one transaction; the unique
constraint on `number` rejects a concurrent duplicate instead of storing it.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import APIError
from models import Deal, Invoice
from models.invoice import InvoiceStatus

logger = logging.getLogger(__name__)

SEQUENCE_WIDTH = 4


def invoice_prefix(day: date) -> str:
     return f"INV{day.year:04d}{day.month:02d}-"


def parse_sequence(number: Optional[str], prefix: str) -> int:
     """Sequence part of an invoice number sharing `prefix`, 0 when absent or malformed."""
     if not number or not number.startswith(prefix):
          return 0
     try:
          return int(number[len(prefix):])
     except ValueError:
          return 0


class InvoiceService:
     """Service class for invoice-related business logic."""

     @staticmethod
     def next_invoice_number(db: Session, today: Optional[date] = None) -> str:
          """
          Compute the next invoice number for the month of `today`.

          Args:
               db: SQLAlchemy database session
               today: Issue day (defaults to the current date)

          Returns:
               The next number, e.g. INV202610-0007
          """
          today = today or date.today()
          prefix = invoice_prefix(today)
          numbers = (
               db.query(Invoice.number)
               .filter(Invoice.number.like(f"{prefix}%"))
               .all()
          )
          highest = max((parse_sequence(row[0], prefix) for row in numbers), default=0)
          return f"{prefix}{highest + 1:0{SEQUENCE_WIDTH}d}"

     @staticmethod
     def create_invoice(
          db: Session,
          deal_id: int,
          amount: Decimal,
          issue_date: Optional[date] = None,
          due_date: Optional[date] = None,
          status: Optional[str] = None,
     ) -> Invoice:
          """
          Number and insert an invoice in a single commit.

          Raises:
               APIError: 404 when the deal doesn't exist, 409 when another
                    request issued the same number first
          """
          deal = db.query(Deal).filter(Deal.id == deal_id).first()
          if not deal:
               raise APIError(404, "Deal not found")

          today = date.today()
          invoice = Invoice(
               deal_id=deal_id,
               number=InvoiceService.next_invoice_number(db, today),
               issue_date=issue_date or today,
               due_date=due_date,
               amount=amount,
               status=status or InvoiceStatus.OPEN.value,
          )
          db.add(invoice)
          try:
               db.commit()
          except IntegrityError as exc:
               db.rollback()
               logger.warning("Invoice number %s already issued: %s", invoice.number, exc.orig)
               raise APIError(409, "Invoice number conflict, retry", str(exc.orig))
          db.refresh(invoice)
          return invoice

