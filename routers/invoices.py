# routers/invoices.py
"""
Invoice API routes (backoffice).

Numbers are assigned by the server (INV<YYYY><MM>-<NNNN>); see
services.invoice_service for the sequencing rules.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session, selectinload

from database import get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import Deal, Invoice, UserRole
from schemas.invoice import InvoiceCreate, InvoiceResponse
from services.invoice_service import InvoiceService
from services.pdf_service import render_invoice_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/invoices", tags=["admin: invoices"])

sales_team = require_role(UserRole.ADMIN, UserRole.SALES)


@router.get("", response_model=List[InvoiceResponse], summary="List invoices")
def list_invoices(
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """Most recently issued first, with the deal."""
     with store_errors("Failed to list invoices"):
          return (
               db.query(Invoice)
               .options(selectinload(Invoice.deal))
               .order_by(Invoice.issue_date.desc(), Invoice.id.desc())
               .all()
          )


@router.post("", response_model=InvoiceResponse, summary="Issue an invoice")
def create_invoice(
     invoice_data: InvoiceCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     """
     Issue an invoice for a deal.

     - **deal_id**: deal being billed (404 when missing)
     - **amount**: invoice amount
     - **issue_date** / **due_date**: optional, issue date defaults to today

     Two requests racing for the same number: the second gets 409.
     """
     invoice = InvoiceService.create_invoice(
          db,
          deal_id=invoice_data.deal_id,
          amount=invoice_data.amount,
          issue_date=invoice_data.issue_date,
          due_date=invoice_data.due_date,
          status=invoice_data.status.value,
     )
     logger.info("Issued invoice %s for deal %s", invoice.number, invoice.deal_id)
     return invoice


@router.get("/{invoice_id}/pdf", summary="Invoice as PDF")
def get_invoice_pdf(
     invoice_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(sales_team)
):
     invoice = db.query(Invoice).filter(Invoice.id == invoice_id).first()
     if not invoice:
          raise APIError(404, "Invoice not found")

     deal = (
          db.query(Deal)
          .options(selectinload(Deal.client), selectinload(Deal.property))
          .filter(Deal.id == invoice.deal_id)
          .first()
     )
     pdf = render_invoice_pdf(
          invoice,
          client=deal.client if deal else None,
          property=deal.property if deal else None,
     )
     return Response(
          content=pdf,
          media_type="application/pdf",
          headers={"Content-Disposition": f'inline; filename="invoice-{invoice.number}.pdf"'},
     )
