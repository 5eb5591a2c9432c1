# services/pdf_service.py
"""
Invoice PDF rendering with ReportLab.
"""
import io
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models import Client, Invoice, Property

CURRENCY = "FCFA"


def format_amount(amount) -> str:
     return f"{float(amount or 0):,.0f} {CURRENCY}".replace(",", " ")


def _text(value) -> str:
     return escape(str(value)) if value not in (None, "") else ""


def render_invoice_pdf(invoice: Invoice, client: Optional[Client] = None,
                       property: Optional[Property] = None) -> bytes:
     buffer = io.BytesIO()
     doc = SimpleDocTemplate(buffer, pagesize=A4, title=f"Facture {invoice.number}")
     styles = getSampleStyleSheet()
     story = []

     title_style = ParagraphStyle(
          "InvoiceTitle",
          parent=styles["Heading1"],
          fontSize=22,
          textColor=colors.HexColor("#1a3c5a"),
          alignment=TA_RIGHT,
          spaceAfter=20,
     )
     story.append(Paragraph("FACTURE", title_style))

     story.append(Paragraph(f"Numéro: {_text(invoice.number)}", styles["Normal"]))
     issue = invoice.issue_date.strftime("%d/%m/%Y") if invoice.issue_date else ""
     story.append(Paragraph(f"Date: {issue}", styles["Normal"]))
     if invoice.due_date:
          story.append(Paragraph(f"Échéance: {invoice.due_date.strftime('%d/%m/%Y')}", styles["Normal"]))
     story.append(Paragraph(f"Statut: {_text(invoice.status)}", styles["Normal"]))
     story.append(Spacer(1, 0.8 * cm))

     story.append(Paragraph("<b>CLIENT</b>", styles["Heading3"]))
     story.append(Paragraph(f"Client: {_text(client.name if client else '')}", styles["Normal"]))
     story.append(Paragraph(f"Email: {_text(client.email if client else '')}", styles["Normal"]))
     story.append(Paragraph(f"Téléphone: {_text(client.phone if client else '')}", styles["Normal"]))
     story.append(Spacer(1, 0.5 * cm))

     if property is not None:
          story.append(Paragraph("<b>BIEN</b>", styles["Heading3"]))
          story.append(Paragraph(f"Bien: {_text(property.title)}", styles["Normal"]))
          story.append(Paragraph(f"Localisation: {_text(property.location)}", styles["Normal"]))
          story.append(Spacer(1, 0.5 * cm))

     table = Table([["Montant TTC", format_amount(invoice.amount)]], colWidths=[8 * cm, 8 * cm])
     table.setStyle(TableStyle([
          ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor("#f8f6f1")),
          ("FONTNAME", (0, 0), (-1, -1), "Helvetica-Bold"),
          ("FONTSIZE", (0, 0), (-1, -1), 12),
          ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
          ("GRID", (0, 0), (-1, -1), 1, colors.HexColor("#d4a574")),
     ]))
     story.append(table)
     story.append(Spacer(1, 1.5 * cm))

     thanks_style = ParagraphStyle("Thanks", parent=styles["Normal"], alignment=TA_CENTER)
     story.append(Paragraph("Merci pour votre confiance.", thanks_style))
     story.append(Spacer(1, 0.5 * cm))
     story.append(Paragraph(f"Document généré le {datetime.now().strftime('%d/%m/%Y')}", styles["Normal"]))

     doc.build(story)
     return buffer.getvalue()
