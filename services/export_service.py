# services/export_service.py
"""
CSV and XLSX exports of backoffice data.

Rows are the models' column snapshots (see Base.to_dict), so every export
carries the same field names as the database.
"""
import csv
import io
import json
from typing import Any, Dict, Iterable, List, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from sqlalchemy.orm import Session, selectinload

from models import Client, Deal, Expense, Invoice, Payment, Project, Property, Service

WORKBOOK_SHEETS = (
     ("Properties", Property),
     ("Services", Service),
     ("Deals", Deal),
     ("Invoices", Invoice),
     ("Payments", Payment),
     ("Expenses", Expense),
)

CUSTOM_EXPORT_TYPES = ("properties", "projects", "clients", "deals")


def _cell(value: Any) -> Any:
     if value is None:
          return ""
     if isinstance(value, (dict, list)):
          return json.dumps(value, ensure_ascii=False)
     return value


def rows_to_csv(rows: List[Dict[str, Any]], fieldnames: Optional[Iterable[str]] = None) -> str:
     """Header line plus one line per row; nested values are written as JSON."""
     fields = list(fieldnames or (rows[0].keys() if rows else []))
     output = io.StringIO()
     writer = csv.DictWriter(output, fieldnames=fields, extrasaction="ignore", lineterminator="\n")
     writer.writeheader()
     for row in rows:
          writer.writerow({field: _cell(row.get(field)) for field in fields})
     return output.getvalue()


def _column_names(model) -> List[str]:
     return [column.key for column in model.__mapper__.column_attrs]


def property_rows(db: Session) -> List[Dict[str, Any]]:
     return [p.to_dict() for p in db.query(Property).order_by(Property.id).all()]


def properties_csv(db: Session) -> str:
     return rows_to_csv(property_rows(db), fieldnames=_column_names(Property))


def workbook_bytes(db: Session) -> bytes:
     """
     One sheet per entity with a bold header row; empty tables still get
     their header so the workbook layout is stable.
     """
     wb = Workbook()
     wb.remove(wb.active)
     header_font = Font(bold=True, color="FFFFFF")
     header_fill = PatternFill(start_color="1A3C5A", end_color="1A3C5A", fill_type="solid")

     for title, model in WORKBOOK_SHEETS:
          ws = wb.create_sheet(title=title)
          fields = _column_names(model)
          ws.append(fields)
          for cell in ws[1]:
               cell.font = header_font
               cell.fill = header_fill
          for obj in db.query(model).order_by(model.id).all():
               row = obj.to_dict()
               ws.append([_cell(row.get(field)) for field in fields])
          for column_cells in ws.columns:
               width = max(len(str(c.value)) if c.value is not None else 0 for c in column_cells)
               ws.column_dimensions[column_cells[0].column_letter].width = min(width + 2, 50)

     buffer = io.BytesIO()
     wb.save(buffer)
     return buffer.getvalue()


def custom_export_rows(db: Session, export_type: str) -> List[Dict[str, Any]]:
     """
     Rows for /export/custom. Properties and projects embed their images or
     medias, deals embed their client and property.

     Raises:
          ValueError: unknown export type
     """
     if export_type == "properties":
          items = db.query(Property).options(selectinload(Property.images)).order_by(Property.id).all()
          return [
               {**p.to_dict(), "images": [img.to_dict() for img in p.images]}
               for p in items
          ]
     if export_type == "projects":
          items = db.query(Project).options(selectinload(Project.medias)).order_by(Project.id).all()
          return [
               {**p.to_dict(), "medias": [m.to_dict() for m in p.medias]}
               for p in items
          ]
     if export_type == "clients":
          return [c.to_dict() for c in db.query(Client).order_by(Client.id).all()]
     if export_type == "deals":
          items = (
               db.query(Deal)
               .options(selectinload(Deal.client), selectinload(Deal.property))
               .order_by(Deal.id)
               .all()
          )
          return [
               {
                    **d.to_dict(),
                    "client": d.client.to_dict() if d.client else None,
                    "property": d.property.to_dict() if d.property else None,
               }
               for d in items
          ]
     raise ValueError(f"Unknown export type: {export_type}")


CLIENT_IMPORT_FIELDS = ("name", "email", "phone", "address", "notes")


def import_clients_csv(db: Session, content: str) -> Dict[str, int]:
     """
     Add one Client per CSV row (header: name,email,phone,address,notes).
     Rows without a name are skipped. The caller commits.
     """
     reader = csv.DictReader(io.StringIO(content))
     imported = skipped = 0
     for row in reader:
          values = {
               field: (row.get(field) or "").strip() or None
               for field in CLIENT_IMPORT_FIELDS
          }
          if not values["name"]:
               skipped += 1
               continue
          db.add(Client(**values))
          imported += 1
     return {"imported": imported, "skipped": skipped}
