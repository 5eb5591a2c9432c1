# services/__init__.py
from .invoice_service import InvoiceService
from .audit_service import record_audit, snapshot
from .normalization import (
     normalize_prop_status,
     prop_status_label,
     normalize_phase,
)

__all__ = [
     "InvoiceService",
     "record_audit",
     "snapshot",
     "normalize_prop_status",
     "prop_status_label",
     "normalize_phase",
]
