# schemas/__init__.py
from .common import CamelModel, OkResponse
from .invoice import (
     InvoiceCreate,
     InvoiceResponse,
)
from .payment import (
     PaymentCreate,
     PaymentResponse,
)

__all__ = [
     "CamelModel",
     "OkResponse",
     "InvoiceCreate",
     "InvoiceResponse",
     "PaymentCreate",
     "PaymentResponse",
]
