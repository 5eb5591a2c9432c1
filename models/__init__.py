# models/__init__.py
from .base import Base
from .user import User, UserRole
from .property import Property, PropertyImage
from .project import Project, ProjectMedia
from .content import Service, ContactLead, PageContent, CompanyInfo
from .client import Client
from .deal import Deal, PaymentSchedule, ScheduleStatus
from .invoice import Invoice, InvoiceStatus
from .payment import Payment
from .expense import Expense
from .co_ownership import CoOwnership
from .audit_log import AuditLog

__all__ = [
     "Base",
     "User",
     "UserRole",
     "Property",
     "PropertyImage",
     "Project",
     "ProjectMedia",
     "Service",
     "ContactLead",
     "PageContent",
     "CompanyInfo",
     "Client",
     "Deal",
     "PaymentSchedule",
     "ScheduleStatus",
     "Invoice",
     "InvoiceStatus",
     "Payment",
     "Expense",
     "CoOwnership",
     "AuditLog",
]
