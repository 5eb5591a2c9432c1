# models/content.py
"""
Storefront content: service offerings, contact leads, CMS page blocks and
company information blocks.
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import relationship
from .base import Base


class Service(Base):
     __tablename__ = "services"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(200), nullable=True)
     title = Column(String(200), nullable=True)
     description = Column(Text, nullable=True)
     content = Column(Text, nullable=True)
     icon = Column(String(500), nullable=True)
     slug = Column(String(200), unique=True, nullable=True)

     def __repr__(self):
          return f"<Service(id={self.id}, name='{self.name}')>"


class ContactLead(Base):
     """
     Contact-form submission, optionally about a property.
     Append-mostly: only `status` and `notes` change afterwards.
     """
     __tablename__ = "contact_leads"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=True)
     phone = Column(String(50), nullable=True)
     message = Column(Text, nullable=False)
     property_id = Column(Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True)
     status = Column(String(50), default="new", nullable=False, index=True)
     notes = Column(Text, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     property = relationship("Property")

     def __repr__(self):
          return f"<ContactLead(id={self.id}, status='{self.status}')>"


class PageContent(Base):
     """CMS block addressed by (page, section, key)."""
     __tablename__ = "page_content"
     __table_args__ = (
          UniqueConstraint("page", "section", "key", name="uq_page_content_page_section_key"),
     )

     id = Column(Integer, primary_key=True, autoincrement=True)
     page = Column(String(100), nullable=False, index=True)
     section = Column(String(100), nullable=False)
     key = Column(String(100), nullable=False)
     value = Column(Text, nullable=True)

     def __repr__(self):
          return f"<PageContent(page='{self.page}', section='{self.section}', key='{self.key}')>"


class CompanyInfo(Base):
     __tablename__ = "company_info"

     id = Column(Integer, primary_key=True, autoincrement=True)
     key = Column(String(100), unique=True, nullable=False, index=True)
     value = Column(Text, nullable=False)
     category = Column(String(100), nullable=False, index=True)  # contact, social, legal, about
     label = Column(String(200), nullable=True)
     order = Column(Integer, default=0, nullable=False)
     is_active = Column(Boolean, default=True, nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)
     updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

     def __repr__(self):
          return f"<CompanyInfo(key='{self.key}', category='{self.category}')>"
