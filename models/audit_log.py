# models/audit_log.py
"""
AuditLog model - append-only trail of mutating backoffice actions.

Rows are written best-effort after the primary change has been committed;
`before`/`after` hold JSON snapshots produced by `Base.to_dict`.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from .base import Base


class AuditLog(Base):
     __tablename__ = "audit_logs"

     id = Column(Integer, primary_key=True, autoincrement=True)
     user_id = Column(Integer, nullable=True, index=True)  # actor; kept when the user is deleted
     action = Column(String(20), nullable=False)  # create, update, delete
     entity = Column(String(50), nullable=False, index=True)
     entity_id = Column(Integer, nullable=True)
     before = Column(JSON, nullable=True)
     after = Column(JSON, nullable=True)
     created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

     def __repr__(self):
          return f"<AuditLog(id={self.id}, action='{self.action}', entity='{self.entity}', entity_id={self.entity_id})>"
