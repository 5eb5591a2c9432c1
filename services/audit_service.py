# services/audit_service.py
"""
Best-effort audit trail for backoffice mutations.

Call after the primary change is committed. A failure here is logged and
swallowed so it can never undo or fail the operation being audited.
"""
import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from models import AuditLog

logger = logging.getLogger(__name__)

ACTION_CREATE = "create"
ACTION_UPDATE = "update"
ACTION_DELETE = "delete"


def snapshot(instance: Any) -> Optional[dict]:
     """JSON-safe copy of a model instance for the before/after columns."""
     if instance is None:
          return None
     return instance.to_dict()


def record_audit(
     db: Session,
     actor_id: Optional[int],
     action: str,
     entity: str,
     entity_id: Optional[int],
     before: Optional[dict] = None,
     after: Optional[dict] = None,
) -> None:
     try:
          db.add(AuditLog(
               user_id=actor_id,
               action=action,
               entity=entity,
               entity_id=entity_id,
               before=before,
               after=after,
          ))
          db.commit()
     except Exception as exc:
          db.rollback()
          logger.error("Audit log write failed for %s %s #%s: %s", action, entity, entity_id, exc)


def actor_id_from_claims(claims: dict) -> Optional[int]:
     """The user id carried in the token `sub` claim, when it is numeric."""
     try:
          return int(claims.get("sub"))
     except (TypeError, ValueError):
          return None
