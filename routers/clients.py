# routers/clients.py
"""
Client API routes (backoffice). Every mutation is audited.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from database import commit_or_conflict, get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import Client, UserRole
from schemas.client import ClientCreate, ClientImportResponse, ClientResponse, ClientUpdate
from schemas.common import OkResponse
from services.audit_service import (
     ACTION_CREATE,
     ACTION_DELETE,
     ACTION_UPDATE,
     actor_id_from_claims,
     record_audit,
     snapshot,
)
from services.export_service import import_clients_csv

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/clients", tags=["admin: clients"])


def _get_client(db: Session, client_id: int) -> Client:
     client = db.query(Client).filter(Client.id == client_id).first()
     if not client:
          raise APIError(404, "Client not found")
     return client


@router.get("", response_model=List[ClientResponse], summary="List clients")
def list_clients(
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     """Clients ordered by name."""
     with store_errors("Failed to list clients"):
          return db.query(Client).order_by(Client.name.asc(), Client.id.asc()).all()


@router.post("", response_model=ClientResponse, summary="Create a client")
def create_client(
     body: ClientCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     client = Client(**body.model_dump())
     db.add(client)
     db.commit()
     db.refresh(client)

     record_audit(db, actor_id_from_claims(token), ACTION_CREATE, "Client", client.id, after=snapshot(client))
     return client


@router.post("/import", response_model=ClientImportResponse, summary="Import clients from CSV")
def import_clients(
     file: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     """
     CSV with a header row: name, email, phone, address, notes. Rows without
     a name are skipped; the rest are added in one transaction.
     """
     if file is None or not file.filename:
          raise APIError(400, "file required")
     try:
          content = file.file.read().decode("utf-8-sig")
     except UnicodeDecodeError:
          raise APIError(400, "CSV must be UTF-8 encoded")

     result = import_clients_csv(db, content)
     db.commit()
     logger.info("Imported %s clients (%s skipped)", result["imported"], result["skipped"])
     return result


@router.put("/{client_id}", response_model=ClientResponse, summary="Update a client")
def update_client(
     client_id: RowId,
     body: ClientUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     client = _get_client(db, client_id)
     before = snapshot(client)

     for field, value in body.model_dump(exclude_unset=True).items():
          if field == "name" and not value:
               continue
          setattr(client, field, value)
     db.commit()
     db.refresh(client)

     record_audit(db, actor_id_from_claims(token), ACTION_UPDATE, "Client", client_id, before=before, after=snapshot(client))
     return client


@router.delete("/{client_id}", response_model=OkResponse, summary="Delete a client")
def delete_client(
     client_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     """
     Delete a client and its co-ownerships. A client that still has deals
     cannot be deleted (409).
     """
     client = _get_client(db, client_id)
     if client.deals:
          raise APIError(409, "Client has deals")

     before = snapshot(client)
     db.delete(client)
     commit_or_conflict(db, "Client has deals")

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "Client", client_id, before=before)
     return OkResponse()
