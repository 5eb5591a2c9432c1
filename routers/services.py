# routers/services.py
"""
Service offerings: public cards and backoffice CRUD.
"""
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import commit_or_conflict, get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import Service
from schemas.common import OkResponse
from schemas.content import ServiceCard, ServiceCreate, ServiceResponse, ServiceUpdate

router = APIRouter(prefix="/api/services", tags=["services"])
admin_router = APIRouter(prefix="/api/admin/services", tags=["admin: services"])


def build_service_card(service: Service) -> ServiceCard:
     """Title falls back to the name, description to the content."""
     return ServiceCard(
          id=service.id,
          title=service.title or service.name or "Service",
          description=service.description or service.content or "",
          icon=service.icon,
          slug=service.slug,
     )


def _get_service(db: Session, service_id: int) -> Service:
     service = db.query(Service).filter(Service.id == service_id).first()
     if not service:
          raise APIError(404, "Service not found")
     return service


@router.get("", response_model=List[ServiceCard], summary="List services")
def list_services(db: Session = Depends(get_session)):
     with store_errors("Failed to list services", with_details=False):
          return [build_service_card(s) for s in db.query(Service).order_by(Service.id.asc()).all()]


@admin_router.post("", response_model=ServiceResponse, summary="Create a service")
def create_service(
     body: ServiceCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     service = Service(**body.model_dump(exclude_unset=True))
     db.add(service)
     commit_or_conflict(db, "Slug already exists")
     db.refresh(service)
     return service


@admin_router.put("/{service_id}", response_model=ServiceResponse, summary="Update a service")
def update_service(
     service_id: RowId,
     body: ServiceUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     service = _get_service(db, service_id)
     for field, value in body.model_dump(exclude_unset=True).items():
          setattr(service, field, value)
     commit_or_conflict(db, "Slug already exists")
     db.refresh(service)
     return service


@admin_router.delete("/{service_id}", response_model=OkResponse, summary="Delete a service")
def delete_service(
     service_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     db.delete(_get_service(db, service_id))
     db.commit()
     return OkResponse()
