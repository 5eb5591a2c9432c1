# routers/properties.py
"""
Property API routes.

Public storefront:
- list with free-text, status and category filters
- detail by slug, gallery by id

Backoffice (bearer token + role):
- CRUD, gallery images, co-owners
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from database import commit_or_conflict, get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import Client, CoOwnership, Property, PropertyImage, UserRole
from schemas.common import OkResponse
from schemas.property import (
     CoOwnerCreate,
     CoOwnerResponse,
     PropertyCreate,
     PropertyImageCreate,
     PropertyImageResponse,
     PropertyResponse,
     PropertyUpdate,
)
from services.audit_service import ACTION_CREATE, ACTION_DELETE, actor_id_from_claims, record_audit, snapshot
from services.normalization import normalize_prop_status, prop_status_label, status_for_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])
admin_router = APIRouter(prefix="/api/admin/properties", tags=["admin: properties"])

REQUIRED_FIELDS = ("title", "slug")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_property_response(prop: Property) -> PropertyResponse:
     """Present the normalized status code and its French label."""
     response = PropertyResponse.model_validate(prop)
     code = normalize_prop_status(prop.status)
     response.status = code or prop.status
     response.status_label = prop_status_label(code)
     return response


def property_search_filter(q: str):
     return or_(
          Property.title.icontains(q, autoescape=True),
          Property.location.icontains(q, autoescape=True),
          Property.description.icontains(q, autoescape=True),
     )


def _get_property(db: Session, property_id: int) -> Property:
     prop = db.query(Property).filter(Property.id == property_id).first()
     if not prop:
          raise APIError(404, "Property not found")
     return prop


def _apply(prop: Property, data: dict) -> None:
     if any(field in data and not data[field] for field in REQUIRED_FIELDS):
          raise APIError(400, "title and slug required")
     if "status" in data:
          data["status"] = status_for_storage(data["status"])
     for field, value in data.items():
          setattr(prop, field, value)


# ---------------------------------------------------------------------------
# Public storefront
# ---------------------------------------------------------------------------

@router.get("", response_model=List[PropertyResponse], summary="List properties")
def list_properties(
     q: Optional[str] = Query(None, description="Substring of title, location or description"),
     status: Optional[str] = Query(None, description="Status code or French label"),
     category: Optional[str] = Query(None, description="Exact category"),
     db: Session = Depends(get_session)
):
     """
     Newest first, with ordered images.

     - **q**: case-insensitive substring match
     - **status**: normalized before matching; an unrecognized value is ignored
     - **category**: exact match, empty means no filter
     """
     with store_errors("Failed to list properties"):
          query = db.query(Property).options(selectinload(Property.images))

          q = (q or "").strip()
          if q:
               query = query.filter(property_search_filter(q))

          code = normalize_prop_status(status)
          if code:
               query = query.filter(Property.status == code)

          category = (category or "").strip()
          if category:
               query = query.filter(Property.category == category)

          rows = query.order_by(Property.created_at.desc(), Property.id.desc()).all()
          return [build_property_response(p) for p in rows]


@router.get("/{slug}", response_model=PropertyResponse, summary="Property detail")
def get_property(slug: str, db: Session = Depends(get_session)):
     with store_errors("Failed to get property", with_details=False):
          prop = (
               db.query(Property)
               .options(selectinload(Property.images))
               .filter(Property.slug == slug)
               .first()
          )
     if not prop:
          raise APIError(404, "Not found")
     return build_property_response(prop)


@router.get("/{property_id}/images", response_model=List[PropertyImageResponse], summary="Property gallery")
def list_property_images(property_id: RowId, db: Session = Depends(get_session)):
     with store_errors("Failed to get images"):
          return (
               db.query(PropertyImage)
               .filter(PropertyImage.property_id == property_id)
               .order_by(PropertyImage.order.asc(), PropertyImage.id.asc())
               .all()
          )


# ---------------------------------------------------------------------------
# Backoffice
# ---------------------------------------------------------------------------

@admin_router.post("", response_model=PropertyResponse, summary="Create a property")
def create_property(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     """
     Create a property. `status` is stored as its code when recognized and
     as given otherwise.
     """
     if not body.title or not body.slug:
          raise APIError(400, "title and slug required")

     prop = Property()
     _apply(prop, body.model_dump(exclude_unset=True))
     db.add(prop)
     commit_or_conflict(db, "Slug already exists")
     db.refresh(prop)
     return build_property_response(prop)


@admin_router.put("/{property_id}", response_model=PropertyResponse, summary="Update a property")
def update_property(
     property_id: RowId,
     body: PropertyUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     prop = _get_property(db, property_id)
     _apply(prop, body.model_dump(exclude_unset=True))
     commit_or_conflict(db, "Slug already exists")
     db.refresh(prop)
     return build_property_response(prop)


@admin_router.delete("/{property_id}", response_model=OkResponse, summary="Delete a property")
def delete_property(
     property_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role())
):
     """
     Delete the property with its images and co-ownerships in one
     transaction. Deals keep existing without a property.
     """
     prop = _get_property(db, property_id)
     db.delete(prop)
     db.commit()
     logger.info("Deleted property %s", property_id)
     return OkResponse()


@admin_router.post(
     "/{property_id}/images",
     response_model=PropertyImageResponse,
     status_code=status.HTTP_200_OK,
     summary="Add a gallery image"
)
def add_property_image(
     property_id: RowId,
     body: PropertyImageCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     if not body.url:
          raise APIError(400, "url required")
     _get_property(db, property_id)

     image = PropertyImage(property_id=property_id, url=body.url, alt=body.alt, order=body.order)
     db.add(image)
     db.commit()
     db.refresh(image)

     record_audit(db, actor_id_from_claims(token), ACTION_CREATE, "PropertyImage", image.id, after=snapshot(image))
     return image


@admin_router.delete("/{property_id}/images/{image_id}", response_model=OkResponse, summary="Remove a gallery image")
def delete_property_image(
     property_id: RowId,
     image_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     image = (
          db.query(PropertyImage)
          .filter(PropertyImage.id == image_id, PropertyImage.property_id == property_id)
          .first()
     )
     if not image:
          raise APIError(404, "Image not found")

     before = snapshot(image)
     db.delete(image)
     db.commit()

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "PropertyImage", image_id, before=before)
     return OkResponse()


# ---------------------------------------------------------------------------
# Co-ownership
# ---------------------------------------------------------------------------

@admin_router.get("/{property_id}/coowners", response_model=List[CoOwnerResponse], summary="List co-owners")
def list_coowners(
     property_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     return (
          db.query(CoOwnership)
          .options(selectinload(CoOwnership.client))
          .filter(CoOwnership.property_id == property_id)
          .order_by(CoOwnership.id)
          .all()
     )


@admin_router.post("/{property_id}/coowners", response_model=CoOwnerResponse, summary="Add a co-owner")
def add_coowner(
     property_id: RowId,
     body: CoOwnerCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     _get_property(db, property_id)
     if not db.query(Client).filter(Client.id == body.client_id).first():
          raise APIError(404, "Client not found")

     co_owner = CoOwnership(property_id=property_id, client_id=body.client_id, share=body.share)
     db.add(co_owner)
     commit_or_conflict(db, "Client already co-owns this property")
     db.refresh(co_owner)
     return co_owner


@admin_router.delete("/{property_id}/coowners/{co_id}", response_model=OkResponse, summary="Remove a co-owner")
def delete_coowner(
     property_id: RowId,
     co_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     co_owner = (
          db.query(CoOwnership)
          .filter(CoOwnership.id == co_id, CoOwnership.property_id == property_id)
          .first()
     )
     if not co_owner:
          raise APIError(404, "Co-owner not found")
     db.delete(co_owner)
     db.commit()
     return OkResponse()
