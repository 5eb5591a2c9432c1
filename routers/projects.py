# routers/projects.py
"""
Project API routes.

Public storefront: list, detail by slug, medias by id.
Backoffice: upsert, partial update, delete, medias. Every mutation is audited.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from database import commit_or_conflict, get_session
from dependencies import RowId, require_role
from errors import APIError, store_errors
from models import Project, ProjectMedia, UserRole
from schemas.common import OkResponse
from schemas.project import (
     ProjectMediaCreate,
     ProjectMediaResponse,
     ProjectResponse,
     ProjectUpdate,
     ProjectUpsert,
)
from services.audit_service import (
     ACTION_CREATE,
     ACTION_DELETE,
     ACTION_UPDATE,
     actor_id_from_claims,
     record_audit,
     snapshot,
)
from services.normalization import normalize_phase, phase_for_storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])
admin_router = APIRouter(prefix="/api/admin/projects", tags=["admin: projects"])

REQUIRED_FIELDS = ("title", "slug")


def build_project_response(project: Project) -> ProjectResponse:
     response = ProjectResponse.model_validate(project)
     response.status = normalize_phase(project.status) or project.status
     return response


def project_search_filter(q: str):
     return or_(
          Project.title.icontains(q, autoescape=True),
          Project.description.icontains(q, autoescape=True),
          Project.location.icontains(q, autoescape=True),
     )


def _get_project(db: Session, project_id: int) -> Project:
     project = db.query(Project).filter(Project.id == project_id).first()
     if not project:
          raise APIError(404, "Project not found")
     return project


def _apply(project: Project, data: dict) -> None:
     if any(field in data and not data[field] for field in REQUIRED_FIELDS):
          raise APIError(400, "title and slug required")
     if "status" in data:
          data["status"] = phase_for_storage(data["status"])
     for field, value in data.items():
          setattr(project, field, value)


# ---------------------------------------------------------------------------
# Public storefront
# ---------------------------------------------------------------------------

@router.get("", response_model=List[ProjectResponse], summary="List projects")
def list_projects(
     q: Optional[str] = Query(None, description="Substring of title, description or location"),
     status: Optional[str] = Query(None, description="Phase code or French label"),
     category: Optional[str] = Query(None, description="Exact category"),
     db: Session = Depends(get_session)
):
     """
     Newest first, with ordered medias. Filters follow the property list rules
     with phase normalization.
     """
     with store_errors("Failed to list projects"):
          query = db.query(Project).options(selectinload(Project.medias))

          q = (q or "").strip()
          if q:
               query = query.filter(project_search_filter(q))

          code = normalize_phase(status)
          if code:
               query = query.filter(Project.status == code)

          category = (category or "").strip()
          if category:
               query = query.filter(Project.category == category)

          rows = query.order_by(Project.created_at.desc(), Project.id.desc()).all()
          return [build_project_response(p) for p in rows]


@router.get("/{slug}", response_model=ProjectResponse, summary="Project detail")
def get_project(slug: str, db: Session = Depends(get_session)):
     with store_errors("Failed to get project", with_details=False):
          project = (
               db.query(Project)
               .options(selectinload(Project.medias))
               .filter(Project.slug == slug)
               .first()
          )
     if not project:
          raise APIError(404, "Not found")
     return build_project_response(project)


@router.get("/{project_id}/medias", response_model=List[ProjectMediaResponse], summary="Project medias")
def list_project_medias(project_id: RowId, db: Session = Depends(get_session)):
     with store_errors("Failed to get medias"):
          return (
               db.query(ProjectMedia)
               .filter(ProjectMedia.project_id == project_id)
               .order_by(ProjectMedia.order.asc(), ProjectMedia.id.asc())
               .all()
          )


# ---------------------------------------------------------------------------
# Backoffice
# ---------------------------------------------------------------------------

@admin_router.post("", response_model=ProjectResponse, summary="Create or update a project")
def upsert_project(
     body: ProjectUpsert,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     """
     - with **id**: update that project
     - otherwise: update the project carrying **slug**, or create it
     """
     if not body.title or not body.slug:
          raise APIError(400, "title and slug required")

     data = body.model_dump(exclude_unset=True, exclude={"id"})
     if body.id is not None:
          project = _get_project(db, body.id)
     else:
          project = db.query(Project).filter(Project.slug == body.slug).first()

     before = snapshot(project)
     if project is None:
          project = Project()
          db.add(project)
     _apply(project, data)
     commit_or_conflict(db, "Slug already exists")
     db.refresh(project)

     action = ACTION_CREATE if before is None else ACTION_UPDATE
     record_audit(db, actor_id_from_claims(token), action, "Project", project.id, before=before, after=snapshot(project))
     return build_project_response(project)


@admin_router.put("/{project_id}", response_model=ProjectResponse, summary="Update a project")
def update_project(
     project_id: RowId,
     body: ProjectUpdate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     project = _get_project(db, project_id)
     before = snapshot(project)

     _apply(project, body.model_dump(exclude_unset=True))
     commit_or_conflict(db, "Slug already exists")
     db.refresh(project)

     record_audit(db, actor_id_from_claims(token), ACTION_UPDATE, "Project", project_id, before=before, after=snapshot(project))
     return build_project_response(project)


@admin_router.delete("/{project_id}", response_model=OkResponse, summary="Delete a project")
def delete_project(
     project_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     """
     Delete the project and its medias in a single transaction.
     """
     project = _get_project(db, project_id)
     before = snapshot(project)

     db.delete(project)
     db.commit()
     logger.info("Deleted project %s", project_id)

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "Project", project_id, before=before)
     return OkResponse()


@admin_router.post("/{project_id}/medias", response_model=ProjectMediaResponse, summary="Add a media")
def add_project_media(
     project_id: RowId,
     body: ProjectMediaCreate,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     if not body.url:
          raise APIError(400, "url required")
     _get_project(db, project_id)

     media = ProjectMedia(project_id=project_id, kind=body.kind or "image", url=body.url, alt=body.alt, order=body.order)
     db.add(media)
     db.commit()
     db.refresh(media)

     record_audit(db, actor_id_from_claims(token), ACTION_CREATE, "ProjectMedia", media.id, after=snapshot(media))
     return media


@admin_router.delete("/{project_id}/medias/{media_id}", response_model=OkResponse, summary="Remove a media")
def delete_project_media(
     project_id: RowId,
     media_id: RowId,
     db: Session = Depends(get_session),
     token: dict = Depends(require_role(UserRole.ADMIN))
):
     media = (
          db.query(ProjectMedia)
          .filter(ProjectMedia.id == media_id, ProjectMedia.project_id == project_id)
          .first()
     )
     if not media:
          raise APIError(404, "Media not found")

     before = snapshot(media)
     db.delete(media)
     db.commit()

     record_audit(db, actor_id_from_claims(token), ACTION_DELETE, "ProjectMedia", media_id, before=before)
     return OkResponse()
