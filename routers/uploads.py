# routers/uploads.py
"""
File uploads. Files are stored under a generated name in the upload
directory and served back under /uploads.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from dependencies import get_storage, require_role
from errors import APIError
from models import UserRole
from services.storage_service import UploadStorage

router = APIRouter(prefix="/api", tags=["uploads"])


@router.post("/upload", summary="Anonymous upload")
def upload_file(
     file: Optional[UploadFile] = File(None),
     storage: UploadStorage = Depends(get_storage)
):
     """
     Store the file locally. Returns its public path and the client's file name.
     """
     if file is None or not file.filename:
          raise APIError(400, "file required")
     url = storage.store(file.file, file.filename)
     return {"url": url, "originalName": file.filename}


@router.post("/admin/upload", summary="Backoffice upload")
def admin_upload_file(
     file: Optional[UploadFile] = File(None),
     storage: UploadStorage = Depends(get_storage),
     token: dict = Depends(require_role(UserRole.ADMIN, UserRole.SALES))
):
     """
     Store the file locally and forward it to blob storage when configured.
     Returns the blob URL, or the local path when forwarding is off or fails.
     """
     if file is None or not file.filename:
          raise APIError(400, "file required")
     return {"url": storage.store(file.file, file.filename, forward=True)}
