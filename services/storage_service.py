# services/storage_service.py
"""
Upload storage: every file is written to the local upload directory under a
generated name; when Azure credentials are configured, admin uploads are
also forwarded to a blob container and the blob URL is returned instead.
"""
import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

from azure.storage.blob import BlobServiceClient

from config import Settings

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


def _extension(filename: Optional[str]) -> str:
     ext = os.path.splitext(filename or "")[1].lower()
     # Keep only plain extensions such as ".jpg"
     if not ext or len(ext) > 10 or not ext[1:].isalnum():
          return ""
     return ext


def generate_name(original_name: Optional[str]) -> str:
     return f"{uuid.uuid4().hex}{_extension(original_name)}"


class UploadStorage:
     """
     Local upload directory plus an optional blob container.
     Built once per application from Settings.
     """

     def __init__(self, upload_dir: str, blob_service: Optional[BlobServiceClient] = None,
                  account: Optional[str] = None, container: str = "uploads"):
          self.upload_dir = Path(upload_dir)
          self.upload_dir.mkdir(parents=True, exist_ok=True)
          self.blob_service = blob_service
          self.account = account
          self.container = container

     @classmethod
     def from_settings(cls, settings: Settings) -> "UploadStorage":
          blob_service = None
          if settings.object_storage_enabled:
               blob_service = BlobServiceClient.from_connection_string(
                    f"DefaultEndpointsProtocol=https;"
                    f"AccountName={settings.azure_storage_account};"
                    f"AccountKey={settings.azure_storage_key};"
                    f"EndpointSuffix=core.windows.net"
               )
          return cls(
               settings.upload_dir,
               blob_service=blob_service,
               account=settings.azure_storage_account,
               container=settings.azure_storage_container,
          )

     @property
     def forwarding_enabled(self) -> bool:
          return self.blob_service is not None

     def save_local(self, stream: BinaryIO, original_name: Optional[str]) -> str:
          """Copy the stream into the upload directory; returns the generated name."""
          name = generate_name(original_name)
          target = self.upload_dir / name
          with open(target, "wb") as out:
               shutil.copyfileobj(stream, out)
          logger.info("Stored upload %s (%s)", name, original_name)
          return name

     def local_url(self, name: str) -> str:
          return f"{UPLOADS_URL_PREFIX}/{name}"

     def forward(self, name: str, original_name: Optional[str]) -> Optional[str]:
          """
          Push a locally stored file to the blob container.

          Returns the blob URL, or None when forwarding is disabled or fails;
          the local copy stays in place either way.
          """
          if not self.forwarding_enabled:
               return None
          blob_name = f"uploads/{name}"
          try:
               blob_client = self.blob_service.get_blob_client(container=self.container, blob=blob_name)
               with open(self.upload_dir / name, "rb") as data:
                    blob_client.upload_blob(data, overwrite=True)
          except Exception as exc:
               logger.error("Blob upload failed for %s (%s): %s", name, original_name, exc)
               return None
          return f"https://{self.account}.blob.core.windows.net/{self.container}/{blob_name}"

     def store(self, stream: BinaryIO, original_name: Optional[str], forward: bool = False) -> str:
          """Save locally and, when asked and configured, forward; returns the public URL."""
          name = self.save_local(stream, original_name)
          if forward:
               remote_url = self.forward(name, original_name)
               if remote_url:
                    return remote_url
          return self.local_url(name)
