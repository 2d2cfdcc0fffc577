# cheques/services/attachments.py

"""
CHEQUE ATTACHMENTS

Files go to Django's default_storage under cheques/; the database only keeps
the stored path, original filename, size and content type.
"""

from __future__ import annotations

import logging
import mimetypes
import os
import uuid

from django.core.files.storage import default_storage

from cheques.models import Attachment
from common.exceptions import BusinessValidationError, NotFoundError

logger = logging.getLogger(__name__)

UPLOAD_DIR = "cheques"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "image/jpeg",
        "image/png",
        "image/webp",
    }
)


def _content_type(upload) -> str:
    declared = getattr(upload, "content_type", "") or ""
    if declared:
        return declared
    guessed, _ = mimetypes.guess_type(upload.name)
    return guessed or "application/octet-stream"


def store_attachment(upload, *, actor: str) -> Attachment:
    mime_type = _content_type(upload)
    if mime_type not in ALLOWED_MIME_TYPES:
        raise BusinessValidationError(
            "Desteklenmeyen dosya türü",
            details={"mime_type": mime_type},
        )
    if upload.size > MAX_UPLOAD_BYTES:
        raise BusinessValidationError(
            "Dosya boyutu 10 MB sınırını aşıyor",
            details={"size": upload.size},
        )

    original = os.path.basename(upload.name)
    path = default_storage.save(f"{UPLOAD_DIR}/{uuid.uuid4().hex}_{original}", upload)

    attachment = Attachment.objects.create(
        path=path,
        filename=original,
        size=upload.size,
        mime_type=mime_type,
        uploaded_by=actor,
    )

    logger.info(
        "Cheque attachment stored",
        extra={"attachment_id": attachment.id, "path": path, "actor": actor},
    )
    return attachment


def discard_file(path: str) -> None:
    """Remove a stored file whose database unit rolled back."""
    if path and default_storage.exists(path):
        default_storage.delete(path)


def get_attachment(attachment_id) -> Attachment:
    attachment = Attachment.objects.filter(pk=attachment_id).first()
    if attachment is None:
        raise NotFoundError("Dosya bulunamadı", details={"attachment_id": attachment_id})
    return attachment
