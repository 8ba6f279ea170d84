# afrik_student/modules/attachments/routes.py
"""Serves stored blobs when the local filesystem backend is in use.

Local download URLs point at ``STORAGE_PUBLIC_URL``; this router is mounted
there by ``main.py``. With S3 the URLs are presigned and this is not mounted.
"""

import mimetypes

from fastapi import APIRouter, Depends, Response

from afrik_student.core.exceptions import NotFoundError
from afrik_student.core.logging import get_logger
from afrik_student.db.deps import get_storage
from afrik_student.integrations.storage import StorageClient

logger = get_logger(__name__)

files_router = APIRouter(tags=["files"])


@files_router.get("/{key:path}")
def get_stored_file(key: str, storage: StorageClient = Depends(get_storage)):
    try:
        obj = storage.get_object(key)
    except (FileNotFoundError, ValueError):
        # ValueError: key resolves outside the storage root
        logger.warning("stored file not found", key=key)
        raise NotFoundError("File not found")

    media_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
    return Response(content=obj["Body"], media_type=media_type)
