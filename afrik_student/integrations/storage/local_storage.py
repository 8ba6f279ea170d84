"""Filesystem storage backend mimicking the subset of S3 we use."""

import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Union

from afrik_student.core.logging import get_logger

logger = get_logger(__name__)


class LocalStorageClient:
    """
    Stores objects as files below ``storage_path``.
    Keys are S3-style relative paths such as ``lessons/attachments/x.pdf``.
    """

    def __init__(self, storage_path: Union[str, Path], public_url: str = "/storage"):
        self.storage_path = Path(storage_path)
        self.storage_path.mkdir(parents=True, exist_ok=True)
        self.public_url = public_url.rstrip("/")
        logger.info("initialized local storage", storage_path=str(self.storage_path))

    def _get_full_path(self, key: str) -> Path:
        """Convert a key to a path inside the storage root."""
        key = key.lstrip("/")
        full_path = (self.storage_path / key).resolve()
        if not full_path.is_relative_to(self.storage_path.resolve()):
            raise ValueError(f"Key escapes storage root: {key}")
        return full_path

    def upload_fileobj(self, fileobj: BinaryIO, key: str, content_type: Optional[str] = None) -> dict:
        """
        Store a file-like object under ``key``.

        The content is written to a temporary file next to the destination
        and renamed into place, so readers never see a partial object.
        """
        destination = self._get_full_path(key)
        destination.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=destination.parent, prefix=".upload-")
        try:
            with os.fdopen(fd, "wb") as tmp:
                shutil.copyfileobj(fileobj, tmp)
            os.replace(tmp_name, destination)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        size = destination.stat().st_size
        logger.info("object stored", key=key, size=size)
        return {"Key": key, "ContentLength": size}

    def put_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> dict:
        """Store raw bytes under ``key``."""
        destination = self._get_full_path(key)
        destination.parent.mkdir(parents=True, exist_ok=True)

        with open(destination, "wb") as f:
            f.write(body)

        logger.info("object stored", key=key, size=len(body))
        return {"Key": key, "ContentLength": len(body)}

    def get_object(self, key: str) -> dict:
        file_path = self._get_full_path(key)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {key}")

        with open(file_path, "rb") as f:
            content = f.read()

        return {"Body": content, "ContentLength": len(content), "Key": key}

    def exists(self, key: str) -> bool:
        return self._get_full_path(key).is_file()

    def delete_object(self, key: str) -> dict:
        file_path = self._get_full_path(key)

        if file_path.exists():
            file_path.unlink()
            logger.info("object deleted", key=key)
        else:
            logger.warning("object not found for deletion", key=key)

        return {"Key": key}

    def generate_url(self, key: str, expiration: int = 3600) -> str:
        # served by the app under STORAGE_PUBLIC_URL, expiration is ignored
        return f"{self.public_url}/{key.lstrip('/')}"
