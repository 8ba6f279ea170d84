"""Uploaded files as seen by the service layer, and their validation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import PurePath
from typing import BinaryIO, Optional, Sequence

from fastapi import UploadFile

from afrik_student.core.config import settings
from afrik_student.core.content_constants import ALLOWED_UPLOAD_EXTENSIONS
from afrik_student.core.exceptions import ValidationError


@dataclass
class FileUpload:
    filename: str
    content_type: Optional[str]
    file: BinaryIO
    size: Optional[int] = None

    @classmethod
    def from_upload_file(cls, upload: UploadFile) -> "FileUpload":
        return cls(
            filename=upload.filename or "",
            content_type=upload.content_type,
            file=upload.file,
            size=upload.size,
        )

    @property
    def stem(self) -> str:
        return PurePath(self.filename).stem

    @property
    def extension(self) -> str:
        return PurePath(self.filename).suffix.lstrip(".").lower()

    def measure(self) -> int:
        """Size in bytes, seeking the stream when the client did not send it."""
        if self.size is None:
            position = self.file.tell()
            self.file.seek(0, os.SEEK_END)
            self.size = self.file.tell()
            self.file.seek(position)
        return self.size


def validate_upload(upload: FileUpload, field: str = "attachments") -> None:
    if not upload.filename:
        raise ValidationError("Each file must be valid.", field=field)

    if upload.extension not in ALLOWED_UPLOAD_EXTENSIONS:
        allowed = ", ".join(sorted(ALLOWED_UPLOAD_EXTENSIONS))
        raise ValidationError(
            f"Unsupported file format '{upload.extension or upload.filename}'. Accepted: {allowed}.",
            field=field,
        )

    if upload.measure() > settings.MAX_UPLOAD_SIZE_BYTES:
        limit_mb = settings.MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
        raise ValidationError(f"Each file must not exceed {limit_mb} MB.", field=field)


def validate_uploads(uploads: Sequence[FileUpload]) -> None:
    for index, upload in enumerate(uploads):
        validate_upload(upload, field=f"attachments.{index}")
