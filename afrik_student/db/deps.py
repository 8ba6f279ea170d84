from __future__ import annotations

from collections.abc import Generator

from sqlalchemy.orm import Session

from afrik_student.db.session import SessionLocal
from afrik_student.integrations.storage import StorageClient, get_storage_client


# ---------- DB DEPENDENCY ----------


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ---------- STORAGE DEPENDENCY ----------


def get_storage() -> StorageClient:
    return get_storage_client()
