"""Transaction boundary for aggregate operations.

A ``UnitOfWork`` wraps one service call: everything flushed through
``uow.db`` is committed together on a clean exit and rolled back on any
exception. Blob storage is not covered by the database transaction, so the
unit also tracks the blobs it touched:

* keys written during the unit are deleted again if the unit rolls back;
* deletions requested during the unit only run after a successful commit,
  and never for a key the same unit has re-written.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from afrik_student.core.exceptions import TransactionError
from afrik_student.core.logging import get_logger
from afrik_student.integrations.storage import StorageClient

logger = get_logger(__name__)


class UnitOfWork:
    def __init__(self, db: Session, storage: Optional[StorageClient] = None):
        self.db = db
        self.storage = storage
        self._written_keys: list[str] = []
        self._pending_deletes: list[str] = []

    def __enter__(self) -> "UnitOfWork":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            try:
                self.db.commit()
            except SQLAlchemyError as commit_exc:
                self._rollback()
                logger.error("commit failed", error=str(commit_exc))
                raise TransactionError() from commit_exc
            self._purge_deleted_blobs()
            return False

        self._rollback()
        if isinstance(exc, SQLAlchemyError):
            logger.error("transaction failed", error=str(exc))
            raise TransactionError() from exc
        return False

    def record_write(self, key: str) -> None:
        """Remember a blob written by this unit so a rollback can remove it."""
        self._written_keys.append(key)

    def defer_delete(self, key: str) -> None:
        """Delete a blob once the unit has committed."""
        self._pending_deletes.append(key)

    def _rollback(self) -> None:
        self.db.rollback()
        if not self._written_keys:
            return
        for key in self._written_keys:
            try:
                self.storage.delete_object(key)
            except Exception as cleanup_exc:
                # orphaned blob, nothing references it
                logger.warning("blob cleanup failed", key=key, error=str(cleanup_exc))
        logger.info("rolled back blob writes", count=len(self._written_keys))

    def _purge_deleted_blobs(self) -> None:
        rewritten = set(self._written_keys)
        for key in self._pending_deletes:
            if key in rewritten:
                continue
            try:
                self.storage.delete_object(key)
            except Exception as delete_exc:
                logger.warning("blob delete after commit failed", key=key, error=str(delete_exc))
