"""
Tests for the transaction boundary.
"""
import pytest
from sqlalchemy.exc import OperationalError

from afrik_student.core.exceptions import NotFoundError, TransactionError
from afrik_student.db.unit_of_work import UnitOfWork
from afrik_student.modules.formations.models import Formation


class TestUnitOfWork:
    """Commit on success, roll back on any error."""

    def test_commits_on_clean_exit(self, db):
        with UnitOfWork(db):
            db.add(Formation(title="Data Science"))
            db.flush()

        db.rollback()
        assert db.query(Formation).count() == 1

    def test_domain_error_rolls_back_and_propagates(self, db):
        with pytest.raises(NotFoundError):
            with UnitOfWork(db):
                db.add(Formation(title="Data Science"))
                db.flush()
                raise NotFoundError("Module not found")

        assert db.query(Formation).count() == 0

    def test_database_error_becomes_transaction_error(self, db):
        with pytest.raises(TransactionError) as exc:
            with UnitOfWork(db):
                raise OperationalError("INSERT ...", {}, Exception("connection lost"))

        assert exc.value.status_code == 500

    def test_rewritten_key_survives_deferred_delete(self, db, storage):
        """Deleting a key and writing it again in one unit keeps the new blob."""
        key = "lessons/attachments/same.pdf"
        storage.put_object(key, b"old")

        with UnitOfWork(db, storage) as uow:
            uow.defer_delete(key)
            storage.put_object(key, b"new")
            uow.record_write(key)

        assert storage.get_object(key)["Body"] == b"new"

    def test_deferred_delete_runs_after_commit(self, db, storage):
        key = "lessons/attachments/gone.pdf"
        storage.put_object(key, b"old")

        with UnitOfWork(db, storage) as uow:
            uow.defer_delete(key)
            assert storage.exists(key)

        assert not storage.exists(key)
