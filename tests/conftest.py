"""
Pytest configuration and fixtures for testing.
"""
import io
import datetime as dt

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from afrik_student.main import app
from afrik_student.db.base import Base
from afrik_student.db.deps import get_db, get_storage
from afrik_student.integrations.storage import LocalStorageClient, StorageClient
from afrik_student.modules.attachments.uploads import FileUpload
from afrik_student.modules.curriculum.models import Lesson, Module
from afrik_student.modules.formations.models import Formation
from afrik_student.modules.sessions.models import CourseSession, SessionStatus
from afrik_student.modules.users.models import Role, RoleName, User, UserRole
from uuid import uuid4


# Test database URL
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path):
    """Blob storage rooted in a per-test temporary directory."""
    return StorageClient(backend=LocalStorageClient(tmp_path / "storage", "/storage"))


@pytest.fixture(scope="function")
def client(db, storage):
    """FastAPI test client with test database and storage."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_upload():
    """Build an in-memory upload, as the routes hand it to the services."""
    def _make(filename="notes.pdf", content=b"%PDF-1.4 test", content_type="application/pdf"):
        return FileUpload(filename=filename, content_type=content_type, file=io.BytesIO(content))
    return _make


@pytest.fixture
def formation(db):
    formation = Formation(id=uuid4(), title="Web Development", description="Full-stack track")
    db.add(formation)
    db.commit()
    db.refresh(formation)
    return formation


@pytest.fixture
def module(db, formation):
    module = Module(id=uuid4(), formation_id=formation.id, title="HTML & CSS", order=1)
    db.add(module)
    db.commit()
    db.refresh(module)
    return module


@pytest.fixture
def other_module(db, formation):
    module = Module(id=uuid4(), formation_id=formation.id, title="JavaScript", order=2)
    db.add(module)
    db.commit()
    db.refresh(module)
    return module


@pytest.fixture
def lessons(db, module):
    """Three lessons under ``module``."""
    created = [
        Lesson(id=uuid4(), module_id=module.id, title=f"Lesson {i}", order=i)
        for i in range(1, 4)
    ]
    db.add_all(created)
    db.commit()
    for lesson in created:
        db.refresh(lesson)
    return created


@pytest.fixture
def student_role(db):
    """Create student role."""
    role = Role(id=uuid4(), name=RoleName.student.value)
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


@pytest.fixture
def instructor_role(db):
    """Create instructor role."""
    role = Role(id=uuid4(), name=RoleName.instructor.value)
    db.add(role)
    db.commit()
    db.refresh(role)
    return role


def _create_user(db, role, email, first_name, last_name):
    user = User(id=uuid4(), email=email, first_name=first_name, last_name=last_name)
    db.add(user)
    db.flush()

    db.add(UserRole(user_id=user.id, role_id=role.id))
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def instructor_user(db, instructor_role):
    """Create an instructor user."""
    return _create_user(db, instructor_role, "instructor@test.com", "Awa", "Diop")


@pytest.fixture
def make_student(db, student_role):
    """Factory for student users."""
    counter = {"n": 0}

    def _make():
        counter["n"] += 1
        n = counter["n"]
        return _create_user(db, student_role, f"student{n}@test.com", f"Student{n}", "Test")
    return _make


@pytest.fixture
def student_user(make_student):
    return make_student()


@pytest.fixture
def course_session(db, formation, instructor_user):
    """Upcoming scheduled session with two seats."""
    start = dt.datetime.now(dt.timezone.utc) + dt.timedelta(days=7)
    course_session = CourseSession(
        id=uuid4(),
        formation_id=formation.id,
        instructor_id=instructor_user.id,
        start_date=start,
        end_date=start + dt.timedelta(days=30),
        status=SessionStatus.scheduled,
        max_students=2,
        location="Dakar",
    )
    db.add(course_session)
    db.commit()
    db.refresh(course_session)
    return course_session
