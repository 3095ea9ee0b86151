import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("TESTING", "true")

import uuid
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from training_engine.core.config import settings
from training_engine.core.constants import AssignmentStatusEnum
from training_engine.core.database import Base
from training_engine.models import (  # noqa: F401
    assignment,
    certificate,
    course,
    material,
    notification,
    progress,
    quiz_attempt,
    quiz_question,
    role_assignment,
)
from training_engine.crud.assignment import assignment as crud_assignment
from training_engine.crud.course import course as crud_course
from training_engine.crud.material import material as crud_material
from training_engine.crud.quiz_question import quiz_question as crud_quiz_question
from training_engine.utils import deps as deps_utils
from training_engine.utils.timeutils import utcnow
import main

test_db_url = settings.TEST_DATABASE_URL or "sqlite:///./test.db"

@pytest.fixture(scope="session")
def database_engine():
    if test_db_url.startswith("sqlite"):
        engine = create_engine(test_db_url, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(test_db_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()
    if test_db_url.startswith("sqlite") and os.path.exists("./test.db"):
        os.remove("./test.db")

@pytest.fixture(scope="function")
def db_session(database_engine):
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=database_engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[deps_utils.get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

@pytest.fixture
def now():
    return utcnow().replace(microsecond=0)

@pytest.fixture
def tenant_id():
    # Tests share one database; a fresh tenant keeps their rows apart.
    return f"tenant-{uuid.uuid4().hex[:8]}"

@pytest.fixture
def headers(tenant_id):
    return {"X-Tenant-ID": tenant_id, "X-User-ID": "admin-1"}

@pytest.fixture
def material_factory(db_session, tenant_id):
    def _material_factory(title=None, material_type="quiz", passing_score=None, **kwargs):
        material_data = {
            "tenant_id": tenant_id,
            "title": title or f"Material {uuid.uuid4().hex[:6]}",
            "uri": "https://example.com/material",
            "type": "link",
            "material_type": material_type,
            "is_required": False,
            "passing_score": passing_score,
            "created_by": "admin-1",
        }
        material_data.update(kwargs)
        return crud_material.create(db_session, obj_in=material_data)
    return _material_factory

@pytest.fixture
def course_factory(db_session, tenant_id):
    def _course_factory(title=None, **kwargs):
        course_data = {
            "tenant_id": tenant_id,
            "title": title or f"Course {uuid.uuid4().hex[:6]}",
            "is_active": True,
            "created_by": "admin-1",
        }
        course_data.update(kwargs)
        return crud_course.create(db_session, obj_in=course_data)
    return _course_factory

@pytest.fixture
def question_factory(db_session):
    def _question_factory(material, correct_index=0, points=1, order_index=0):
        return crud_quiz_question.create(db_session, obj_in={
            "material_id": material.id,
            "text": f"Question {uuid.uuid4().hex[:6]}?",
            "options": ["A", "B", "C", "D"],
            "correct_index": correct_index,
            "question_type": "single_choice",
            "points": points,
            "order_index": order_index,
        })
    return _question_factory

@pytest.fixture
def assignment_factory(db_session, tenant_id):
    def _assignment_factory(material=None, course=None, user_id="user-1", status=AssignmentStatusEnum.ASSIGNED, **kwargs):
        assignment_data = {
            "tenant_id": tenant_id,
            "material_id": material.id if material else None,
            "course_id": course.id if course else None,
            "user_id": user_id,
            "status": status,
            "priority": "normal",
            "progress_percentage": 0,
            "time_spent_minutes": 0,
        }
        assignment_data.update(kwargs)
        return crud_assignment.create(db_session, obj_in=assignment_data)
    return _assignment_factory
