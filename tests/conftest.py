import copy
from collections import defaultdict
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from httpx import AsyncClient, ASGITransport

from schoolquiz.config import settings
from schoolquiz.database import get_db
from schoolquiz.main import create_app


class InMemoryDatabase:
    """Stand-in for schoolquiz.database.Database backed by plain lists"""

    def __init__(self):
        self.tables = defaultdict(list)
        self.auth_updates = []

    @staticmethod
    def _matches(row, filters):
        return all(row.get(key) == value for key, value in (filters or {}).items())

    @staticmethod
    def _project(row, columns):
        if columns == "*":
            return copy.deepcopy(row)
        keys = [column.strip() for column in columns.split(",")]
        return {key: copy.deepcopy(row.get(key)) for key in keys}

    def insert(self, table, data):
        self.tables[table].append(copy.deepcopy(data))
        return copy.deepcopy(data)

    def select(self, table, columns="*", filters=None, limit=None):
        rows = [row for row in self.tables[table] if self._matches(row, filters)]
        if limit:
            rows = rows[:limit]
        return [self._project(row, columns) for row in rows]

    def select_in(self, table, column, values, columns="*"):
        values = set(values)
        return [self._project(row, columns) for row in self.tables[table] if row.get(column) in values]

    def update(self, table, data, filters):
        updated = []
        for row in self.tables[table]:
            if self._matches(row, filters):
                row.update(copy.deepcopy(data))
                updated.append(copy.deepcopy(row))
        return updated[0] if updated else None

    def delete(self, table, filters):
        removed = [row for row in self.tables[table] if self._matches(row, filters)]
        self.tables[table] = [row for row in self.tables[table] if not self._matches(row, filters)]
        return removed

    def update_auth_user(self, user_id, attributes):
        self.auth_updates.append((user_id, attributes))
        return {"id": user_id}


class TestConfig:
    """Test users seeded into every in-memory database"""
    TEACHER_ID = "teacher-1"
    OTHER_TEACHER_ID = "teacher-2"
    STUDENT_ID = "student-1"
    OTHER_STUDENT_ID = "student-2"
    BASE_URL = "http://test"


USERS = [
    {"id": TestConfig.TEACHER_ID, "username": "mrs_frizzle", "email": "frizzle@school.test", "role": "teacher", "created_at": "2024-01-01T08:00:00+00:00"},
    {"id": TestConfig.OTHER_TEACHER_ID, "username": "mr_keating", "email": "keating@school.test", "role": "teacher", "created_at": "2024-01-01T08:00:00+00:00"},
    {"id": TestConfig.STUDENT_ID, "username": "arnold", "email": "arnold@school.test", "role": "student", "created_at": "2024-01-02T08:00:00+00:00"},
    {"id": TestConfig.OTHER_STUDENT_ID, "username": "wanda", "email": "wanda@school.test", "role": "student", "created_at": "2024-01-02T08:00:00+00:00"},
]


def make_token(user_id, secret=None, audience=None, expires_in=timedelta(hours=1)):
    payload = {
        "sub": user_id,
        "aud": audience or settings.jwt_audience,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(payload, secret or settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm)


@pytest.fixture
def db():
    database = InMemoryDatabase()
    for user in USERS:
        database.insert("users", user)
    return database


@pytest.fixture
def app(db):
    application = create_app()
    application.dependency_overrides[get_db] = lambda: db
    return application


@pytest.fixture
async def client(app):
    """Create test client"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url=TestConfig.BASE_URL) as ac:
        yield ac


@pytest.fixture
def auth_headers():
    """Helper to create auth headers for a seeded user"""
    def _auth_headers(user_id):
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return _auth_headers


@pytest.fixture
def teacher():
    return {"id": TestConfig.TEACHER_ID, "username": "mrs_frizzle", "email": "frizzle@school.test", "role": "teacher"}


@pytest.fixture
def other_teacher():
    return {"id": TestConfig.OTHER_TEACHER_ID, "username": "mr_keating", "email": "keating@school.test", "role": "teacher"}


@pytest.fixture
def student():
    return {"id": TestConfig.STUDENT_ID, "username": "arnold", "email": "arnold@school.test", "role": "student"}


@pytest.fixture
def quiz_payload():
    """Sample quiz body as the browser client sends it"""
    return {
        "title": "Fractions",
        "description": "Adding and comparing fractions",
        "subject": "Math",
        "timeLimit": 20,
        "questions": [
            {
                "question": "What is 1/2 + 1/4?",
                "options": ["2/6", "3/4", "1/8"],
                "correctAnswer": 1,
                "points": 1
            },
            {
                "question": "Which is larger?",
                "options": ["1/3", "1/5", "2/3"],
                "correctAnswer": 2,
                "points": 1
            }
        ]
    }


@pytest.fixture
def weighted_payload(quiz_payload):
    """Same quiz with the second question worth three points"""
    quiz_payload["questions"][1]["points"] = 3
    return quiz_payload


@pytest.fixture
def token_factory():
    return make_token
