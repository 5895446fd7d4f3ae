"""
Student API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests exercise the real app, services and auth code without a MongoDB
       server.
How:   InMemoryStore implements the same collection interface as
       DocumentStore (find_all, find_by_id, find_one, insert_one,
       replace_by_id, delete_by_id) over plain dicts, and is injected through
       create_app(settings, store=...).

Fixture Hierarchy (all function-scoped):
    ├── test_settings:  Settings with a test secret and cheap bcrypt rounds
    ├── memory_store:   Fresh InMemoryStore
    ├── app:            create_app(test_settings, store=memory_store)
    ├── test_client:    HTTPX AsyncClient over ASGITransport
    └── auth_headers:   Authorization header with a valid bearer token
"""

from typing import Any, Dict, List, Mapping, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from student_api.config import Settings
from student_api.main import create_app

TEST_SECRET = "test-secret-not-real-0123456789abcdef"


class InMemoryCollection:
    """Dict-backed stand-in for DocumentCollection."""

    def __init__(self, name: str):
        self.name = name
        self.documents: Dict[ObjectId, Dict[str, Any]] = {}

    async def find_all(self) -> List[Dict[str, Any]]:
        return [dict(doc) for doc in self.documents.values()]

    async def find_by_id(self, oid: ObjectId) -> Optional[Dict[str, Any]]:
        doc = self.documents.get(oid)
        return dict(doc) if doc is not None else None

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        for doc in self.documents.values():
            if all(doc.get(key) == value for key, value in filter.items()):
                return dict(doc)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> ObjectId:
        oid = ObjectId()
        self.documents[oid] = {**document, "_id": oid}
        return oid

    async def replace_by_id(self, oid: ObjectId, document: Dict[str, Any]) -> bool:
        if oid not in self.documents:
            return False
        self.documents[oid] = {**document, "_id": oid}
        return True

    async def delete_by_id(self, oid: ObjectId) -> bool:
        return self.documents.pop(oid, None) is not None


class InMemoryStore:
    """Dict-backed stand-in for DocumentStore."""

    def __init__(self):
        self.database_name = "studentDB_test"
        self.users = InMemoryCollection("users")
        self.students = InMemoryCollection("students")
        self.courses = InMemoryCollection("courses")
        self.ping_error: Optional[Exception] = None
        self.closed = False

    def collection(self, name: str) -> InMemoryCollection:
        return getattr(self, name)

    async def ping(self) -> None:
        if self.ping_error is not None:
            raise self.ping_error

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings() -> Settings:
    """
    Settings isolated from the developer's environment and .env file.

    bcrypt_rounds=4 keeps hashing fast; production uses 10.
    """
    return Settings(
        _env_file=None,
        jwt_secret=TEST_SECRET,
        mongo_uri="mongodb://unused.invalid:27017",
        database_name="studentDB_test",
        bcrypt_rounds=4,
        log_level="WARNING",
    )


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def app(test_settings, memory_store):
    return create_app(test_settings, store=memory_store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    ASGITransport does not run the lifespan, so no MongoDB ping happens.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def auth_headers(app) -> Dict[str, str]:
    token = app.state.tokens.issue({"sub": str(ObjectId()), "email": "staff@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def student_data() -> Dict[str, Any]:
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "course": "Computer Science",
        "year": 2,
        "registrationNumber": "CS-2024-001",
    }


@pytest.fixture
def course_data() -> Dict[str, Any]:
    return {
        "name": "Algorithms",
        "code": "CS201",
        "instructor": "Dr. Knuth",
        "credits": 4,
        "semester": "Fall",
        "department": "Computer Science",
        "year": 2024,
    }
