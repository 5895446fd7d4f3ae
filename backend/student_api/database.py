"""
Student API — Document Store
=============================

What:  Async MongoDB client wrapper exposing the `users`, `students` and
       `courses` collections, plus the FastAPI dependency that hands it to
       route handlers.
Why:   Centralizes all database access in one object that is built once by
       create_app() and injected, instead of a module-level handle.
How:   pymongo's native asyncio client (AsyncMongoClient). Each collection is
       wrapped in a DocumentCollection exposing only the five operations the
       API needs, each a single non-transactional round trip.

Lifecycle:
    create_app() builds the DocumentStore (the driver connects lazily),
    the lifespan hook pings it before serving traffic and closes it on
    shutdown.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from student_api.exceptions import MalformedIdError

logger = logging.getLogger(__name__)

USERS = "users"
STUDENTS = "students"
COURSES = "courses"


class DocumentCollection:
    """
    Thin async facade over one MongoDB collection.

    Only whole-document operations are exposed: the API never patches
    individual fields.
    """

    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    @property
    def name(self) -> str:
        return self._collection.name

    async def find_all(self) -> List[Dict[str, Any]]:
        cursor = self._collection.find()
        return await cursor.to_list()

    async def find_by_id(self, oid: ObjectId) -> Optional[Dict[str, Any]]:
        return await self._collection.find_one({"_id": oid})

    async def find_one(self, filter: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        return await self._collection.find_one(filter)

    async def insert_one(self, document: Dict[str, Any]) -> ObjectId:
        """Inserts a copy of `document` and returns the generated _id."""
        result = await self._collection.insert_one(dict(document))
        return result.inserted_id

    async def replace_by_id(self, oid: ObjectId, document: Dict[str, Any]) -> bool:
        """Returns True if a document with `oid` existed and was replaced."""
        result = await self._collection.replace_one({"_id": oid}, dict(document))
        return result.matched_count > 0

    async def delete_by_id(self, oid: ObjectId) -> bool:
        """Returns True if a document with `oid` existed and was deleted."""
        result = await self._collection.delete_one({"_id": oid})
        return result.deleted_count > 0


class DocumentStore:
    """
    Process-wide connection to the MongoDB database.

    One instance per application; it owns the AsyncMongoClient and its
    connection pool.
    """

    def __init__(self, client: AsyncMongoClient, database_name: str):
        self._client = client
        self._db = client[database_name]
        self.database_name = database_name
        self.users = DocumentCollection(self._db[USERS])
        self.students = DocumentCollection(self._db[STUDENTS])
        self.courses = DocumentCollection(self._db[COURSES])

    @classmethod
    def from_uri(cls, uri: str, database_name: str) -> "DocumentStore":
        """Creates the client. No network I/O happens until the first command."""
        return cls(AsyncMongoClient(uri, tz_aware=True), database_name)

    def collection(self, name: str) -> DocumentCollection:
        return getattr(self, name)

    async def ping(self) -> None:
        """Raises pymongo.errors.PyMongoError if the server is unreachable."""
        await self._client.admin.command("ping")

    async def close(self) -> None:
        await self._client.close()


# ── Dependency ────────────────────────────────────────────────────────────
def get_store(request: Request) -> DocumentStore:
    """
    FastAPI dependency returning the store attached by create_app().

    Example usage in a route:
        @router.get("/students")
        async def list_students(store: DocumentStore = Depends(get_store)):
            ...
    """
    return request.app.state.store


# ── Document Helpers ──────────────────────────────────────────────────────
def parse_object_id(raw_id: str, resource: str = "resource") -> ObjectId:
    """
    Converts a path parameter into an ObjectId.

    Raises:
        MalformedIdError: `raw_id` is not a 24-character hex string.
    """
    try:
        return ObjectId(raw_id)
    except (InvalidId, TypeError) as e:
        raise MalformedIdError(resource=resource, raw_id=raw_id) from e


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Returns a JSON-friendly copy with `_id` rendered as a hex string."""
    serialized = dict(document)
    if "_id" in serialized:
        serialized["_id"] = str(serialized["_id"])
    return serialized
