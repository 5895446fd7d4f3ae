"""
Student API — Record Service (Students and Courses)
====================================================

What:  CRUD business logic shared by the students and courses resources.
Why:   Both resources follow the exact same pipeline; one class configured
       per resource keeps the rules in one place.
How:   Every operation is: check presence → parse id → one store round trip
       → return a plain result or raise a StudentApiError.

Pipeline for write operations:
    1. Payload missing or any field falsy → ValidationError (400)
    2. Path id not an ObjectId           → MalformedIdError (400)
    3. Single DocumentCollection call
    4. No document matched               → NotFoundError (404)
    5. PyMongoError                      → InternalError (500)
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo.errors import PyMongoError

from student_api.database import DocumentCollection, DocumentStore, parse_object_id, serialize_document
from student_api.exceptions import InternalError, NotFoundError, ValidationError
from student_api.schemas.records import RecordPayload

logger = logging.getLogger(__name__)


class RecordService:
    """
    Stateless CRUD operations over one collection.

    Attributes:
        resource:     Singular name used in messages ("student")
        collection:   DocumentStore attribute holding the collection
        timestamped:  Whether created documents get a `createdAt` field
    """

    def __init__(self, resource: str, collection: str, timestamped: bool = False):
        self.resource = resource
        self.collection = collection
        self.timestamped = timestamped

    def _collection(self, store: DocumentStore) -> DocumentCollection:
        return store.collection(self.collection)

    def _storage_error(self, operation: str, error: PyMongoError) -> InternalError:
        logger.error("%s %s failed: %s", operation, self.resource, error, exc_info=True)
        return InternalError(
            detail=str(error),
            context={"resource": self.resource, "operation": operation},
        )

    def _require_fields(self, payload: Optional[RecordPayload]) -> Dict[str, Any]:
        if payload is None:
            raise ValidationError()
        missing = payload.missing_fields()
        if missing:
            raise ValidationError(context={"missing": missing})
        return payload.to_document()

    async def list_records(self, store: DocumentStore) -> List[Dict[str, Any]]:
        try:
            documents = await self._collection(store).find_all()
        except PyMongoError as e:
            raise self._storage_error("list", e)
        return [serialize_document(doc) for doc in documents]

    async def get_record(self, store: DocumentStore, raw_id: str) -> Dict[str, Any]:
        oid = parse_object_id(raw_id, self.resource)
        try:
            document = await self._collection(store).find_by_id(oid)
        except PyMongoError as e:
            raise self._storage_error("get", e)
        if document is None:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        return serialize_document(document)

    async def create_record(self, store: DocumentStore, payload: Optional[RecordPayload]) -> str:
        """Inserts a new document and returns its hex id."""
        document = self._require_fields(payload)
        if self.timestamped:
            document["createdAt"] = datetime.now(timezone.utc)
        try:
            inserted_id = await self._collection(store).insert_one(document)
        except PyMongoError as e:
            raise self._storage_error("create", e)
        logger.info("Created %s %s", self.resource, inserted_id)
        return str(inserted_id)

    async def replace_record(
        self,
        store: DocumentStore,
        raw_id: str,
        payload: Optional[RecordPayload],
    ) -> None:
        """
        Replaces the whole document. The replacement holds exactly the
        payload fields, so `createdAt` is not carried over.
        """
        document = self._require_fields(payload)
        oid = parse_object_id(raw_id, self.resource)
        try:
            matched = await self._collection(store).replace_by_id(oid, document)
        except PyMongoError as e:
            raise self._storage_error("replace", e)
        if not matched:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        logger.info("Replaced %s %s", self.resource, raw_id)

    async def delete_record(self, store: DocumentStore, raw_id: str) -> None:
        oid = parse_object_id(raw_id, self.resource)
        try:
            deleted = await self._collection(store).delete_by_id(oid)
        except PyMongoError as e:
            raise self._storage_error("delete", e)
        if not deleted:
            raise NotFoundError(resource=self.resource, resource_id=raw_id)
        logger.info("Deleted %s %s", self.resource, raw_id)


# ── Singleton Instances ───────────────────────────────────────────────────
student_service = RecordService(resource="student", collection="students", timestamped=True)
course_service = RecordService(resource="course", collection="courses")
