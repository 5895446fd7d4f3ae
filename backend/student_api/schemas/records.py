"""
Student API — Student and Course Schemas
=========================================

What:  Request payloads and response records for the two CRUD resources.
How:   Python attributes are snake_case; the wire format and the stored
       MongoDB documents use camelCase (firstName, registrationNumber, ...)
       via pydantic's to_camel alias generator.

Presence rule:
    Every payload field is optional at the schema level and checked by the
    service instead. A field counts as missing when it is absent, null,
    "", 0 or false.

Field values are stored exactly as sent: strict types stop pydantic from
turning true into 1 or "2" into 2, and nested objects or arrays pass
through unchanged.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic.alias_generators import to_camel

# Strict members: true stays a bool, "2" stays a string
FieldValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr, List[Any], Dict[str, Any]]


class RecordPayload(BaseModel):
    """Base for PUT/POST bodies of a resource."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        """Document fields keyed by their camelCase names."""
        return self.model_dump(by_alias=True)

    def missing_fields(self) -> List[str]:
        return [key for key, value in self.to_document().items() if not value]


class StudentPayload(RecordPayload):
    """Body of POST /students and PUT /students/{id}."""
    first_name: Optional[FieldValue] = None
    last_name: Optional[FieldValue] = None
    email: Optional[FieldValue] = None
    course: Optional[FieldValue] = Field(default=None, description="Free text, not a course id")
    year: Optional[FieldValue] = None
    registration_number: Optional[FieldValue] = None


class CoursePayload(RecordPayload):
    """Body of POST /courses and PUT /courses/{id}."""
    name: Optional[FieldValue] = None
    code: Optional[FieldValue] = None
    instructor: Optional[FieldValue] = None
    credits: Optional[FieldValue] = None
    semester: Optional[FieldValue] = None
    department: Optional[FieldValue] = None
    year: Optional[FieldValue] = None


class StoredRecord(BaseModel):
    """
    Base for documents read back from MongoDB.

    Unknown keys are passed through untouched; older documents may predate
    a field, so every field may be null.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str = Field(alias="_id", description="Hex ObjectId")


class StudentRecord(StoredRecord):
    first_name: Optional[FieldValue] = None
    last_name: Optional[FieldValue] = None
    email: Optional[FieldValue] = None
    course: Optional[FieldValue] = None
    year: Optional[FieldValue] = None
    registration_number: Optional[FieldValue] = None
    created_at: Optional[datetime] = None


class CourseRecord(StoredRecord):
    name: Optional[FieldValue] = None
    code: Optional[FieldValue] = None
    instructor: Optional[FieldValue] = None
    credits: Optional[FieldValue] = None
    semester: Optional[FieldValue] = None
    department: Optional[FieldValue] = None
    year: Optional[FieldValue] = None
