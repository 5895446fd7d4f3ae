"""
Student API — Pydantic Request/Response Schemas
================================================

What:  The JSON contract of the API, in camelCase on the wire.

Schema Inventory:
    - common.py:   CreatedResponse, ErrorResponse, HealthResponse
    - auth.py:     Credentials, TokenResponse
    - records.py:  StudentPayload/StudentRecord, CoursePayload/CourseRecord
"""
