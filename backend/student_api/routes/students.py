"""
Student API — Student Route Handlers
=====================================

What:  CRUD endpoints for student records.
Who:   Reads are public; POST, PUT and DELETE require a bearer token.
How:   Each handler delegates to student_service and only picks the success
       status code. Errors are raised by the service and mapped centrally.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response

from student_api.auth.dependencies import require_auth
from student_api.database import DocumentStore, get_store
from student_api.schemas.common import CreatedResponse, ErrorResponse
from student_api.schemas.records import StudentPayload, StudentRecord
from student_api.services.record_service import student_service

router = APIRouter(prefix="/students", tags=["Students"])


@router.get(
    "",
    response_model=List[StudentRecord],
    responses={500: {"model": ErrorResponse}},
    summary="List all students",
)
async def list_students(store: DocumentStore = Depends(get_store)):
    return await student_service.list_records(store)


@router.get(
    "/{student_id}",
    response_model=StudentRecord,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a student by id",
)
async def get_student(student_id: str, store: DocumentStore = Depends(get_store)):
    return await student_service.get_record(store, student_id)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    dependencies=[Depends(require_auth)],
    summary="Create a student",
)
async def create_student(
    payload: Optional[StudentPayload] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> CreatedResponse:
    new_id = await student_service.create_record(store, payload)
    return CreatedResponse(message="Student created successfully", id=new_id)


@router.put(
    "/{student_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_auth)],
    summary="Replace a student",
)
async def replace_student(
    student_id: str,
    payload: Optional[StudentPayload] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> Response:
    await student_service.replace_record(store, student_id, payload)
    return Response(status_code=204)


@router.delete(
    "/{student_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_auth)],
    summary="Delete a student",
)
async def delete_student(student_id: str, store: DocumentStore = Depends(get_store)) -> Response:
    await student_service.delete_record(store, student_id)
    return Response(status_code=204)
