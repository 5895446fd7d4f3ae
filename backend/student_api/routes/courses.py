"""
Student API — Course Route Handlers
====================================

What:  CRUD endpoints for course records.
Who:   Reads are public; POST, PUT and DELETE require a bearer token.
How:   Each handler delegates to course_service and only picks the success
       status code. Errors are raised by the service and mapped centrally.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response

from student_api.auth.dependencies import require_auth
from student_api.database import DocumentStore, get_store
from student_api.schemas.common import CreatedResponse, ErrorResponse
from student_api.schemas.records import CoursePayload, CourseRecord
from student_api.services.record_service import course_service

router = APIRouter(prefix="/courses", tags=["Courses"])


@router.get(
    "",
    response_model=List[CourseRecord],
    responses={500: {"model": ErrorResponse}},
    summary="List all courses",
)
async def list_courses(store: DocumentStore = Depends(get_store)):
    return await course_service.list_records(store)


@router.get(
    "/{course_id}",
    response_model=CourseRecord,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a course by id",
)
async def get_course(course_id: str, store: DocumentStore = Depends(get_store)):
    return await course_service.get_record(store, course_id)


@router.post(
    "",
    status_code=201,
    response_model=CreatedResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    dependencies=[Depends(require_auth)],
    summary="Create a course",
)
async def create_course(
    payload: Optional[CoursePayload] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> CreatedResponse:
    new_id = await course_service.create_record(store, payload)
    return CreatedResponse(message="Course created successfully", id=new_id)


@router.put(
    "/{course_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_auth)],
    summary="Replace a course",
)
async def replace_course(
    course_id: str,
    payload: Optional[CoursePayload] = Body(default=None),
    store: DocumentStore = Depends(get_store),
) -> Response:
    await course_service.replace_record(store, course_id, payload)
    return Response(status_code=204)


@router.delete(
    "/{course_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_auth)],
    summary="Delete a course",
)
async def delete_course(course_id: str, store: DocumentStore = Depends(get_store)) -> Response:
    await course_service.delete_record(store, course_id)
    return Response(status_code=204)
