"""
Alumnos API: Student Route Handlers
===================================

What:  The five record endpoints, built by one registrar and mounted under
       every historical prefix (/dalumn and /Alumno).
Why:   Both prefixes have always served identical behavior over the same
       table; a single set of handlers guarantees they cannot drift apart.
How:   build_student_router(prefix, tag) returns an APIRouter whose handlers
       delegate to the StudentRepository stored on app.state.

Endpoints (per prefix):
    GET    {prefix}        → 200 list of students
    GET    {prefix}/{id}   → 200 student | 404 "Student not found"
    POST   {prefix}        → 200 "Data inserted successfully"
    PUT    {prefix}/{id}   → 200 "Student updated successfully" (even if no row matched)
    DELETE {prefix}/{id}   → 200 "Student deleted successfully" | 404 "Student not found"

    Any store failure → 500 with the driver's message (global handler).

Bodies may be JSON or form-encoded. There is no 4xx for a bad body: it is
read as "fields missing" and the store's NOT NULL error answers it.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from alumnos_api.exceptions import NotFoundError
from alumnos_api.schemas.student import (
    MessageResponse,
    StudentCreate,
    StudentRecord,
    StudentUpdate,
)
from alumnos_api.services.student_repository import StudentRepository

logger = logging.getLogger(__name__)

# (prefix, documentation tag) pairs served by the application
STUDENT_PREFIXES = (
    ("/dalumn", "DALUMN"),
    ("/Alumno", "Alumno"),
)

INSERTED_MESSAGE = "Data inserted successfully"
UPDATED_MESSAGE = "Student updated successfully"
DELETED_MESSAGE = "Student deleted successfully"

_ERROR_RESPONSES = {
    500: {"description": "Database error (driver message)", "model": MessageResponse},
}
_NOT_FOUND_RESPONSES = {
    404: {"description": "Student not found", "model": MessageResponse},
    **_ERROR_RESPONSES,
}


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_repository(request: Request) -> StudentRepository:
    """FastAPI dependency: the repository created by create_app()."""
    return request.app.state.student_repository


async def read_record_body(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency: the request body as a field dict.

    Accepts JSON objects and HTML form posts. Anything else (no body,
    unparseable JSON, a JSON array or scalar) reads as an empty dict, so
    every field goes to the store as NULL and the store rejects it.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    if not await request.body():
        return {}
    try:
        data = await request.json()
    except ValueError:
        logger.info("Unparseable request body on %s", request.url.path)
        return {}
    return data if isinstance(data, dict) else {}


def _request_body_doc(model) -> Dict[str, Any]:
    # The body is read by read_record_body, so the schema is published by hand
    schema = model.model_json_schema()
    return {
        "requestBody": {
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
        },
    }


def build_student_router(prefix: str, tag: str) -> APIRouter:
    """
    Create the record routes for one prefix.

    Args:
        prefix: Path root, e.g. "/dalumn"
        tag:    Swagger UI group name for this prefix
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get(
        "",
        response_model=List[StudentRecord],
        responses=_ERROR_RESPONSES,
        summary="List students",
        description="Returns every stored student. No ordering or pagination.",
    )
    async def list_students(
        repository: StudentRepository = Depends(get_repository),
    ) -> List[StudentRecord]:
        return await repository.list()

    @router.get(
        "/{student_id}",
        response_model=StudentRecord,
        responses=_NOT_FOUND_RESPONSES,
        summary="Get a student by ID",
    )
    async def get_student(
        student_id: str,
        repository: StudentRepository = Depends(get_repository),
    ) -> StudentRecord:
        student = await repository.get_by_id(student_id)
        if student is None:
            raise NotFoundError(resource="Student", resource_id=student_id)
        return student

    @router.post(
        "",
        response_model=MessageResponse,
        responses=_ERROR_RESPONSES,
        summary="Create a student",
        description=(
            "Inserts a student with all eleven attributes. A duplicate ID or a "
            "missing attribute is rejected by the database (HTTP 500)."
        ),
        openapi_extra=_request_body_doc(StudentCreate),
    )
    async def create_student(
        body: Dict[str, Any] = Depends(read_record_body),
        repository: StudentRepository = Depends(get_repository),
    ) -> MessageResponse:
        await repository.create(StudentCreate.model_validate(body))
        return MessageResponse(message=INSERTED_MESSAGE)

    @router.put(
        "/{student_id}",
        response_model=MessageResponse,
        responses=_ERROR_RESPONSES,
        summary="Update a student",
        description=(
            "Overwrites every attribute except the ID. Responds with success "
            "even when no student has that ID."
        ),
        openapi_extra=_request_body_doc(StudentUpdate),
    )
    async def update_student(
        student_id: str,
        body: Dict[str, Any] = Depends(read_record_body),
        repository: StudentRepository = Depends(get_repository),
    ) -> MessageResponse:
        affected = await repository.update(student_id, StudentUpdate.model_validate(body))
        if affected == 0:
            logger.info("Update of %s matched no rows", student_id)
        return MessageResponse(message=UPDATED_MESSAGE)

    @router.delete(
        "/{student_id}",
        response_model=MessageResponse,
        responses=_NOT_FOUND_RESPONSES,
        summary="Delete a student",
    )
    async def delete_student(
        student_id: str,
        repository: StudentRepository = Depends(get_repository),
    ) -> MessageResponse:
        affected = await repository.delete(student_id)
        if affected == 0:
            raise NotFoundError(resource="Student", resource_id=student_id)
        return MessageResponse(message=DELETED_MESSAGE)

    return router
