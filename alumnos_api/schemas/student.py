"""
Alumnos API: Pydantic Request/Response Schemas
==============================================

What:  Pydantic models for the student API contract.
Why:   Automatic serialization and OpenAPI documentation for /api-docs.
How:   Request models accept any JSON value for every field and default
       missing fields to None. The DALUMN table's NOT NULL and type
       constraints are the only validation: a missing or mistyped field
       is forwarded as-is and comes back as a database error (HTTP 500),
       never as a 422.

Design Decision:
    Request fields are typed `Any` on purpose. Typing them `str`/`int`
    would let Pydantic reject bodies with 422, which is an error kind the
    API does not have. The documented JSON type is still published through
    `json_schema_extra` so the generated description stays accurate.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def _field(description: str, json_type: str = "string", **extra: Any) -> Any:
    schema = {"type": json_type, **extra}
    return Field(default=None, description=description, json_schema_extra=schema)


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What clients send
# ══════════════════════════════════════════════════════════════════════════

# Every DALUMN column is NOT NULL, so the documentation lists all of them as
# required even though the models accept a body with fields missing
UPDATE_REQUIRED = [
    "paternal_surname",
    "maternal_surname",
    "given_name",
    "sex",
    "birth_date",
    "birth_place",
    "tax_id",
    "national_id",
    "school_id",
    "email",
]


class StudentUpdate(BaseModel):
    """
    Body of PUT /{prefix}/{id}: every attribute except the identifier.

    All ten attributes are overwritten; an omitted one is written as NULL
    (and rejected by the store).
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "required": UPDATE_REQUIRED,
            "example": {
                "paternal_surname": "Garcia",
                "maternal_surname": "Lopez",
                "given_name": "Ana",
                "sex": "F",
                "birth_date": "2000-01-01",
                "birth_place": "CDMX",
                "tax_id": "GALA000101XXX",
                "national_id": "GALA000101MDFXXX09",
                "school_id": 1,
                "email": "ana@example.com",
            }
        },
    )

    paternal_surname: Any = _field("Paternal surname")
    maternal_surname: Any = _field("Maternal surname")
    given_name: Any = _field("Given name")
    sex: Any = _field("Sex")
    birth_date: Any = _field("Birth date (YYYY-MM-DD)", format="date")
    birth_place: Any = _field("Birth place")
    tax_id: Any = _field("Tax identifier (RFC)")
    national_id: Any = _field("National personal identifier (CURP)")
    school_id: Any = _field("School identifier", json_type="integer")
    email: Any = _field("Email address")


class StudentCreate(StudentUpdate):
    """Body of POST /{prefix}: the identifier plus the ten attributes."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "required": ["id", *UPDATE_REQUIRED],
            "example": {
                "id": "A001",
                "paternal_surname": "Garcia",
                "maternal_surname": "Lopez",
                "given_name": "Ana",
                "sex": "F",
                "birth_date": "2000-01-01",
                "birth_place": "CDMX",
                "tax_id": "GALA000101XXX",
                "national_id": "GALA000101MDFXXX09",
                "school_id": 1,
                "email": "ana@example.com",
            }
        },
    )

    id: Any = _field("Student identifier (unique)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns
# ══════════════════════════════════════════════════════════════════════════


class StudentRecord(BaseModel):
    """One DALUMN row as returned by GET /{prefix} and GET /{prefix}/{id}."""

    id: str = Field(description="Student identifier")
    paternal_surname: Optional[str] = Field(default=None, description="Paternal surname")
    maternal_surname: Optional[str] = Field(default=None, description="Maternal surname")
    given_name: Optional[str] = Field(default=None, description="Given name")
    sex: Optional[str] = Field(default=None, description="Sex")
    birth_date: Optional[str] = Field(default=None, description="Birth date (YYYY-MM-DD)")
    birth_place: Optional[str] = Field(default=None, description="Birth place")
    tax_id: Optional[str] = Field(default=None, description="Tax identifier (RFC)")
    national_id: Optional[str] = Field(default=None, description="National personal identifier (CURP)")
    # Union: a legacy or loosely typed row must not fail serialization
    school_id: Optional[Union[int, str]] = Field(default=None, description="School identifier")
    email: Optional[str] = Field(default=None, description="Email address")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """
    Every non-record response, success or failure: a single `message`.

    Examples:
        {"message": "Data inserted successfully"}
        {"message": "Student not found"}
        {"message": "Duplicate entry 'A001' for key 'PRIMARY'"}
    """

    message: str = Field(description="Human-readable outcome or the store's error text")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the process started")


StudentList = List[StudentRecord]
