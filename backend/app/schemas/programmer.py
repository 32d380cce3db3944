"""
Programmers Backend — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract between the Angular client and the backend.
How:   Services validate normalized request payloads against the input models,
       routes serialize ORM objects through the response models.

Input models differ only in which fields are required:
    ProgrammerCreate  POST   name, experience, password all required
    ProgrammerUpdate  PUT    name, experience required; password optional (keeps old hash)
    ProgrammerPatch   PATCH  everything optional; only supplied fields are applied
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import pydantic
from pydantic import BaseModel, Field, RootModel, field_validator
from pydantic_core import PydanticCustomError

from app.models.programmer import NAME_MAX_LENGTH

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128

FIELD_LABELS: Dict[str, str] = {
    "name": "Name",
    "experience": "Experience",
    "password": "Password",
}


# ══════════════════════════════════════════════════════════════════════════
# Input Models — validated once, at the server boundary
# ══════════════════════════════════════════════════════════════════════════


class _ProgrammerInput(BaseModel):
    model_config = {"extra": "ignore"}

    @field_validator("experience", mode="before", check_fields=False)
    @classmethod
    def reject_booleans(cls, v):
        # bool is an int subclass; lax float parsing would turn true into 1.0
        if isinstance(v, bool):
            raise PydanticCustomError("float_type", "Input should be a valid number")
        return v



class ProgrammerCreate(_ProgrammerInput):
    name: str = Field(max_length=NAME_MAX_LENGTH)
    experience: float = Field(ge=0, allow_inf_nan=False)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)


class ProgrammerUpdate(_ProgrammerInput):
    name: str = Field(max_length=NAME_MAX_LENGTH)
    experience: float = Field(ge=0, allow_inf_nan=False)
    password: Optional[str] = Field(
        default=None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )


class ProgrammerPatch(_ProgrammerInput):
    name: Optional[str] = Field(default=None, max_length=NAME_MAX_LENGTH)
    experience: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    password: Optional[str] = Field(
        default=None, min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH
    )


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ProgrammerResponse(BaseModel):
    """
    What:  Public representation of a programmer.
    Why:   The password hash is deliberately absent; it never leaves the server.
    """
    id: int = Field(description="Record identifier")
    name: str = Field(description="Display name")
    experience: float = Field(description="Years of experience")
    created_at: datetime = Field(description="When the record was created (UTC)")
    updated_at: datetime = Field(description="When the record was last written (UTC)")

    model_config = {"from_attributes": True}

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite hands timestamps back without tzinfo; they were stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ErrorResponse(BaseModel):
    """
    Standardized error envelope for every error except field validation.

    Example:
        {
            "error": "not_found",
            "message": "programmer with ID '7' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


# Field validation failures are returned as the bare mapping, not the envelope
FieldErrors = Dict[str, List[str]]


class FieldErrorsResponse(RootModel[FieldErrors]):
    """422 body: {"name": ["Name cannot be blank."], ...}"""


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


# ══════════════════════════════════════════════════════════════════════════
# Error Translation
# ══════════════════════════════════════════════════════════════════════════

_NUMBER_ERRORS = {"float_parsing", "float_type", "finite_number"}


def _message_for(error: dict, label: str) -> str:
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return f"{label} cannot be blank."
    if kind == "string_too_long":
        return f"{label} is too long (maximum is {ctx.get('max_length')} characters)."
    if kind == "string_too_short":
        return f"{label} is too short (minimum is {ctx.get('min_length')} characters)."
    if kind in _NUMBER_ERRORS:
        return f"{label} must be a number."
    if kind == "greater_than_equal":
        return f"{label} must be no less than {ctx.get('ge')}."
    if kind == "string_type":
        return f"{label} must be a string."
    return f"{label}: {error.get('msg', 'is invalid')}."


def collect_field_errors(exc: pydantic.ValidationError) -> FieldErrors:
    """
    Converts a pydantic ValidationError into `field -> [messages]`.

    Messages follow the form-validation wording the Angular partials display
    next to each input, e.g. "Name cannot be blank.".
    """
    errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__all__",)
        field = str(loc[0])
        label = FIELD_LABELS.get(field, field.replace("_", " ").capitalize())
        message = _message_for(error, label)
        bucket = errors.setdefault(field, [])
        if message not in bucket:
            bucket.append(message)
    return errors
