"""Shared schema types: violations, error responses."""

from pydantic import BaseModel


class Violation(BaseModel):
    """One field-level validation failure, addressed by dotted path."""

    path: str
    reason: str
    code: str


class ErrorResponse(BaseModel):
    type: str
    title: str
    status: int
    detail: str | dict | list
    instance: str
    errors: list[Violation] | None = None
