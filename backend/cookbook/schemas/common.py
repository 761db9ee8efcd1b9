"""
Cookbook Backend: Shared Response Schemas
==========================================

What:  Response shapes shared by every router: the error envelope, the
       uniform delete outcome, health and seed reports, upload results.
"""

from typing import Literal, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error envelope for all API errors.

    Fields:
        error: Machine-readable code (validation_error, access_denied, not_found, ...)
        message: Human-readable description
        details: Optional extra context (e.g. which field failed validation)
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class DeleteResponse(BaseModel):
    """
    Outcome of every DELETE endpoint.

    Exactly two bodies exist: {"msg": "Success"} and {"msg": "Failed"}.
    An unknown id or a store failure yields "Failed"; neither is an error status.
    """
    msg: Literal["Success", "Failed"]

    @classmethod
    def from_outcome(cls, deleted: bool) -> "DeleteResponse":
        return cls(msg="Success" if deleted else "Failed")


class SeedResponse(BaseModel):
    msg: str = Field(default="DONE!")
    count: int = Field(description="Number of recipes inserted")


class ImageUploadResponse(BaseModel):
    image: str = Field(description="Stored filename; use it as a recipe's `image` field")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
