"""Pydantic models for responses."""

from datetime import datetime

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """Response model for image upload."""

    filePath: str = Field(description="Public path of the stored image")  # noqa: N815


class ErrorResponse(BaseModel):
    """Error response model."""

    message: str = Field(description="Error message safe to show to clients")
    errorDetails: str | None = Field(  # noqa: N815
        default=None,
        description="Internal failure detail, omitted in production",
    )


class HealthCheck(BaseModel):
    """Health check response model."""

    status: str = Field(description="Service status")
    timestamp: datetime = Field(description="Check timestamp")
    version: str = Field(description="API version")
    storage_writable: bool = Field(description="Storage directory status")
