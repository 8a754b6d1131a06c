"""Pydantic models for the gateway's HTTP responses."""

from typing import Literal, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response for the /health endpoint."""
    status: Literal["healthy"] = "healthy"
    active_sessions: int = 0


class ErrorDetail(BaseModel):
    """Error detail for API errors."""
    message: str
    type: str = "server_error"
    code: Optional[str] = None


class ErrorResponse(BaseModel):
    """Error body returned for failed HTTP requests."""
    error: ErrorDetail
