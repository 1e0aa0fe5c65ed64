"""Core schemas for API responses."""

from src.core.schemas.responses import ErrorResponse, HealthResponse, ServiceInfoResponse

__all__ = ["ErrorResponse", "HealthResponse", "ServiceInfoResponse"]
