"""Pydantic schemas used as views in the MVC architecture."""

from .common import ErrorResponse, ServiceInfoResponse
from .health import HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ServiceInfoResponse",
]
