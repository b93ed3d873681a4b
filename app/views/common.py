"""Common response schemas."""

from typing import Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    detail: str
    code: Optional[str] = None


class ServiceInfoResponse(BaseModel):
    message: str
    version: str
    status: str
