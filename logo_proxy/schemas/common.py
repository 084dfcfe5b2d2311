from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

# Generic Response Schemas
T = TypeVar('T')


class ResponseBase(BaseModel, Generic[T]):
    """Generic response schema."""
    success: bool = True
    message: Optional[str] = None
    data: Optional[T] = None


class ErrorResponse(BaseModel):
    """Error response schema."""
    success: bool = False
    error: str
    detail: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


# Health Check
class HealthCheck(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    name: str
    version: str

    aggregated_sources: int = 0
    chain_sources: int = 0
