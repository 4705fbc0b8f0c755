from datetime import datetime
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field, ConfigDict


T = TypeVar("T")


class ListMeta(BaseModel):
    """Size of a listing; listings are never paged, only capped"""
    count: int = Field(..., ge=0, description="Number of items in this response")
    limit: Optional[int] = Field(None, ge=1, description="Cap applied to the listing, if any")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every successful JSON response"""
    success: bool = Field(True, description="Always true for successful responses")
    message: Optional[str] = Field(None, description="Human-readable outcome")
    data: Optional[T] = Field(None, description="Payload")
    meta: Optional[ListMeta] = Field(None, description="Present on listings")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Entries listed successfully",
                "data": [{"id": "507f1f77bcf86cd799439011", "name": "Docs", "kind": "folder", "size": 0}],
                "meta": {"count": 1}
            }
        }
    )


class ErrorDetail(BaseModel):
    code: str = Field(..., description="Error code identifier")
    message: str = Field(..., description="Human-readable error message")
    field: Optional[str] = Field(None, description="Offending request field")


class ApiError(BaseModel):
    """Envelope for every failed request"""
    success: bool = Field(False, description="Always false for error responses")
    message: str = Field(..., description="Main error message")
    code: Optional[str] = Field(None, description="Stable machine-readable error code")
    errors: Optional[List[ErrorDetail]] = Field(None, description="Per-field problems")
    details: Optional[dict] = Field(None, description="Context such as quota usage or an orphaned blob reference")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Error timestamp")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Storage quota exceeded",
                "code": "quota_exceeded",
                "details": {"used": 471859200, "requested": 94371840, "limit": 524288000},
                "timestamp": "2024-01-15T10:30:00Z"
            }
        }
    )


class HealthCheck(BaseModel):
    status: str = Field(..., description="healthy or degraded")
    version: Optional[str] = Field(None, description="API version")
    checks: Dict[str, str] = Field(default_factory=dict, description="Per-dependency status")
    timestamp: datetime = Field(default_factory=datetime.utcnow)
