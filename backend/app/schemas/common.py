"""
Common API response schemas
"""

from enum import Enum
from typing import Generic, TypeVar, Optional
from pydantic import BaseModel

T = TypeVar("T")


class ErrorDetail(BaseModel):
    """Error detail information"""
    code: str
    message: str
    field: Optional[str] = None
    details: Optional[dict] = None


class ErrorResponse(BaseModel):
    """Standard error response"""
    success: bool = False
    error: ErrorDetail


class SingleResponse(BaseModel, Generic[T]):
    """Single item response"""
    success: bool = True
    data: T


class ListResponse(BaseModel, Generic[T]):
    """Non-paginated list response"""
    success: bool = True
    data: list[T]
    count: int


class ActionStatus(str, Enum):
    """Outcome of a write action"""
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


class ActionResult(BaseModel, Generic[T]):
    """
    Discriminated result of a write action

    Lets callers tell a missing target or a duplicate apart from success
    without inspecting exceptions.
    """
    status: ActionStatus
    data: Optional[T] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == ActionStatus.OK

    @classmethod
    def success(cls, data: T, message: Optional[str] = None) -> "ActionResult[T]":
        return cls(status=ActionStatus.OK, data=data, message=message)

    @classmethod
    def not_found(cls, resource_type: str) -> "ActionResult[T]":
        return cls(status=ActionStatus.NOT_FOUND, message=f"{resource_type} not found")

    @classmethod
    def conflict(cls, message: str) -> "ActionResult[T]":
        return cls(status=ActionStatus.CONFLICT, message=message)

    def unwrap(self, resource_type: str) -> T:
        """
        Data of an ok result

        Raises:
            ResourceNotFoundError: for not_found (404)
            ResourceExistsError: for conflict (409)
        """
        from app.utils.exceptions import ResourceNotFoundError, ResourceExistsError

        if self.status == ActionStatus.NOT_FOUND:
            raise ResourceNotFoundError(resource_type)
        if self.status == ActionStatus.CONFLICT:
            raise ResourceExistsError(resource_type, self.message or "")
        return self.data
