"""
Custom Exceptions and Error Handling
Standardized error responses across the application
"""

from typing import Optional
from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from fastapi import Request
from pydantic import ValidationError
import logging

logger = logging.getLogger(__name__)


class ServiceHubException(Exception):
    """Base exception for ServiceHub application"""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[dict] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_response(self) -> dict:
        """Convert to API response format"""
        response = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message
            }
        }
        if self.details:
            response["error"]["details"] = self.details
        return response


# Resource Exceptions
class ResourceNotFoundError(ServiceHubException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        message = f"{resource_type} not found"
        if resource_id:
            message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(
            code=f"{resource_type.upper()}_NOT_FOUND",
            message=message,
            status_code=status.HTTP_404_NOT_FOUND
        )


class ResourceExistsError(ServiceHubException):
    """Resource already exists (conflict)"""

    def __init__(self, resource_type: str, message: str = ""):
        super().__init__(
            code=f"{resource_type.upper()}_EXISTS",
            message=message or f"{resource_type} already exists",
            status_code=status.HTTP_409_CONFLICT
        )


# Store Exceptions
class DocumentLookupError(ServiceHubException, LookupError):
    """Entity missing or the read query failed"""

    def __init__(self, message: str, status_code: int = status.HTTP_404_NOT_FOUND):
        super().__init__(
            code="LOOKUP_ERROR",
            message=message,
            status_code=status_code
        )


class PersistenceError(ServiceHubException):
    """Write to the document store failed"""

    def __init__(self, message: str):
        super().__init__(
            code="PERSISTENCE_ERROR",
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )


class ConsistencyError(ServiceHubException):
    """Cross-document invariant violated"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="CONSISTENCY_ERROR",
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


# Validation Exceptions
class ValidationException(ServiceHubException):
    """Input validation failed"""

    def __init__(self, errors: list[dict]):
        super().__init__(
            code="VALIDATION_ERROR",
            message="Input validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"errors": errors}
        )

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> "ValidationException":
        return cls(format_validation_errors(exc.errors()))

    @property
    def field_errors(self) -> dict[str, str]:
        """First message per field"""
        result = {}
        for error in self.details["errors"]:
            result.setdefault(error["field"], error["message"])
        return result


# External Service Exceptions
class ExternalServiceError(ServiceHubException):
    """External service (API) error"""

    def __init__(self, service_name: str, message: str = ""):
        super().__init__(
            code=f"{service_name.upper()}_ERROR",
            message=message or f"{service_name} service error",
            status_code=status.HTTP_502_BAD_GATEWAY
        )


class UploadError(ExternalServiceError):
    """Media upload failed"""

    def __init__(self, message: str = "Failed to upload file"):
        super().__init__(service_name="UPLOAD", message=message)


def format_validation_errors(raw_errors: list[dict]) -> list[dict]:
    """Flatten pydantic error entries into field/message/type dicts"""
    errors = []
    for error in raw_errors:
        loc = [str(part) for part in error["loc"] if part != "body"]
        errors.append({
            "field": ".".join(loc) or "__root__",
            "message": error["msg"],
            "type": error["type"]
        })
    return errors


# Exception Handlers for FastAPI
async def service_hub_exception_handler(request: Request, exc: ServiceHubException) -> JSONResponse:
    """Handle ServiceHub custom exceptions"""
    logger.warning(f"ServiceHub exception: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response()
    )


async def validation_exception_handler(request: Request, exc) -> JSONResponse:
    """Handle request and model validation errors"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "success": False,
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Input validation failed",
                "details": {"errors": format_validation_errors(exc.errors())}
            }
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions"""
    detail = exc.detail
    if isinstance(detail, dict):
        code = detail.get("code", "HTTP_ERROR")
        message = detail.get("message", str(detail))
    else:
        code = "HTTP_ERROR"
        message = str(detail)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": {
                "code": code,
                "message": message
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    logger.error(f"Unexpected error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "error": {
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    from fastapi.exceptions import RequestValidationError

    app.add_exception_handler(ServiceHubException, service_hub_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
