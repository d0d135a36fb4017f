"""
Utility modules for ServiceHub
"""

from app.utils.exceptions import (
    ServiceHubException,
    DocumentLookupError,
    PersistenceError,
    ConsistencyError,
    ValidationException,
    UploadError,
    register_exception_handlers
)

__all__ = [
    "ServiceHubException",
    "DocumentLookupError",
    "PersistenceError",
    "ConsistencyError",
    "ValidationException",
    "UploadError",
    "register_exception_handlers"
]
