"""
Custom exception classes for the application.

Errors raised here are converted to the standard JSON error body by the
route layer (handle_error in routes/deal_properties.py).
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.
    
    All custom exceptions inherit from this.
    
    Attributes:
        code: Error code (e.g., "HUBSPOT_ERROR")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """
    
    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)
    
    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ExternalServiceError(AppError):
    """External service failure (503)."""
    
    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# HUBSPOT ERRORS
# ===================

class HubSpotError(ExternalServiceError):
    """HubSpot API request failed."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        details: Optional[dict] = None
    ):
        super().__init__(
            service="hubspot",
            message=message,
            details={"http_status": status, **(details or {})}
        )
        self.http_status = status


class HubSpotNotConfiguredError(HubSpotError):
    """No HubSpot access token available."""

    def __init__(self):
        super().__init__(
            message="HubSpot access token is not configured",
            details={"env": "HUBSPOT_ACCESS_TOKEN"}
        )


# ===================
# REQUIREMENTS CATALOG ERRORS
# ===================

class RequirementsSourceError(ExternalServiceError):
    """Requirement catalog could not be downloaded or parsed."""

    def __init__(self, url: str, message: str):
        super().__init__(
            service="requirements_source",
            message=message,
            details={"url": url}
        )
