"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ExternalServiceError,

    # HubSpot
    HubSpotError,
    HubSpotNotConfiguredError,

    # Requirements catalog
    RequirementsSourceError,
)

__all__ = [
    # Base
    "AppError",
    "ExternalServiceError",

    # HubSpot
    "HubSpotError",
    "HubSpotNotConfiguredError",

    # Requirements catalog
    "RequirementsSourceError",
]
