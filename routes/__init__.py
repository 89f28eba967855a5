"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.deal_requirements import router as deal_requirements_router
from routes.deal_properties import router as deal_properties_router
from routes.requirements import router as requirements_router

__all__ = [
    "deal_requirements_router",
    "deal_properties_router",
    "requirements_router",
]
