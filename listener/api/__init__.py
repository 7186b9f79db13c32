"""
API Module — Blocked URL report endpoints

Public API:
- app: FastAPI application instance
- create_app: Application factory
- router: API routes
"""

from .main import app, create_app
from .routes import router
from .schemas import ReportRequest, ReportResponse

__all__ = [
    "app",
    "create_app",
    "router",
    "ReportRequest",
    "ReportResponse",
]
