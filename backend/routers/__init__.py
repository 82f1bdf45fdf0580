"""
Routers module
"""
from backend.routers.tables_router import router as tables_router

__all__ = [
    "tables_router",
]
