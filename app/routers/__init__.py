"""
FastAPI routers for the video worker.
"""

from app.routers import health, jobs

__all__ = ["health", "jobs"]
