"""
API Routers Package

Available Routers:
    - grading_router: answer evaluation, evaluator status and threshold endpoints
"""

from .grading import router as grading_router

__all__ = ["grading_router"]
