"""
API Schemas Package

Contains shared Pydantic models for API Layer.
"""

from exam_grader.api.schemas.common import ErrorResponse

__all__ = ["ErrorResponse"]
