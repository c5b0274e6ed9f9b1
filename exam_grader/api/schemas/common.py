"""
Common API Schemas

Error payload shared by every grading endpoint and the global handlers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Body of every non-2xx response produced by the exception handlers.

    Attributes:
        code: Stable identifier the portal can branch on (e.g. "INVALID_THRESHOLDS")
        message: Text suitable for an admin-facing alert
        details: Extra context, e.g. the list of violated threshold rules
    """

    code: str = Field(description="Stable error identifier")
    message: str = Field(description="Readable explanation")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Extra context")

    model_config = {
        "json_schema_extra": {
            "example": {
                "code": "INVALID_THRESHOLDS",
                "message": "InvalidThresholdsError: Invalid thresholds: good (0.9) must be <= excellent (0.85)",
                "details": {"errors": ["good (0.9) must be <= excellent (0.85)"]},
            }
        }
    }
