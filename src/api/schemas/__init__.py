"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .history import (
    TriggeredJobRunResponse,
    TriggeredJobHistoryResponse,
)

__all__ = [
    "TriggeredJobRunResponse",
    "TriggeredJobHistoryResponse",
]
