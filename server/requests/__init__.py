"""
HTTP request models for the API.

These are Pydantic models for validating and parsing API requests.
"""

from .batch_request import BatchApprovalRequest
from .classify_request import ClassifyRequest
from .decision_request import DecisionRequest
from .operation_input import (
    FileOperationInput,
    GitOperationInput,
    OperationInput,
    ShellOperationInput,
)

__all__ = [
    "ClassifyRequest",
    "BatchApprovalRequest",
    # Decision requests
    "DecisionRequest",
    "ShellOperationInput",
    "FileOperationInput",
    "GitOperationInput",
    "OperationInput",
]
