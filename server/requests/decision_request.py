"""DecisionRequest model."""

from pydantic import BaseModel

from .operation_input import OperationInput


class DecisionRequest(BaseModel):
    operation: OperationInput
