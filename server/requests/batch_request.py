"""BatchApprovalRequest model."""

from pydantic import BaseModel


class BatchApprovalRequest(BaseModel):
    enabled: bool
