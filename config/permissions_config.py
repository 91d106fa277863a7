"""PermissionsConfig model."""

from pydantic import BaseModel, Field

from core.permissions.models import OperationKind

from .defaults import DEFAULT_AUDIT_CAPACITY, DEFAULT_PROMPT_TIMEOUT_SECONDS


class PermissionsConfig(BaseModel):
    """Startup settings for the permission engine."""

    audit_capacity: int = Field(
        default=DEFAULT_AUDIT_CAPACITY,
        ge=1,
        description="Maximum number of decisions kept in the audit trail",
    )
    prompt_timeout_seconds: float = Field(
        default=DEFAULT_PROMPT_TIMEOUT_SECONDS,
        gt=0,
        description="Seconds to wait for a user answer before denying",
    )
    session_grants: list[OperationKind] = Field(
        default_factory=list,
        description="Operation kinds granted for the whole session at startup",
    )
    batch_approval: bool = Field(
        default=False,
        description="Start with batch approval mode enabled",
    )
