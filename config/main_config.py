"""Main Config model."""

from pydantic import BaseModel, Field

from .permissions_config import PermissionsConfig


class Config(BaseModel):
    """Main configuration model."""

    permissions: PermissionsConfig = Field(
        default_factory=PermissionsConfig,
        description="Permission engine settings",
    )
    log_level: str | None = Field(
        default=None,
        description="Log level override (falls back to the LOG_LEVEL env var)",
    )
