"""Permission system models."""

import time
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import PERMISSION_ID_PREFIX, PREVIEW_MAX_CHARS
from ..utils import gen_id


class OperationKind(str, Enum):
    """Category of an effectful operation."""

    FILE_CREATE = "file_create"
    FILE_READ = "file_read"
    FILE_EDIT = "file_edit"
    FILE_DELETE = "file_delete"
    DIRECTORY_CREATE = "directory_create"
    GIT_CLONE = "git_clone"
    GIT_COMMIT = "git_commit"
    GIT_PUSH = "git_push"
    GIT_PULL = "git_pull"
    SHELL_SAFE = "shell_safe"  # ls, cat, pwd, etc.
    SHELL_RISKY = "shell_risky"  # mkdir, pip install, git push
    SHELL_FORBIDDEN = "shell_forbidden"  # rm -rf /, fork bombs, etc.
    NETWORK_REQUEST = "network_request"
    CAMERA_ACCESS = "camera_access"
    LOCATION_ACCESS = "location_access"

    @property
    def display_name(self) -> str:
        """Short title for presenting a request of this kind."""
        return _KIND_TITLES[self]


_KIND_TITLES = {
    OperationKind.FILE_CREATE: "Create File",
    OperationKind.FILE_READ: "Read File",
    OperationKind.FILE_EDIT: "Edit File",
    OperationKind.FILE_DELETE: "Delete File",
    OperationKind.DIRECTORY_CREATE: "Create Directory",
    OperationKind.GIT_CLONE: "Git Clone",
    OperationKind.GIT_COMMIT: "Git Commit",
    OperationKind.GIT_PUSH: "Git Push",
    OperationKind.GIT_PULL: "Git Pull",
    OperationKind.SHELL_SAFE: "Execute Command",
    OperationKind.SHELL_RISKY: "Execute Risky Command",
    OperationKind.SHELL_FORBIDDEN: "Forbidden Command",
    OperationKind.NETWORK_REQUEST: "Network Request",
    OperationKind.CAMERA_ACCESS: "Camera Access",
    OperationKind.LOCATION_ACCESS: "Location Access",
}


class WarningLevel(str, Enum):
    """Severity of an operation.

    FORBIDDEN is an absolute block, not just a level above DANGER.
    """

    INFO = "info"  # Safe operations
    CAUTION = "caution"  # Potentially impactful operations
    DANGER = "danger"  # Destructive operations
    FORBIDDEN = "forbidden"  # Blocked operations


class Action(str, Enum):
    """User action in response to an approval prompt."""

    APPROVE_ONCE = "once"
    APPROVE_ALWAYS = "always"
    DENY = "deny"


def truncate_preview(text: str | None, limit: int = PREVIEW_MAX_CHARS) -> str | None:
    """
    Clip preview text to ``limit`` characters.

    Text at or under the limit is returned verbatim. Longer text keeps its
    first ``limit`` characters followed by a suffix naming the original length.

    Args:
        text: The preview text, or None
        limit: Maximum number of characters kept verbatim

    Returns:
        The preview to display, or None when there is no text
    """
    if text is None:
        return None
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars total)"


class PermissionRequest(BaseModel):
    """Pending operation awaiting a decision.

    Frozen: the warning level assigned at construction never changes.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: gen_id(PERMISSION_ID_PREFIX))
    kind: OperationKind
    action: str
    target_path: str | None = None
    preview: str | None = None
    affected_files: tuple[str, ...] = ()
    warning_level: WarningLevel = WarningLevel.INFO
    created_at: float = Field(default_factory=time.time)

    @field_validator("preview")
    @classmethod
    def _truncate_preview(cls, value: str | None) -> str | None:
        return truncate_preview(value)


class PermissionDecision(BaseModel):
    """Recorded outcome of a permission request."""

    model_config = ConfigDict(frozen=True)

    request_id: str
    kind: OperationKind
    action: str
    approved: bool
    decided_at: float = Field(default_factory=time.time)
    reason: str | None = None


class Response(BaseModel):
    """User response to an approval prompt."""

    request_id: str
    action: Action
    created_at: float = Field(default_factory=time.time)
