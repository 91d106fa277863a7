"""
Permission and safety policy engine.

Classifies shell commands by risk, builds permission requests, and decides
approve/deny through a DecisionGate that keeps session grants, a batch
approval override and a bounded audit trail.
"""

from .models import (
    Action,
    OperationKind,
    PermissionDecision,
    PermissionRequest,
    Response,
    WarningLevel,
    truncate_preview,
)
from .audit import AuditLog
from .builders import (
    build_file_request,
    build_git_request,
    build_network_request,
    build_sensor_request,
    build_shell_request,
)
from .classifier import classify_shell_command, match_rule, normalize_command
from .gate import DecisionGate
from .privacy import PrivacyGuard, detect_required_permission
from .prompts import PromptBroker
from .rules import CLASSIFICATION_RULES, ClassificationRule

__all__ = [
    # Enums
    "OperationKind",
    "WarningLevel",
    "Action",
    # Models
    "PermissionRequest",
    "PermissionDecision",
    "Response",
    # Classification
    "ClassificationRule",
    "CLASSIFICATION_RULES",
    "classify_shell_command",
    "match_rule",
    "normalize_command",
    # Request builders
    "build_file_request",
    "build_git_request",
    "build_shell_request",
    "build_network_request",
    "build_sensor_request",
    "truncate_preview",
    # Classes
    "AuditLog",
    "DecisionGate",
    "PromptBroker",
    "PrivacyGuard",
    "detect_required_permission",
]
