"""
Legacy string-permission surface.

Older callers ask "is this query allowed?" and grant permissions by name
("file_write", "network_request", ...). PrivacyGuard keeps that API working
on top of a DecisionGate, mirroring legacy grants into session grants.
"""

import logging
import re

from .gate import DecisionGate
from .models import OperationKind, PermissionDecision, PermissionRequest

logger = logging.getLogger(__name__)

# Checked in order; first match names the permission a query needs
QUERY_PERMISSIONS = [
    ("file_write", re.compile(r"\b(write|edit|modify|delete).*file\b")),
    ("network_request", re.compile(r"\b(fetch|get|download|api)\b")),
    ("camera_access", re.compile(r"\b(camera|photo|picture)\b")),
    ("location_access", re.compile(r"\b(location|gps|weather)\b")),
]

LEGACY_PERMISSION_KINDS = {
    "file_write": OperationKind.FILE_EDIT,
    "network_request": OperationKind.NETWORK_REQUEST,
    "camera_access": OperationKind.CAMERA_ACCESS,
    "location_access": OperationKind.LOCATION_ACCESS,
}


def detect_required_permission(query: str) -> str | None:
    """Return the legacy permission name a free-text query needs, if any."""
    lowered = query.lower()
    for permission, pattern in QUERY_PERMISSIONS:
        if pattern.search(lowered):
            return permission
    return None


class PrivacyGuard:
    """Legacy permission checks backed by a DecisionGate."""

    def __init__(self, gate: DecisionGate):
        self.gate = gate
        self._granted: set[str] = set()

    def is_action_allowed(self, query: str) -> bool:
        """
        Check whether a free-text action may run.

        Queries needing no permission are allowed. Checking does not record
        an audit entry.
        """
        required = detect_required_permission(query)
        if required is None:
            return True
        if required in self._granted:
            return True
        logger.warning("Action requires permission: %s", required)
        return False

    def grant_permission(self, permission: str) -> None:
        """Grant a legacy permission and the matching session grant."""
        self._granted.add(permission)
        kind = LEGACY_PERMISSION_KINDS.get(permission)
        if kind is not None:
            self.gate.grant_session_permission(kind)
        logger.info("Permission granted: %s", permission)

    def revoke_permission(self, permission: str) -> None:
        self._granted.discard(permission)
        kind = LEGACY_PERMISSION_KINDS.get(permission)
        if kind is not None:
            self.gate.revoke_session_permission(kind)
        logger.info("Permission revoked: %s", permission)

    def request_permission_with_preview(self, request: PermissionRequest) -> bool:
        return self.gate.request_decision(request)

    def enable_batch_approval(self) -> None:
        self.gate.enable_batch_approval()

    def disable_batch_approval(self) -> None:
        self.gate.disable_batch_approval()

    def get_audit_trail(self) -> list[PermissionDecision]:
        return self.gate.get_audit_trail()

    def clear_session(self) -> None:
        self._granted.clear()
        self.gate.clear_session()
