"""
Decision authority for permission requests.

Every request is evaluated with a fixed precedence:

1. FORBIDDEN warning level denies unconditionally.
2. A session grant for the request's kind approves.
3. Batch approval mode approves.
4. The default policy for the warning level decides (INFO approves,
   CAUTION and DANGER deny).

Each evaluation appends exactly one decision to the audit log.
"""

import logging
import threading
from typing import Iterable

from .audit import AuditLog
from .builders import build_file_request, build_git_request
from .classifier import classify_shell_command
from .models import OperationKind, PermissionDecision, PermissionRequest, WarningLevel

logger = logging.getLogger(__name__)

REASON_FORBIDDEN = "forbidden operation"
REASON_SESSION_GRANT = "session permission granted"
REASON_BATCH_MODE = "batch approval mode active"

# Outcome when nothing overrides the warning level
DEFAULT_APPROVAL = {
    WarningLevel.INFO: True,
    WarningLevel.CAUTION: False,
    WarningLevel.DANGER: False,
    WarningLevel.FORBIDDEN: False,
}


def default_reason(level: WarningLevel, approved: bool) -> str:
    """Reason recorded when the default policy decides."""
    verdict = "approved" if approved else "denied"
    return f"{verdict} by default policy ({level.name})"


class DecisionGate:
    """
    Approve/deny authority for effectful operations.

    Holds session grants, the batch approval flag, the audit log and the
    single pending-request slot. One lock guards all of them, so grants,
    batch toggles and decisions are linearizable. Nothing under the lock
    blocks or performs I/O.

    One gate is created per user session and handed to every caller.
    """

    def __init__(
        self,
        audit_log: AuditLog | None = None,
        session_grants: Iterable[OperationKind] = (),
        batch_approval: bool = False,
    ):
        """
        Initialize the gate.

        Args:
            audit_log: Audit log to record into (a default-capacity log if omitted)
            session_grants: Operation kinds granted from the start
            batch_approval: Whether batch approval mode starts enabled
        """
        self._lock = threading.Lock()
        self._audit = audit_log if audit_log is not None else AuditLog()
        self._granted: set[OperationKind] = set(session_grants)
        self._batch_approval = batch_approval
        self._current_request: PermissionRequest | None = None

    # =========================================================================
    # Decisions
    # =========================================================================

    def request_decision(self, request: PermissionRequest) -> bool:
        """
        Decide whether an operation may proceed.

        CAUTION and DANGER requests that nothing overrides are denied and
        become the current pending request for a presentation layer to show.

        Args:
            request: The permission request

        Returns:
            True if the caller may proceed, False if it must abort
        """
        with self._lock:
            resolved = self._resolve(request)
            if resolved is None:
                self._current_request = request
                resolved = (False, default_reason(request.warning_level, False))
            approved, reason = resolved
            self._record(request, approved, reason)
        return approved

    def try_decide(self, request: PermissionRequest) -> bool | None:
        """
        Decide a request only if it needs no human input.

        Records a decision when one of the overrides or an approving default
        applies. Requests the default policy would deny are left unrecorded.

        Args:
            request: The permission request

        Returns:
            True or False when decided, None when a human should be asked
        """
        with self._lock:
            resolved = self._resolve(request)
            if resolved is None:
                return None
            approved, reason = resolved
            self._record(request, approved, reason)
        return approved

    def record_decision(self, request: PermissionRequest, approved: bool, reason: str) -> None:
        """Record a decision that was resolved outside the gate."""
        with self._lock:
            self._record(request, approved, reason)

    def _resolve(self, request: PermissionRequest) -> tuple[bool, str] | None:
        # Caller holds the lock
        if request.warning_level == WarningLevel.FORBIDDEN:
            logger.error("FORBIDDEN operation blocked: %s", request.action)
            return False, REASON_FORBIDDEN

        if request.kind in self._granted:
            return True, REASON_SESSION_GRANT

        if self._batch_approval:
            return True, REASON_BATCH_MODE

        if DEFAULT_APPROVAL[request.warning_level]:
            return True, default_reason(request.warning_level, True)

        return None

    def _record(self, request: PermissionRequest, approved: bool, reason: str) -> None:
        # Caller holds the lock
        decision = PermissionDecision(
            request_id=request.id,
            kind=request.kind,
            action=request.action,
            approved=approved,
            reason=reason,
        )
        self._audit.append(decision)
        logger.info(
            "Permission decision: %s - %s (%s)",
            request.kind.value,
            "APPROVED" if approved else "DENIED",
            reason,
        )

    # =========================================================================
    # Pending request slot
    # =========================================================================

    @property
    def current_request(self) -> PermissionRequest | None:
        """The most recent request awaiting human attention, if any."""
        with self._lock:
            return self._current_request

    def present_request(self, request: PermissionRequest) -> None:
        """Place a request in the pending slot."""
        with self._lock:
            self._current_request = request

    def dismiss_request(self, request_id: str | None = None) -> None:
        """
        Empty the pending slot.

        Args:
            request_id: Only dismiss if the slot holds this request (any request if None)
        """
        with self._lock:
            if self._current_request is None:
                return
            if request_id is None or self._current_request.id == request_id:
                self._current_request = None

    # =========================================================================
    # Session state
    # =========================================================================

    @property
    def granted_permissions(self) -> frozenset[OperationKind]:
        with self._lock:
            return frozenset(self._granted)

    @property
    def batch_approval_mode(self) -> bool:
        with self._lock:
            return self._batch_approval

    def grant_session_permission(self, kind: OperationKind) -> None:
        """Approve all future non-forbidden requests of this kind."""
        with self._lock:
            self._granted.add(kind)
        logger.info("Session permission granted: %s", kind.value)

    def revoke_session_permission(self, kind: OperationKind) -> None:
        """Withdraw a session grant."""
        with self._lock:
            self._granted.discard(kind)
        logger.info("Session permission revoked: %s", kind.value)

    def enable_batch_approval(self) -> None:
        """Auto-approve every non-forbidden request until disabled."""
        with self._lock:
            changed = not self._batch_approval
            self._batch_approval = True
        if changed:
            logger.warning("Batch approval mode ENABLED - all non-forbidden operations will auto-approve")

    def disable_batch_approval(self) -> None:
        with self._lock:
            changed = self._batch_approval
            self._batch_approval = False
        if changed:
            logger.info("Batch approval mode DISABLED")

    def clear_session(self) -> None:
        """Drop all session grants, disable batch mode and empty the pending slot."""
        with self._lock:
            self._granted.clear()
            self._batch_approval = False
            self._current_request = None
        logger.info("Session permissions cleared")

    # =========================================================================
    # Audit trail
    # =========================================================================

    def get_audit_trail(self) -> list[PermissionDecision]:
        """Return all retained decisions, oldest first."""
        with self._lock:
            return self._audit.entries()

    def get_decisions_for_kind(self, kind: OperationKind) -> list[PermissionDecision]:
        """Return retained decisions for one operation kind, oldest first."""
        with self._lock:
            return self._audit.query_by_kind(kind)

    def clear_audit_trail(self) -> None:
        with self._lock:
            self._audit.clear()
        logger.info("Audit trail cleared")

    # =========================================================================
    # Request helpers
    # =========================================================================

    @staticmethod
    def classify_shell_command(command: str | None) -> tuple[OperationKind, WarningLevel]:
        """Classify a shell command. See :func:`classify_shell_command`."""
        return classify_shell_command(command)

    @staticmethod
    def create_file_request(operation: str, file_path: str, content: str | None = None) -> PermissionRequest:
        """Build a file operation request. See :func:`build_file_request`."""
        return build_file_request(operation, file_path, content)

    @staticmethod
    def create_git_request(
        operation: str,
        repository: str,
        affected_files: Iterable[str] = (),
        commit_message: str | None = None,
    ) -> PermissionRequest:
        """Build a git operation request. See :func:`build_git_request`."""
        return build_git_request(operation, repository, affected_files, commit_message)
