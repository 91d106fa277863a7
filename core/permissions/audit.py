"""Bounded audit trail of permission decisions."""

from collections import deque

from config.defaults import DEFAULT_AUDIT_CAPACITY

from .models import OperationKind, PermissionDecision


class AuditLog:
    """
    Chronological, capacity-capped record of decisions.

    When full, appending evicts the oldest entry. The log is not
    synchronized itself; the owning DecisionGate serializes access.
    """

    def __init__(self, capacity: int = DEFAULT_AUDIT_CAPACITY):
        """
        Initialize the audit log.

        Args:
            capacity: Maximum number of decisions retained (at least 1)
        """
        if capacity < 1:
            raise ValueError(f"Audit capacity must be at least 1, got {capacity}")
        self._entries: deque[PermissionDecision] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, decision: PermissionDecision) -> None:
        """Add a decision at the tail, evicting from the head when full."""
        self._entries.append(decision)

    def entries(self) -> list[PermissionDecision]:
        """Return a copy of all decisions, oldest first."""
        return list(self._entries)

    def query_by_kind(self, kind: OperationKind) -> list[PermissionDecision]:
        """Return decisions for one operation kind, oldest first."""
        return [decision for decision in self._entries if decision.kind == kind]

    def clear(self) -> None:
        """Drop all decisions."""
        self._entries.clear()
