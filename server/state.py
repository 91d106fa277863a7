"""
Server-side state management.

Holds the handles to the DecisionGate and PromptBroker that the routes
operate on. Both are created once at startup by ``init_permission_system``.
"""

import logging

from config import PermissionsConfig
from core.events import EventBus
from core.permissions import AuditLog, DecisionGate, PromptBroker

logger = logging.getLogger(__name__)

_gate: DecisionGate | None = None
_prompt_broker: PromptBroker | None = None


def set_gate(gate: DecisionGate | None) -> None:
    global _gate
    _gate = gate


def get_gate() -> DecisionGate | None:
    """Get the current decision gate, if the server has one."""
    return _gate


def set_prompt_broker(broker: PromptBroker | None) -> None:
    global _prompt_broker
    _prompt_broker = broker


def get_prompt_broker() -> PromptBroker | None:
    return _prompt_broker


def init_permission_system(config: PermissionsConfig, event_bus: EventBus) -> DecisionGate:
    """
    Build the gate and prompt broker from config and register them.

    Args:
        config: Permission engine settings
        event_bus: Bus the broker publishes prompt events to

    Returns:
        The registered DecisionGate
    """
    gate = DecisionGate(
        audit_log=AuditLog(config.audit_capacity),
        session_grants=config.session_grants,
    )
    if config.batch_approval:
        gate.enable_batch_approval()

    set_gate(gate)
    set_prompt_broker(PromptBroker(gate, event_bus, timeout_seconds=config.prompt_timeout_seconds))
    logger.info(
        "Permission system ready (audit capacity %d, %d session grants)",
        config.audit_capacity,
        len(config.session_grants),
    )
    return gate
