"""Permission gate endpoints for the presentation layer."""

import logging

from fastapi import APIRouter, HTTPException

from core.exceptions import NotFoundError
from core.permissions import (
    DecisionGate,
    OperationKind,
    PermissionDecision,
    PermissionRequest,
    PromptBroker,
    Response,
    build_file_request,
    build_git_request,
    build_shell_request,
    classify_shell_command,
)
from ..requests import (
    BatchApprovalRequest,
    ClassifyRequest,
    DecisionRequest,
    FileOperationInput,
    OperationInput,
    ShellOperationInput,
)
from ..state import get_gate, get_prompt_broker

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/permission")


def _require_gate() -> DecisionGate:
    gate = get_gate()
    if gate is None:
        raise HTTPException(status_code=500, detail="Decision gate not initialized")
    return gate


def _require_broker() -> PromptBroker:
    broker = get_prompt_broker()
    if broker is None:
        raise HTTPException(status_code=500, detail="Prompt broker not initialized")
    return broker


def _session_state(gate: DecisionGate) -> dict:
    return {
        "granted": sorted(kind.value for kind in gate.granted_permissions),
        "batch_approval": gate.batch_approval_mode,
    }


# =============================================================================
# Decisions
# =============================================================================


def _build_request(operation: OperationInput) -> PermissionRequest:
    if isinstance(operation, ShellOperationInput):
        return build_shell_request(operation.command, operation.working_dir)
    if isinstance(operation, FileOperationInput):
        return build_file_request(operation.operation, operation.path, operation.content)
    return build_git_request(
        operation.operation,
        operation.repository,
        operation.affected_files,
        operation.message,
    )


@router.post("/request")
async def request_permission(body: DecisionRequest) -> dict:
    """
    Decide an operation, prompting the user when policy alone cannot.

    Operations that need a human are held until the prompt is answered or
    times out.

    Args:
        body: The operation to decide

    Returns:
        The built request and whether it was approved
    """
    broker = _require_broker()
    request = _build_request(body.operation)
    approved = await broker.request_permission(request)
    return {"request": request.model_dump(mode="json"), "approved": approved}


# =============================================================================
# Pending prompts
# =============================================================================


@router.get("/pending")
async def get_pending_request() -> dict:
    """Get the request currently awaiting the user's attention."""
    request = _require_gate().current_request
    if request is None:
        return {"request": None, "title": None}
    return {"request": request.model_dump(mode="json"), "title": request.kind.display_name}


@router.post("/respond")
async def respond_to_permission(response: Response) -> dict:
    """
    Answer a waiting approval prompt.

    Args:
        response: The user's permission response

    Returns:
        Success confirmation
    """
    broker = _require_broker()
    try:
        broker.respond_to_request(response)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    logger.info("Permission response: %s -> %s", response.request_id, response.action.value)
    return {"success": True}


# =============================================================================
# Classification
# =============================================================================


@router.post("/classify")
async def classify_command(body: ClassifyRequest) -> dict:
    """Classify a shell command by risk."""
    kind, level = classify_shell_command(body.command)
    return {"kind": kind.value, "level": level.value}


# =============================================================================
# Audit trail
# =============================================================================


@router.get("/audit")
async def get_audit_trail(kind: OperationKind | None = None) -> list[PermissionDecision]:
    """Get retained decisions, oldest first, optionally for one kind."""
    gate = _require_gate()
    if kind is None:
        return gate.get_audit_trail()
    return gate.get_decisions_for_kind(kind)


@router.delete("/audit")
async def clear_audit_trail() -> dict:
    _require_gate().clear_audit_trail()
    return {"success": True}


# =============================================================================
# Session grants and batch mode
# =============================================================================


@router.get("/session")
async def get_session() -> dict:
    """Get the current session grants and batch approval state."""
    return _session_state(_require_gate())


@router.delete("/session")
async def clear_session() -> dict:
    """Drop all session grants and disable batch approval."""
    gate = _require_gate()
    gate.clear_session()
    return _session_state(gate)


@router.put("/session/grants/{kind}")
async def grant_session_permission(kind: OperationKind) -> dict:
    gate = _require_gate()
    gate.grant_session_permission(kind)
    return _session_state(gate)


@router.delete("/session/grants/{kind}")
async def revoke_session_permission(kind: OperationKind) -> dict:
    gate = _require_gate()
    gate.revoke_session_permission(kind)
    return _session_state(gate)


@router.put("/session/batch")
async def set_batch_approval(body: BatchApprovalRequest) -> dict:
    """Enable or disable batch approval mode."""
    gate = _require_gate()
    if body.enabled:
        gate.enable_batch_approval()
    else:
        gate.disable_batch_approval()
    return _session_state(gate)
