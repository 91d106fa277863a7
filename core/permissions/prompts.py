"""Interactive approval prompts."""

import asyncio
import logging

from config.defaults import DEFAULT_PROMPT_TIMEOUT_SECONDS
from core.events import Event, EventBus
from core.exceptions import NotFoundError

from .gate import DecisionGate
from .models import Action, PermissionRequest, Response

logger = logging.getLogger(__name__)

REASON_USER_APPROVED = "approved by user"
REASON_USER_DENIED = "denied by user"
REASON_TIMED_OUT = "approval prompt timed out"
REASON_CANCELLED = "approval prompt cancelled"

APPROVING_ACTIONS = (Action.APPROVE_ONCE, Action.APPROVE_ALWAYS)


class PromptBroker:
    """
    Asks a human about requests the gate would otherwise deny by default.

    Only one prompt is on display at a time; later requests wait their turn
    instead of replacing it. No gate lock is held while waiting for an
    answer, and a prompt that times out or is cancelled counts as a denial.
    """

    def __init__(
        self,
        gate: DecisionGate,
        event_bus: EventBus,
        timeout_seconds: float = DEFAULT_PROMPT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the broker.

        Args:
            gate: The decision gate that owns session state and the audit log
            event_bus: Event bus for publishing prompt events
            timeout_seconds: How long to wait for an answer before denying
        """
        self.gate = gate
        self.event_bus = event_bus
        self.timeout_seconds = timeout_seconds
        self._turn = asyncio.Lock()
        # Request ID -> future resolved by respond_to_request
        self._response_futures: dict[str, asyncio.Future[Response]] = {}

    @property
    def pending_request_ids(self) -> list[str]:
        return list(self._response_futures)

    async def request_permission(self, request: PermissionRequest) -> bool:
        """
        Decide a request, asking the user when the policy cannot.

        Args:
            request: The permission request

        Returns:
            True if approved, False if denied, timed out or forbidden
        """
        decided = self.gate.try_decide(request)
        if decided is not None:
            return decided

        try:
            await self._turn.acquire()
        except asyncio.CancelledError:
            self.gate.record_decision(request, False, REASON_CANCELLED)
            raise

        try:
            # An answer to an earlier prompt may have granted this kind
            decided = self.gate.try_decide(request)
            if decided is not None:
                return decided
            return await self._prompt(request)
        finally:
            self._turn.release()

    async def _prompt(self, request: PermissionRequest) -> bool:
        future: asyncio.Future[Response] = asyncio.get_running_loop().create_future()
        self._response_futures[request.id] = future
        self.gate.present_request(request)

        try:
            await self.event_bus.publish(
                Event(
                    type="permission.requested",
                    properties={
                        "request": request.model_dump(mode="json"),
                        "title": request.kind.display_name,
                    },
                )
            )
            response = await asyncio.wait_for(future, timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Permission request timed out: %s", request.id)
            self.gate.record_decision(request, False, REASON_TIMED_OUT)
            return False
        except asyncio.CancelledError:
            self.gate.record_decision(request, False, REASON_CANCELLED)
            raise
        finally:
            self._response_futures.pop(request.id, None)
            self.gate.dismiss_request(request.id)

        approved = response.action in APPROVING_ACTIONS
        if response.action == Action.APPROVE_ALWAYS:
            self.gate.grant_session_permission(request.kind)
        self.gate.record_decision(request, approved, REASON_USER_APPROVED if approved else REASON_USER_DENIED)

        await self.event_bus.publish(
            Event(
                type="permission.responded",
                properties={
                    "request_id": request.id,
                    "action": response.action.value,
                    "approved": approved,
                },
            )
        )
        return approved

    def respond_to_request(self, response: Response) -> None:
        """
        Deliver a user's answer to a waiting prompt.

        Args:
            response: The user's response

        Raises:
            NotFoundError: If no prompt is waiting for this request ID
        """
        future = self._response_futures.get(response.request_id)
        if future is None:
            logger.warning("Received response for unknown request: %s", response.request_id)
            raise NotFoundError("Permission request", response.request_id)
        if not future.done():
            future.set_result(response)
            logger.debug("Permission response received: %s -> %s", response.request_id, response.action)
