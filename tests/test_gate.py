"""Tests for the decision gate."""

import threading

import pytest

from core.permissions import (
    AuditLog,
    DecisionGate,
    OperationKind,
    PermissionRequest,
    WarningLevel,
    build_file_request,
    build_git_request,
    classify_shell_command,
)


def _shell_request(command: str) -> PermissionRequest:
    kind, level = classify_shell_command(command)
    return PermissionRequest(kind=kind, action=f"Execute: {command}", warning_level=level)


def _request(kind: OperationKind, level: WarningLevel) -> PermissionRequest:
    return PermissionRequest(kind=kind, action=f"{kind.value} operation", warning_level=level)


class TestScenarios:
    """End-to-end classification and decision scenarios."""

    def test_forbidden_command_is_denied(self, gate):
        """rm -rf / is forbidden and denied with an explicit reason."""
        assert classify_shell_command("rm -rf /") == (OperationKind.SHELL_FORBIDDEN, WarningLevel.FORBIDDEN)

        assert gate.request_decision(_shell_request("rm -rf /")) is False

        last = gate.get_audit_trail()[-1]
        assert last.approved is False
        assert last.reason == "forbidden operation"

    def test_safe_command_needs_no_grant(self, gate):
        """git status is approved without any prior grant."""
        assert classify_shell_command("git status") == (OperationKind.SHELL_SAFE, WarningLevel.INFO)
        assert gate.request_decision(_shell_request("git status")) is True

    def test_batch_mode_toggles_approval(self, gate):
        """Batch mode approves risky commands only while enabled."""
        gate.enable_batch_approval()
        assert classify_shell_command("mkdir foo") == (OperationKind.SHELL_RISKY, WarningLevel.CAUTION)

        request = _shell_request("mkdir foo")
        assert gate.request_decision(request) is True
        assert "batch" in gate.get_audit_trail()[-1].reason

        gate.disable_batch_approval()
        assert gate.request_decision(request) is False

    def test_push_grant(self, gate):
        """A git push grant approves classified pushes."""
        gate.grant_session_permission(OperationKind.GIT_PUSH)
        assert classify_shell_command("git push origin feature-x") == (OperationKind.GIT_PUSH, WarningLevel.CAUTION)

        assert gate.request_decision(_shell_request("git push origin feature-x")) is True
        assert gate.get_audit_trail()[-1].reason == "session permission granted"


class TestPrecedence:
    """Tests for the fixed evaluation order."""

    def test_forbidden_beats_session_grant(self, gate):
        """A grant for the kind cannot approve a forbidden request."""
        gate.grant_session_permission(OperationKind.SHELL_FORBIDDEN)
        request = _request(OperationKind.SHELL_FORBIDDEN, WarningLevel.FORBIDDEN)
        assert gate.request_decision(request) is False
        assert gate.get_audit_trail()[-1].reason == "forbidden operation"

    def test_forbidden_beats_grant_of_same_kind(self, gate):
        """A forbidden instance of a granted kind is still denied."""
        gate.grant_session_permission(OperationKind.GIT_PUSH)
        request = _request(OperationKind.GIT_PUSH, WarningLevel.FORBIDDEN)
        assert gate.request_decision(request) is False

    @pytest.mark.parametrize(
        "command",
        ["git push -fu origin main", "git push --force origin HEAD:refs/heads/main"],
    )
    def test_push_grant_does_not_cover_protected_force_push(self, gate, command):
        """Bundled force flags and full refs to main are still forbidden."""
        gate.grant_session_permission(OperationKind.GIT_PUSH)
        gate.grant_session_permission(OperationKind.SHELL_RISKY)
        assert gate.request_decision(_shell_request(command)) is False
        assert gate.get_audit_trail()[-1].reason == "forbidden operation"

    @pytest.mark.parametrize("command", ["rm -rf /home", "rm -rf ~"])
    def test_batch_mode_does_not_cover_system_deletes(self, gate, command):
        gate.enable_batch_approval()
        assert gate.request_decision(_shell_request(command)) is False

    def test_forbidden_beats_batch_mode(self, gate):
        gate.enable_batch_approval()
        gate.grant_session_permission(OperationKind.SHELL_FORBIDDEN)
        assert gate.request_decision(_shell_request(":(){ :|:& };:")) is False

    def test_grant_reported_before_batch(self, gate):
        """With both active, the grant is the recorded reason."""
        gate.enable_batch_approval()
        gate.grant_session_permission(OperationKind.FILE_DELETE)
        gate.request_decision(build_file_request("delete", "a.txt"))
        assert gate.get_audit_trail()[-1].reason == "session permission granted"

    @pytest.mark.parametrize(
        "level,approved",
        [
            (WarningLevel.INFO, True),
            (WarningLevel.CAUTION, False),
            (WarningLevel.DANGER, False),
        ],
    )
    def test_default_policy(self, gate, level, approved):
        """Without overrides the warning level decides, and the reason names it."""
        request = _request(OperationKind.FILE_EDIT, level)
        assert gate.request_decision(request) is approved
        assert level.name in gate.get_audit_trail()[-1].reason

    def test_batch_approves_danger(self, gate):
        gate.enable_batch_approval()
        assert gate.request_decision(build_git_request("push", "repo")) is True


class TestSessionGrants:
    """Tests for session grant management."""

    def test_grant_is_idempotent(self, gate):
        """Granting twice equals granting once."""
        gate.grant_session_permission(OperationKind.FILE_EDIT)
        gate.grant_session_permission(OperationKind.FILE_EDIT)
        assert gate.granted_permissions == frozenset({OperationKind.FILE_EDIT})

        for _ in range(3):
            assert gate.request_decision(build_file_request("edit", "a.txt")) is True

    def test_revoke(self, gate):
        """Revoking restores the default policy."""
        gate.grant_session_permission(OperationKind.FILE_EDIT)
        gate.revoke_session_permission(OperationKind.FILE_EDIT)
        gate.revoke_session_permission(OperationKind.FILE_EDIT)
        assert gate.request_decision(build_file_request("edit", "a.txt")) is False

    def test_grant_is_per_kind(self, gate):
        gate.grant_session_permission(OperationKind.FILE_EDIT)
        assert gate.request_decision(build_file_request("delete", "a.txt")) is False

    def test_initial_grants(self):
        gate = DecisionGate(session_grants=[OperationKind.NETWORK_REQUEST])
        assert OperationKind.NETWORK_REQUEST in gate.granted_permissions

    def test_clear_session(self, gate):
        """Clearing drops grants, batch mode and the pending request."""
        gate.grant_session_permission(OperationKind.FILE_EDIT)
        gate.enable_batch_approval()
        gate.request_decision(_request(OperationKind.FILE_DELETE, WarningLevel.FORBIDDEN))
        gate.disable_batch_approval()
        gate.request_decision(build_file_request("delete", "a.txt"))
        gate.enable_batch_approval()

        gate.clear_session()

        assert gate.granted_permissions == frozenset()
        assert gate.batch_approval_mode is False
        assert gate.current_request is None
        assert gate.request_decision(build_file_request("edit", "a.txt")) is False

    def test_batch_toggle_idempotent(self, gate):
        gate.enable_batch_approval()
        gate.enable_batch_approval()
        assert gate.batch_approval_mode is True
        gate.disable_batch_approval()
        gate.disable_batch_approval()
        assert gate.batch_approval_mode is False

    def test_batch_enable_logged_as_warning(self, gate, caplog):
        """Enabling batch mode is logged distinctly."""
        with caplog.at_level("WARNING", logger="core.permissions.gate"):
            gate.enable_batch_approval()
        assert any("Batch approval mode ENABLED" in r.message for r in caplog.records)


class TestAuditTrail:
    """Tests for the gate's audit surface."""

    def test_one_entry_per_decision(self, gate):
        """Every call records exactly one decision, shortcuts included."""
        gate.grant_session_permission(OperationKind.FILE_EDIT)
        gate.request_decision(build_file_request("edit", "a.txt"))
        gate.enable_batch_approval()
        gate.request_decision(build_file_request("delete", "a.txt"))
        gate.request_decision(_shell_request("rm -rf /"))
        gate.disable_batch_approval()
        gate.request_decision(_shell_request("ls"))
        gate.request_decision(_shell_request("mkdir x"))
        assert len(gate.get_audit_trail()) == 5

    def test_keeps_most_recent_hundred(self, gate):
        """After more than 100 decisions, the latest 100 remain in call order."""
        requests = [_shell_request(f"ls dir{i}") for i in range(130)]
        for request in requests:
            gate.request_decision(request)

        trail = gate.get_audit_trail()
        assert len(trail) == 100
        assert [d.request_id for d in trail] == [r.id for r in requests[30:]]

    def test_custom_capacity(self):
        gate = DecisionGate(audit_log=AuditLog(capacity=5))
        for i in range(8):
            gate.request_decision(_shell_request(f"ls {i}"))
        assert len(gate.get_audit_trail()) == 5

    def test_decision_copies_request(self, gate):
        request = build_file_request("read", "a.txt")
        gate.request_decision(request)
        decision = gate.get_audit_trail()[-1]
        assert decision.request_id == request.id
        assert decision.kind == OperationKind.FILE_READ
        assert decision.action == request.action

    def test_decisions_for_kind(self, gate):
        gate.request_decision(_shell_request("ls"))
        gate.request_decision(_shell_request("git push"))
        gate.request_decision(_shell_request("pwd"))
        safe = gate.get_decisions_for_kind(OperationKind.SHELL_SAFE)
        assert len(safe) == 2
        assert all(d.kind == OperationKind.SHELL_SAFE for d in safe)

    def test_clear_audit_trail(self, gate):
        gate.request_decision(_shell_request("ls"))
        gate.clear_audit_trail()
        assert gate.get_audit_trail() == []


class TestPendingRequest:
    """Tests for the single pending-request slot."""

    def test_default_denial_becomes_pending(self, gate):
        """A request denied by default is exposed for presentation."""
        request = build_file_request("delete", "a.txt")
        gate.request_decision(request)
        assert gate.current_request == request

    def test_most_recent_wins(self, gate):
        first = build_file_request("delete", "a.txt")
        second = build_file_request("edit", "b.txt")
        gate.request_decision(first)
        gate.request_decision(second)
        assert gate.current_request == second

    def test_approved_and_forbidden_do_not_become_pending(self, gate):
        gate.request_decision(_shell_request("ls"))
        gate.request_decision(_shell_request("rm -rf /"))
        assert gate.current_request is None

    def test_dismiss_only_matching(self, gate):
        request = build_file_request("delete", "a.txt")
        gate.request_decision(request)
        gate.dismiss_request("perm_other")
        assert gate.current_request == request
        gate.dismiss_request(request.id)
        assert gate.current_request is None


class TestTryDecide:
    """Tests for decisions that may need a human."""

    def test_unresolved_is_not_recorded(self, gate):
        """Requests the default policy would deny are left undecided."""
        assert gate.try_decide(build_file_request("delete", "a.txt")) is None
        assert gate.get_audit_trail() == []

    def test_resolved_is_recorded(self, gate):
        assert gate.try_decide(_shell_request("rm -rf /")) is False
        assert gate.try_decide(_shell_request("ls")) is True
        assert len(gate.get_audit_trail()) == 2

    def test_record_decision(self, gate):
        request = build_file_request("delete", "a.txt")
        gate.record_decision(request, True, "approved by user")
        last = gate.get_audit_trail()[-1]
        assert last.approved is True
        assert last.reason == "approved by user"


class TestCompatibilitySurface:
    """Tests for the classification and builder helpers on the gate."""

    def test_helpers_delegate(self, gate):
        assert gate.classify_shell_command("pwd") == (OperationKind.SHELL_SAFE, WarningLevel.INFO)
        assert gate.create_file_request("delete", "a.txt").warning_level == WarningLevel.DANGER
        request = gate.create_git_request("commit", "repo", ["a.py"], "msg")
        assert request.preview == "msg"


class TestConcurrency:
    """Tests for concurrent callers."""

    def test_concurrent_decisions_and_toggles(self):
        """Concurrent callers never lose entries or exceed the cap."""
        gate = DecisionGate(audit_log=AuditLog(capacity=1000))
        request = _shell_request("mkdir foo")
        calls_per_thread = 50

        def decide():
            for _ in range(calls_per_thread):
                gate.request_decision(request)

        def toggle():
            for _ in range(calls_per_thread):
                gate.enable_batch_approval()
                gate.grant_session_permission(OperationKind.SHELL_RISKY)
                gate.revoke_session_permission(OperationKind.SHELL_RISKY)
                gate.disable_batch_approval()

        threads = [threading.Thread(target=decide) for _ in range(8)]
        threads.append(threading.Thread(target=toggle))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(gate.get_audit_trail()) == 8 * calls_per_thread
