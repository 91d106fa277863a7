"""
Request builders.

Turn raw file, git, shell, network and sensor parameters into permission
requests using fixed mapping tables. Classification of shell commands is
delegated to the classifier.
"""

from typing import Iterable

from ..constants import GIT_PREVIEW_MAX_FILES
from .classifier import classify_shell_command
from .models import OperationKind, PermissionRequest, WarningLevel

FILE_OPERATIONS = {
    "create": OperationKind.FILE_CREATE,
    "read": OperationKind.FILE_READ,
    "edit": OperationKind.FILE_EDIT,
    "modify": OperationKind.FILE_EDIT,
    "delete": OperationKind.FILE_DELETE,
    "mkdir": OperationKind.DIRECTORY_CREATE,
    "create_directory": OperationKind.DIRECTORY_CREATE,
}

GIT_OPERATIONS = {
    "clone": OperationKind.GIT_CLONE,
    "commit": OperationKind.GIT_COMMIT,
    "push": OperationKind.GIT_PUSH,
    "pull": OperationKind.GIT_PULL,
}

SENSORS = {
    "camera": OperationKind.CAMERA_ACCESS,
    "location": OperationKind.LOCATION_ACCESS,
}

# Warning level per kind for built requests; kinds not listed are INFO
KIND_LEVELS = {
    OperationKind.FILE_EDIT: WarningLevel.CAUTION,
    OperationKind.FILE_DELETE: WarningLevel.DANGER,
    OperationKind.GIT_COMMIT: WarningLevel.CAUTION,
    OperationKind.GIT_PUSH: WarningLevel.DANGER,
    OperationKind.NETWORK_REQUEST: WarningLevel.CAUTION,
    OperationKind.CAMERA_ACCESS: WarningLevel.CAUTION,
    OperationKind.LOCATION_ACCESS: WarningLevel.CAUTION,
}


def _level_for(kind: OperationKind) -> WarningLevel:
    return KIND_LEVELS.get(kind, WarningLevel.INFO)


def build_file_request(operation: str, path: str, content: str | None = None) -> PermissionRequest:
    """
    Create a permission request for a file operation.

    Unknown operations are treated as edits.

    Args:
        operation: Operation name ("create", "read", "edit", "modify", "delete", ...)
        path: Target file path
        content: Content to preview (truncated past the preview limit)

    Returns:
        The permission request
    """
    kind = FILE_OPERATIONS.get(operation.lower(), OperationKind.FILE_EDIT)
    return PermissionRequest(
        kind=kind,
        action=f"{operation} file: {path}",
        target_path=path,
        preview=content,
        warning_level=_level_for(kind),
    )


def git_files_preview(affected_files: list[str]) -> str | None:
    """Render the affected-files preview for a git request."""
    if not affected_files:
        return None
    shown = affected_files[:GIT_PREVIEW_MAX_FILES]
    lines = ["Affected files:", *shown]
    remaining = len(affected_files) - len(shown)
    if remaining > 0:
        lines.append(f"... +{remaining} more")
    return "\n".join(lines)


def build_git_request(
    operation: str,
    repository: str,
    affected_files: Iterable[str] = (),
    message: str | None = None,
) -> PermissionRequest:
    """
    Create a permission request for a git operation.

    Unknown operations are treated as commits.

    Args:
        operation: Operation name ("clone", "commit", "push", "pull")
        repository: Repository path or URL
        affected_files: Files touched by the operation
        message: Commit message, previewed in place of the file list

    Returns:
        The permission request
    """
    kind = GIT_OPERATIONS.get(operation.lower(), OperationKind.GIT_COMMIT)
    files = list(affected_files)
    preview = message if message is not None else git_files_preview(files)
    return PermissionRequest(
        kind=kind,
        action=f"Git {operation}: {repository}",
        target_path=repository,
        preview=preview,
        affected_files=tuple(files),
        warning_level=_level_for(kind),
    )


def build_shell_request(command: str, working_dir: str | None = None) -> PermissionRequest:
    """
    Create a permission request for a shell command.

    Args:
        command: The raw command
        working_dir: Directory the command will run in

    Returns:
        The permission request, classified by the command's risk
    """
    kind, level = classify_shell_command(command)
    return PermissionRequest(
        kind=kind,
        action=f"Execute: {command.strip()}",
        target_path=working_dir,
        preview=command,
        warning_level=level,
    )


def build_network_request(url: str, method: str = "GET") -> PermissionRequest:
    """Create a permission request for an outbound network fetch."""
    kind = OperationKind.NETWORK_REQUEST
    return PermissionRequest(
        kind=kind,
        action=f"{method.upper()} {url}",
        target_path=url,
        warning_level=_level_for(kind),
    )


def build_sensor_request(sensor: str, purpose: str | None = None) -> PermissionRequest:
    """
    Create a permission request for device sensor access.

    Args:
        sensor: "camera" or "location"
        purpose: Why the sensor is needed, shown as the preview

    Returns:
        The permission request

    Raises:
        ValueError: If the sensor is not recognized
    """
    kind = SENSORS.get(sensor.lower())
    if kind is None:
        raise ValueError(f"Unknown sensor: {sensor}")
    return PermissionRequest(
        kind=kind,
        action=f"Access {sensor.lower()}",
        preview=purpose,
        warning_level=_level_for(kind),
    )
