"""
Shell command classification rules.

Rules are evaluated in table order against a normalized command (trimmed,
lowercased, whitespace collapsed). The first matching rule wins.
"""

import re
from dataclasses import dataclass
from typing import Callable

from .models import OperationKind, WarningLevel

# Branches a force push may never target
PROTECTED_BRANCHES = ("main", "master")

# Operators that turn a read-only verb into a compound command
_CONTROL_OPERATORS = re.compile(r"[;&|<>`]|\$\(")

_PROTECTED = "|".join(PROTECTED_BRANCHES)
_FORCE_FLAG = r"\s(?:--force(?:-with-lease)?(?:=\S*)?|-[a-z]*f[a-z]*)(?=\s|$)"
_FORCE_REFSPEC = r"\s\+\S"
# main, HEAD:main, HEAD:refs/heads/main, +main, +refs/heads/main
_PROTECTED_REF = rf"(?:\s|:|\+)(?:refs/heads/)?(?:{_PROTECTED})(?=\s|$)"

# rm with both recursive and force flags, in any order or spelling
_RM_RECURSIVE = r"(?=(?:-[a-z-]+\s+)*?(?:-[a-z]*r|--recursive\b))"
_RM_FORCE = r"(?=(?:-[a-z-]+\s+)*?(?:-[a-z]*f|--force\b))"
_RM_FLAGS = r"(?:-[a-z-]+\s+)+"
# Any operand of the same command that is absolute, under ~, or a bare *
_RM_SYSTEM_TARGET = r"(?:[^\s;&|<>]+\s+)*?(?:/|~(?=[/\s;&|]|$)|\*(?=[\s;&|]|$))"

FORBIDDEN_PATTERNS = [
    # rm -rf /, rm -rf /usr, rm -rf ~, rm -rf ~/*, rm -rf *
    ("recursive-delete-system", re.compile(r"\brm\s+" + _RM_RECURSIVE + _RM_FORCE + _RM_FLAGS + _RM_SYSTEM_TARGET)),
    # dd if=/dev/zero of=/dev/sda
    ("raw-device-write", re.compile(r"\bdd\s+.*\bof=/dev/(?!null\b|zero\b|stdout\b|stderr\b)")),
    # echo x > /dev/sda
    ("device-redirect", re.compile(r">\s*/dev/(?:sd|hd|vd|xvd|nvme|mmcblk|disk)")),
    # mkfs, mkfs.ext4
    ("format-filesystem", re.compile(r"\bmkfs\b")),
    # :(){ :|:& };:
    ("fork-bomb", re.compile(r"(?P<name>[\w:]+)\s*\(\)\s*\{[^}]*(?P=name)\s*\|\s*(?P=name)\s*&")),
    # git push --force origin main, git push -fu origin HEAD:refs/heads/main
    (
        "force-push-protected",
        re.compile(rf"\bgit\s+push\b(?=.*{_FORCE_FLAG})(?=.*{_PROTECTED_REF})"),
    ),
    # git push origin +main
    ("force-refspec-protected", re.compile(rf"\bgit\s+push\b.*\s\+(?:\S*:)?(?:refs/heads/)?(?:{_PROTECTED})(?=\s|$)")),
]

# Read-only commands
SAFE_PREFIXES = [
    "ls",
    "cat",
    "pwd",
    "grep",
    "find",
    "wc",
    "head",
    "tail",
    "echo",
    "date",
    "whoami",
    "which",
    "uname",
    "df",
    "du",
    "ps",
    "top",
    "git status",
    "git log",
    "git diff",
    "git branch",
    "git show",
]

# State-modifying commands
RISKY_PREFIXES = [
    "mkdir",
    "touch",
    "cp",
    "mv",
    "rm",
    "chmod",
    "chown",
    "pip install",
    "npm install",
    "apt install",
    "apt-get install",
    "git add",
    "git commit",
    "git push",
    "git pull",
    "git clone",
]

# Unknown commands require approval
DEFAULT_CLASSIFICATION = (OperationKind.SHELL_RISKY, WarningLevel.CAUTION)


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the classification table."""

    name: str
    matches: Callable[[str], bool]
    kind: OperationKind
    level: WarningLevel


def has_control_operators(command: str) -> bool:
    """Return True if the command chains, pipes, redirects or substitutes."""
    return _CONTROL_OPERATORS.search(command) is not None


def is_forced_push(command: str) -> bool:
    """Return True if a git push carries a force flag or a +refspec."""
    return re.search(_FORCE_FLAG, command) is not None or re.search(_FORCE_REFSPEC, command) is not None


def _pattern(regex: re.Pattern[str]) -> Callable[[str], bool]:
    return lambda command: regex.search(command) is not None


def _prefix(prefix: str, simple_only: bool = False) -> Callable[[str], bool]:
    def matches(command: str) -> bool:
        if simple_only and has_control_operators(command):
            return False
        return command == prefix or command.startswith(prefix + " ")

    return matches


def _unforced_push(command: str) -> bool:
    return _prefix("git push")(command) and not is_forced_push(command)


def _build_rules() -> list[ClassificationRule]:
    rules = [
        ClassificationRule(
            name=f"forbidden:{name}",
            matches=_pattern(regex),
            kind=OperationKind.SHELL_FORBIDDEN,
            level=WarningLevel.FORBIDDEN,
        )
        for name, regex in FORBIDDEN_PATTERNS
    ]
    rules.extend(
        ClassificationRule(
            name=f"safe:{prefix}",
            matches=_prefix(prefix, simple_only=True),
            kind=OperationKind.SHELL_SAFE,
            level=WarningLevel.INFO,
        )
        for prefix in SAFE_PREFIXES
    )
    rules.append(
        ClassificationRule(
            name="push:unforced",
            matches=_unforced_push,
            kind=OperationKind.GIT_PUSH,
            level=WarningLevel.CAUTION,
        )
    )
    rules.extend(
        ClassificationRule(
            name=f"risky:{prefix}",
            matches=_prefix(prefix),
            kind=OperationKind.SHELL_RISKY,
            level=WarningLevel.CAUTION,
        )
        for prefix in RISKY_PREFIXES
    )
    return rules


CLASSIFICATION_RULES: list[ClassificationRule] = _build_rules()
