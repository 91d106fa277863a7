"""Shell command risk classification."""

import re

from .models import OperationKind, WarningLevel
from .rules import CLASSIFICATION_RULES, DEFAULT_CLASSIFICATION, ClassificationRule

_LINE_BREAKS = re.compile(r"[\r\n]+")


def normalize_command(command: str | None) -> str:
    """
    Normalize a command for rule matching.

    Trims, lowercases, turns line breaks into command separators and
    collapses runs of whitespace to a single space.

    Args:
        command: Raw command string (None is treated as empty)

    Returns:
        The normalized command
    """
    cmd = (command or "").strip().lower()
    cmd = _LINE_BREAKS.sub(" ; ", cmd)
    return " ".join(cmd.split())


def match_rule(command: str | None) -> ClassificationRule | None:
    """
    Find the first classification rule matching a command.

    Args:
        command: Raw command string

    Returns:
        The matching rule, or None if no rule applies
    """
    cmd = normalize_command(command)
    for rule in CLASSIFICATION_RULES:
        if rule.matches(cmd):
            return rule
    return None


def classify_shell_command(command: str | None) -> tuple[OperationKind, WarningLevel]:
    """
    Classify a shell command by risk.

    Never fails; commands no rule recognizes are classified as risky so they
    require approval.

    Args:
        command: Raw command string

    Returns:
        Tuple of (operation kind, warning level)
    """
    rule = match_rule(command)
    if rule is None:
        return DEFAULT_CLASSIFICATION
    return rule.kind, rule.level
