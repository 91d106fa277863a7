"""Default configuration values."""

# Audit trail
DEFAULT_AUDIT_CAPACITY = 100  # Oldest decisions are evicted beyond this

# Interactive approval
DEFAULT_PROMPT_TIMEOUT_SECONDS = 300.0  # Unanswered prompts deny after 5 minutes

# Config file locations
CONFIG_DIR_NAME = ".gatekeeper"
CONFIG_FILE_STEM = "gatekeeper"
