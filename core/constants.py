"""
Core constants for the permission engine.

Following the style guide: no magic constants in code.
"""

# Request previews
PREVIEW_MAX_CHARS = 500  # Longer previews are truncated with a length suffix
GIT_PREVIEW_MAX_FILES = 10  # Affected files listed in a git preview

# ID prefixes
PERMISSION_ID_PREFIX = "perm_"
