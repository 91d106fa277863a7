"""
Core domain exceptions.

The decision path never raises; these cover lookups around it. They are
transport-agnostic and converted to HTTP responses by the server layer.
"""


class CoreError(Exception):
    """Base exception for all core errors."""


class NotFoundError(CoreError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
