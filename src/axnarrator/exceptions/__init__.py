"""
Custom exceptions for the axnarrator system.

Per-node rendering problems (missing nodes, missing or unknown roles) are not
exceptions: they are rendered inline as error fragments.
"""


class AXNarratorError(Exception):
    """
    Base exception for axnarrator.
    All custom exceptions in the system should inherit from this.
    """


class TreeLoadError(AXNarratorError):
    """
    Raised when an accessibility tree dump cannot be loaded.

    This covers invalid JSON, payloads that do not match the tree schema,
    and files over the configured size limit.
    """


class RenderContextError(AXNarratorError):
    """Raised when rendering is attempted without a tree index to render from."""
