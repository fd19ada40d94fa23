"""
Error types raised by the graph model.
"""


class InvalidGraphDataError(ValueError):
    """Raised when a load payload lacks the vertex or edge collections."""


class NodeTypeMismatchError(TypeError):
    """Raised when an operation receives something that is neither a Vertex nor a Group."""
