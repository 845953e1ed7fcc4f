"""Kernel exceptions raised while flattening headings and projecting rows."""

from typing import Any


class KernelValidationError(Exception):
    """Base exception for kernel validation errors."""
    pass


class UnsupportedShapeError(KernelValidationError):
    """Raised when a heading node is not one of the supported shapes.

    Covers expanded array relations, unknown relation kinds, and nodes that
    are neither a column name nor a relation mapping. The offending node is
    kept on the exception for diagnosis.
    """
    def __init__(self, node: Any, reason: str):
        self.node = node
        self.reason = reason
        super().__init__(f"Unsupported heading shape: {reason}\n  Node: {node!r}")


class HeadingDepthError(KernelValidationError):
    """Raised when relations are nested deeper than the configured limit."""
    def __init__(self, path: list[str], max_depth: int):
        self.path = path
        self.max_depth = max_depth
        super().__init__(
            f"Heading tree exceeds max depth {max_depth} at: {'.'.join(path)}"
        )


class HeadingCycleError(KernelValidationError):
    """Raised when a raw heading mapping contains itself."""
    def __init__(self, path: list[str]):
        self.path = path
        super().__init__(f"Cycle detected in heading tree:\n  Path: {' -> '.join(path)}")


class RowShapeError(KernelValidationError):
    """Raised when a nested row is neither a mapping nor None."""
    def __init__(self, path: list[str], value: Any):
        self.path = path
        self.value = value
        where = ".".join(path) if path else "<root>"
        super().__init__(
            f"Expected a row mapping at '{where}', got {type(value).__name__}"
        )
