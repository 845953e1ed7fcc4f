"""Schema parsers for view documents (v1 and legacy bare heading lists)."""

from .common import ParsedArtifact
from .view_schema import parse_view, SUPPORTED_VERSIONS

__all__ = [
    "ParsedArtifact",
    "parse_view",
    "SUPPORTED_VERSIONS",
]
