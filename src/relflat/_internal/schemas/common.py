"""Common types for schema parsing."""

from typing import Dict, List, Any, Optional
from pydantic import BaseModel


class ParsedArtifact(BaseModel):
    """Result of parsing a view document with the compatibility layer.

    This is a normalized in-memory view; the file on disk is never rewritten.
    """
    schema_version: str  # Normalized version ("1") in parsed result
    data: Dict[str, Any]  # Normalized data object
    extra: Optional[Dict[str, Any]] = None  # Unknown top-level fields if preserved
    warnings: List[str] = []
