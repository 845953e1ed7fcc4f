"""Parser for view documents (v1, legacy bare heading list)."""

from typing import Any, Dict, List, Optional, Set
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .common import ParsedArtifact


SUPPORTED_VERSIONS = ("1",)


class ViewDocumentV1(BaseModel):
    """v1 view document schema."""
    schema_version: str = "1"
    table: Optional[str] = None
    headings: List[Any]
    rows: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def parse_view(obj: Any, unknown_fields: str = "preserve") -> ParsedArtifact:
    """
    Parse a view document with compatibility layer.

    A bare JSON list is treated as a legacy headings-only document.

    Args:
        obj: Raw document (from JSON)
        unknown_fields: "preserve" or "reject"

    Returns:
        ParsedArtifact with normalized in-memory view

    Raises:
        ValueError: If unknown_fields="reject" and unknown top-level fields present,
                    if schema_version is unsupported, or if the structure is invalid
    """
    if unknown_fields not in ("preserve", "reject"):
        raise ValueError(f"unknown_fields must be 'preserve' or 'reject', got {unknown_fields!r}")

    if isinstance(obj, list):
        return ParsedArtifact(
            schema_version="1",
            data={"table": None, "headings": obj, "rows": []},
            warnings=["Bare heading list, treating as legacy headings-only document"],
        )

    if not isinstance(obj, dict):
        raise ValueError(f"View document must be an object or a list, got {type(obj).__name__}")

    warnings: List[str] = []
    found_version = obj.get("schema_version")
    if found_version is None:
        warnings.append("Missing schema_version, treating as v1")
    elif str(found_version) not in SUPPORTED_VERSIONS:
        raise ValueError(f"Unsupported schema_version: {found_version}")

    # Check for unknown top-level fields (top-level only, not recursive)
    known_fields: Set[str] = set(ViewDocumentV1.model_fields.keys())
    extra_fields = {k: v for k, v in obj.items() if k not in known_fields}
    if extra_fields:
        if unknown_fields == "reject":
            raise ValueError(f"Unknown top-level fields in view document: {sorted(extra_fields)}")
        warnings.append(f"Unknown top-level fields preserved: {sorted(extra_fields)}")

    known_obj = {k: v for k, v in obj.items() if k in known_fields}
    known_obj["schema_version"] = str(found_version or "1")
    try:
        model = ViewDocumentV1(**known_obj)
    except ValidationError as e:
        raise ValueError(f"Invalid view document structure: {e}")

    normalized_data: Dict[str, Any] = model.model_dump(exclude={"schema_version"})
    return ParsedArtifact(
        schema_version="1",
        data=normalized_data,
        extra=extra_fields or None,
        warnings=warnings,
    )
