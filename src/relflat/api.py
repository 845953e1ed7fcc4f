"""Public API for relflat.

High-level functions that return complete, structured results. Renderers
should use these instead of importing from _internal.
"""

import json
import logging
import os
from collections import Counter
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import BaseModel

from relflat.codes import ValidationCode
from relflat.contracts import TableView, ViewDocument
from relflat.kernel.errors import (
    HeadingCycleError,
    HeadingDepthError,
    UnsupportedShapeError,
)
from relflat.kernel.flatten import flatten_headings
from relflat.kernel.headings import LEGACY_KEYS, parse_headings
from relflat.kernel.options import FlattenOptions, resolve_options
from relflat.kernel.project import project_row
from relflat._internal.schemas import parse_view


logger = logging.getLogger(__name__)


class ValidationIssue(BaseModel):
    """A single validation issue (error or warning)."""
    code: str  # e.g., "UNSUPPORTED_SHAPE", "DEPTH_EXCEEDED", "DUPLICATE_LABEL"
    message: str
    element_id: Optional[str] = None  # Label or relation name the issue points at
    path: Optional[List[str]] = None  # Relation path for DEPTH_EXCEEDED / CYCLE_DETECTED


class ValidationResult(BaseModel):
    """Result of validating a heading tree."""
    ok: bool  # True if no errors (warnings don't block)
    errors: List[ValidationIssue]  # Blocking issues
    warnings: List[ValidationIssue]  # Non-blocking issues


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def _load_json(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def load_view(
    view: Union[str, os.PathLike, Path, Dict[str, Any], List[Any]],
    unknown_fields: str = "preserve",
) -> ViewDocument:
    """
    Load a view document from a JSON file, a dict, or a bare heading list.

    Raises:
        FileNotFoundError: If a path is given and does not exist
        ValueError: If the document structure is invalid
    """
    if isinstance(view, (dict, list)):
        raw = view
    else:
        path = _normalize_path(view)
        if not path.exists():
            raise FileNotFoundError(f"View document not found: {path}")
        raw = _load_json(path)

    parsed = parse_view(raw, unknown_fields=unknown_fields)
    for warning in parsed.warnings:
        logger.warning("%s", warning)
    return ViewDocument(
        table=parsed.data.get("table"),
        headings=parsed.data["headings"],
        rows=parsed.data.get("rows") or [],
        warnings=parsed.warnings,
    )


def load_rows(path: Union[str, os.PathLike, Path]) -> List[Dict[str, Any]]:
    """Load a JSON list of row objects."""
    data = _load_json(_normalize_path(path))
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError("Rows file must contain a JSON list of objects")
    return data


def build_table(
    headings: Any,
    rows: Iterable[Optional[Mapping[str, Any]]],
    options: Optional[FlattenOptions] = None,
) -> TableView:
    """
    Flatten a heading tree once and project every row against it.

    The heading tree is parsed a single time; each row is projected against
    the parsed tree so every row has exactly len(columns) values.

    Raises:
        KernelValidationError: If the heading tree or a row has an unsupported shape
    """
    opts = resolve_options(options)
    tree = parse_headings(headings, max_depth=opts.max_depth)
    columns = flatten_headings(tree, opts)
    flat_rows = [project_row(tree, row, opts) for row in rows]
    logger.debug("Built table view: %d columns, %d rows", len(columns), len(flat_rows))
    return TableView(columns=columns, rows=flat_rows)


def _collect_legacy_nodes(headings: Sequence[Any], prefix: tuple = ()) -> List[str]:
    """Return dotted names of raw relation mappings spelled with legacy keys."""
    found = []
    for node in headings:
        if not isinstance(node, Mapping):
            continue
        name = str(node.get("name", node.get("relname")))
        path = prefix + (name,)
        if LEGACY_KEYS & set(node.keys()):
            found.append(".".join(path))
        if not node.get("expanded", node.get("_expanded")):
            continue
        children = node.get("children", node.get("headings"))
        if isinstance(children, Sequence) and not isinstance(children, str):
            found.extend(_collect_legacy_nodes(children, path))
    return found


def validate_headings(
    headings: Any,
    options: Optional[FlattenOptions] = None,
) -> ValidationResult:
    """
    Validate a heading tree without raising.

    Args:
        headings: Raw or parsed heading tree
        options: Flatten options (max_depth is honoured)

    Returns:
        ValidationResult with errors and warnings.

    This is READ-ONLY - no side effects, no mutations.
    """
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    # 1. Structure (ERROR)
    if not isinstance(headings, Sequence) or isinstance(headings, (str, bytes)):
        errors.append(ValidationIssue(
            code=ValidationCode.INVALID_STRUCTURE.value,
            message=f"Headings must be a list, got {type(headings).__name__}",
        ))
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    # 2. Shapes, depth and cycles (ERROR)
    # parse + flatten together cover every shape the kernel rejects
    try:
        columns = flatten_headings(headings, options)
    except HeadingCycleError as e:
        errors.append(ValidationIssue(
            code=ValidationCode.CYCLE_DETECTED.value,
            message=str(e),
            element_id=e.path[-1] if e.path else None,
            path=e.path,
        ))
    except HeadingDepthError as e:
        errors.append(ValidationIssue(
            code=ValidationCode.DEPTH_EXCEEDED.value,
            message=str(e),
            element_id=e.path[-1] if e.path else None,
            path=e.path,
        ))
    except UnsupportedShapeError as e:
        element_id = getattr(e.node, "name", None)
        if element_id is None and isinstance(e.node, Mapping):
            element_id = e.node.get("name", e.node.get("relname"))
        errors.append(ValidationIssue(
            code=ValidationCode.UNSUPPORTED_SHAPE.value,
            message=e.reason,
            element_id=str(element_id) if element_id is not None else None,
        ))

    if errors:
        return ValidationResult(ok=False, errors=errors, warnings=warnings)

    # 3. Duplicate labels (WARNING): renderers key cells by label
    counts = Counter(c.label for c in columns)
    for label in sorted(label for label, n in counts.items() if n > 1):
        warnings.append(ValidationIssue(
            code=ValidationCode.DUPLICATE_LABEL.value,
            message=f"Column label '{label}' appears {counts[label]} times",
            element_id=label,
        ))

    # 4. Legacy key spellings (WARNING)
    for name in _collect_legacy_nodes(headings):
        warnings.append(ValidationIssue(
            code=ValidationCode.LEGACY_FORMAT.value,
            message=f"Relation heading '{name}' uses legacy key names",
            element_id=name,
        ))

    return ValidationResult(ok=True, errors=errors, warnings=warnings)
