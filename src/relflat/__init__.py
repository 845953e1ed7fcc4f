"""relflat: flatten nested relation headings and rows for table views."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("relflat")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from relflat.api import build_table, validate_headings, ValidationIssue, ValidationResult
from relflat.codes import ValidationCode
from relflat.contracts import TableView, ViewDocument
from relflat.kernel.flatten import flatten_headings
from relflat.kernel.project import project_row
from relflat.kernel.headings import FlattenedColumn, RelationHeading, RelationKind, SourceKind
from relflat.kernel.options import FlattenOptions
from relflat.kernel.errors import (
    KernelValidationError,
    UnsupportedShapeError,
    HeadingDepthError,
    HeadingCycleError,
    RowShapeError,
)

__all__ = [
    "__version__",
    "build_table",
    "validate_headings",
    "flatten_headings",
    "project_row",
    "ValidationIssue",
    "ValidationResult",
    "ValidationCode",
    "TableView",
    "ViewDocument",
    "FlattenedColumn",
    "RelationHeading",
    "RelationKind",
    "SourceKind",
    "FlattenOptions",
    "KernelValidationError",
    "UnsupportedShapeError",
    "HeadingDepthError",
    "HeadingCycleError",
    "RowShapeError",
]
