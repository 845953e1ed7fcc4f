"""Public result models for relflat package."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from relflat.kernel.headings import FlattenedColumn


class TableView(BaseModel):
    """Flattened header plus one flat value list per row."""
    columns: List[FlattenedColumn]
    rows: List[List[Any]]  # each row aligned 1:1 with columns

    @property
    def labels(self) -> List[str]:
        return [c.label for c in self.columns]


class ViewDocument(BaseModel):
    """A heading tree with optional sample rows, as loaded from disk."""
    table: Optional[str] = None
    headings: List[Any]  # raw tree; parsed by the kernel under its depth/cycle guards
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
