"""Depth-first walk over a heading tree.

Both the flattener and the row projector consume this walk, so the i-th
column label and the i-th row value always come from the same leaf.
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from .errors import HeadingDepthError, UnsupportedShapeError
from .headings import HeadingSpec, RelationHeading, RelationKind, SourceKind


@dataclass(frozen=True)
class Leaf:
    """One output column of a heading tree."""
    relation_path: Tuple[str, ...]  # expanded relations above this leaf
    name: str  # column name, local FK column, or relation name
    source_kind: SourceKind
    key: str | None  # row key to read; None renders the placeholder

    def label(self, separator: str = ".") -> str:
        return separator.join(self.relation_path + (self.name,))


def walk_headings(headings: Sequence[HeadingSpec], max_depth: int) -> Iterator[Leaf]:
    """Yield leaves left-to-right, depth-first.

    Raises:
        UnsupportedShapeError: On expanded array relations or untyped nodes
        HeadingDepthError: If expanded relations nest deeper than max_depth
    """
    yield from _walk(headings, (), max_depth)


def _walk(headings: Sequence[HeadingSpec], prefix: Tuple[str, ...], max_depth: int) -> Iterator[Leaf]:
    for heading in headings:
        if isinstance(heading, str):
            yield Leaf(prefix, heading, SourceKind.COLUMN, heading)
        elif isinstance(heading, RelationHeading):
            yield from _walk_relation(heading, prefix, max_depth)
        else:
            raise UnsupportedShapeError(
                heading, f"expected a column name or RelationHeading, got {type(heading).__name__}"
            )


def _walk_relation(heading: RelationHeading, prefix: Tuple[str, ...], max_depth: int) -> Iterator[Leaf]:
    source_kind = SourceKind(heading.kind.value)

    if not heading.expanded:
        if heading.kind is RelationKind.OBJECT and heading.local_column:
            yield Leaf(prefix, heading.local_column, source_kind, heading.local_column)
        else:
            yield Leaf(prefix, heading.display_name, source_kind, None)
        return

    if heading.kind is RelationKind.OBJECT:
        path = prefix + (heading.name,)
        if len(path) > max_depth:
            raise HeadingDepthError(list(path), max_depth)
        yield from _walk(heading.children, path, max_depth)
        return

    raise UnsupportedShapeError(
        heading, f"expanded {heading.kind.value} '{heading.name}' cannot be flattened"
    )
