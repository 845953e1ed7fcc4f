"""Heading tree model: plain column names and relation nodes.

A heading tree describes what a table view shows. Each node is either a bare
column name (``str``) or a :class:`RelationHeading`. Raw trees coming from
JSON are parsed with :func:`parse_headings`, which accepts both the canonical
key names and the console's legacy ones (``relname``, ``type``, ``_expanded``,
``lcol``, ``headings``).
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, List, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import HeadingCycleError, HeadingDepthError, UnsupportedShapeError
from .options import DEFAULT_MAX_DEPTH


class RelationKind(str, Enum):
    """Relationship cardinality of a relation heading."""
    OBJECT = "object-relation"
    ARRAY = "array-relation"


class SourceKind(str, Enum):
    """Where a flattened column came from (used for styling by renderers)."""
    COLUMN = "column"
    OBJECT_RELATION = "object-relation"
    ARRAY_RELATION = "array-relation"


# Legacy console spellings -> canonical kind values
_LEGACY_KINDS = {
    "obj_rel": RelationKind.OBJECT.value,
    "arr_rel": RelationKind.ARRAY.value,
}

LEGACY_KEYS = frozenset({"relname", "type", "_expanded", "lcol", "headings"})


class RelationHeading(BaseModel):
    """A relation node in the heading tree.

    Collapsed relations render as a single column; expanded object relations
    render their ``children`` inline under a ``name.`` prefix.
    """
    name: str = Field(..., min_length=1, validation_alias=AliasChoices("name", "relname"))
    kind: RelationKind = Field(..., validation_alias=AliasChoices("kind", "type"))
    expanded: bool = Field(False, validation_alias=AliasChoices("expanded", "_expanded"))
    local_column: str | None = Field(
        None,
        validation_alias=AliasChoices("local_column", "localColumn", "lcol"),
        description="Local foreign-key column shown while the relation is collapsed",
    )
    children: Tuple[Union[str, "RelationHeading"], ...] = Field(
        default_factory=tuple,
        validation_alias=AliasChoices("children", "headings"),
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, v: Any) -> Any:
        """Accept the console's ``obj_rel``/``arr_rel`` spellings."""
        if isinstance(v, str):
            return _LEGACY_KINDS.get(v, v)
        return v

    @model_validator(mode="after")
    def check_expanded_children(self) -> "RelationHeading":
        if self.expanded and self.kind is RelationKind.OBJECT and not self.children:
            raise ValueError(
                f"Expanded object relation '{self.name}' must carry non-empty children"
            )
        return self

    @property
    def display_name(self) -> str:
        """Column label used while the relation is collapsed."""
        if self.kind is RelationKind.OBJECT and self.local_column:
            return self.local_column
        return self.name


RelationHeading.model_rebuild()

HeadingSpec = Union[str, RelationHeading]


class FlattenedColumn(BaseModel):
    """A leaf column of a flattened heading tree."""
    label: str  # dot-joined path, e.g. "author.publisher.name"
    source_kind: SourceKind = SourceKind.COLUMN

    model_config = ConfigDict(frozen=True)


def parse_headings(headings: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> List[HeadingSpec]:
    """
    Parse a raw heading tree into typed nodes.

    Already-typed nodes pass through unchanged, so this is safe to call on
    the output of a previous parse. Children of collapsed relations (and a
    ``children`` value of None) are dropped without being parsed.

    Args:
        headings: Sequence of column names, relation mappings or RelationHeading
        max_depth: Maximum number of nested expanded relations in raw mappings

    Returns:
        List of HeadingSpec nodes in input order

    Raises:
        UnsupportedShapeError: If a node is not a supported heading shape
        HeadingDepthError: If raw relations nest deeper than max_depth
        HeadingCycleError: If a raw relation mapping contains itself
    """
    if not _is_node_sequence(headings):
        raise UnsupportedShapeError(headings, "headings must be a sequence of heading nodes")
    return [_parse_node(h, (), set(), max_depth) for h in headings]


def _is_node_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _raw_get(node: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in node:
            return node[key]
    return None


def _parse_node(node: Any, path: Tuple[str, ...], active: set[int], max_depth: int) -> HeadingSpec:
    if isinstance(node, (str, RelationHeading)):
        return node
    if not isinstance(node, Mapping):
        raise UnsupportedShapeError(
            node, f"expected a column name or relation mapping, got {type(node).__name__}"
        )

    name = _raw_get(node, "name", "relname")
    # path only holds expanded ancestors; collapsed nodes never descend
    node_path = path + (str(name),)
    if id(node) in active:
        raise HeadingCycleError(list(node_path))

    data = dict(node)
    raw_children = _raw_get(node, "children", "headings")
    if raw_children is None or not _raw_get(node, "expanded", "_expanded"):
        # A collapsed relation renders as one column, its subtree is never walked
        data.pop("children", None)
        data.pop("headings", None)
    else:
        if not _is_node_sequence(raw_children):
            raise UnsupportedShapeError(node, f"children of '{name}' must be a sequence")
        if raw_children and len(node_path) > max_depth:
            raise HeadingDepthError(list(node_path), max_depth)
        active.add(id(node))
        try:
            parsed = tuple(_parse_node(child, node_path, active, max_depth) for child in raw_children)
        finally:
            active.discard(id(node))
        # Keep whichever key the caller used so the alias still resolves
        child_key = "children" if "children" in node else "headings"
        data[child_key] = parsed

    try:
        return RelationHeading.model_validate(data)
    except ValidationError as e:
        raise UnsupportedShapeError(node, f"invalid relation heading: {e}") from e
