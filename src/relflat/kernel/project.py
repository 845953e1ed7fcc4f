"""Project a nested row onto the flattened columns of a heading tree."""

from collections.abc import Mapping
from typing import Any, List

from .errors import RowShapeError
from .headings import parse_headings
from .options import FlattenOptions, resolve_options
from .traversal import Leaf, walk_headings


def project_row(headings: Any, row: Mapping[str, Any] | None, options: FlattenOptions | None = None) -> List[Any]:
    """
    Compute the flat values of a row, aligned with flatten_headings().

    Missing columns and missing or null related rows resolve to None.
    Collapsed relations read their local FK column, or yield the placeholder
    when they have none.

    Raises:
        KernelValidationError: On the same tree shapes flatten_headings() rejects
        RowShapeError: If a nested row is neither a mapping nor None
    """
    opts = resolve_options(options)
    tree = parse_headings(headings, max_depth=opts.max_depth)
    return [_resolve(leaf, row, opts.placeholder) for leaf in walk_headings(tree, opts.max_depth)]


def _resolve(leaf: Leaf, row: Mapping[str, Any] | None, placeholder: str) -> Any:
    current = row
    for depth, relation in enumerate(leaf.relation_path):
        current = _as_row(current, leaf.relation_path[:depth])
        if current is None:
            return None
        current = current.get(relation)

    current = _as_row(current, leaf.relation_path)
    if current is None:
        return None
    if leaf.key is None:
        return placeholder
    return current.get(leaf.key)


def _as_row(value: Any, path: tuple[str, ...]) -> Mapping[str, Any] | None:
    if value is None or isinstance(value, Mapping):
        return value
    raise RowShapeError(list(path), value)
