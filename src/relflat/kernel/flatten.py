"""Flatten a heading tree into the ordered list of table columns."""

from typing import Any, List

from .headings import FlattenedColumn, parse_headings
from .options import FlattenOptions, resolve_options
from .traversal import walk_headings


def flatten_headings(headings: Any, options: FlattenOptions | None = None) -> List[FlattenedColumn]:
    """
    Compute the column labels for a heading tree.

    Plain columns map to themselves, collapsed relations to one placeholder
    column, and expanded object relations to their children's columns
    prefixed with ``relation + separator``.

    Args:
        headings: Raw or parsed heading tree
        options: Flatten options (defaults apply when None)

    Returns:
        Flattened columns in display order

    Raises:
        KernelValidationError: If the tree contains an unsupported shape,
                               nests too deep, or is cyclic
    """
    opts = resolve_options(options)
    tree = parse_headings(headings, max_depth=opts.max_depth)
    return [
        FlattenedColumn(label=leaf.label(opts.separator), source_kind=leaf.source_kind)
        for leaf in walk_headings(tree, opts.max_depth)
    ]
