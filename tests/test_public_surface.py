"""Test public API surface - ensure imports work correctly and no side effects."""

import relflat


def test_root_exports_core_functions():
    """Test that the package root exposes the engine and the API."""
    from relflat import build_table, flatten_headings, project_row, validate_headings

    for fn in (build_table, flatten_headings, project_row, validate_headings):
        assert callable(fn)


def test_all_names_resolve():
    """Test that every name in __all__ is importable from the root."""
    for name in relflat.__all__:
        assert hasattr(relflat, name), name


def test_root_and_kernel_are_the_same_objects():
    """Test that root re-exports are the kernel objects, not copies."""
    from relflat.kernel.flatten import flatten_headings
    from relflat.kernel.project import project_row
    from relflat.kernel.errors import UnsupportedShapeError

    assert relflat.flatten_headings is flatten_headings
    assert relflat.project_row is project_row
    assert relflat.UnsupportedShapeError is UnsupportedShapeError


def test_validation_codes_are_strings():
    """Test that codes compare equal to their string values."""
    assert relflat.ValidationCode.UNSUPPORTED_SHAPE == "UNSUPPORTED_SHAPE"
