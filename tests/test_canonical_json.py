"""Tests for canonical JSON output."""

import pytest

from relflat._internal.canonical_json import canonical_dumps


def test_keys_sorted_lists_preserved():
    """Test that keys are sorted while list order is kept."""
    out = canonical_dumps({"rows": [[2, None], [1, "x"]], "columns": ["b", "a"]})
    assert out == '{"columns":["b","a"],"rows":[[2,null],[1,"x"]]}'


def test_utf8_not_escaped():
    """Test that non-ASCII text is emitted as-is."""
    assert canonical_dumps({"label": "auteur.prénom"}) == '{"label":"auteur.prénom"}'


def test_database_cell_values_rendered():
    """Test that datetimes, decimals and UUIDs from driver rows serialize as text."""
    import datetime
    import uuid
    from decimal import Decimal

    row = [
        datetime.datetime(2024, 5, 1, 12, 30),
        datetime.date(2024, 5, 1),
        Decimal("19.90"),
        uuid.UUID("12345678-1234-5678-1234-567812345678"),
    ]
    assert canonical_dumps({"rows": [row]}) == (
        '{"rows":[["2024-05-01T12:30:00","2024-05-01","19.90",'
        '"12345678-1234-5678-1234-567812345678"]]}'
    )


def test_unknown_cell_type_rejected():
    """Test that values with no JSON rendering still raise TypeError."""
    with pytest.raises(TypeError, match="set"):
        canonical_dumps({"rows": [[{1, 2}]]})


def test_nan_rejected():
    """Test that NaN cells are refused rather than emitted as invalid JSON."""
    with pytest.raises(ValueError):
        canonical_dumps({"rows": [[float("nan")]]})
