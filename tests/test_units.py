import pytest

from rdb_autoresize.shared.units import format_size, parse_duration, parse_size


@pytest.mark.parametrize(
    "text,expected",
    [
        ("100GB", 100 * 10**9),
        ("5 gb", 5 * 10**9),
        ("512MB", 512 * 10**6),
        ("1.5TB", 1500 * 10**9),
        ("2k", 2000),
        ("0GB", 0),
        ("12345", 12345),
        (5000, 5000),
    ],
)
def test_parse_size(text, expected):
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "GB", "ten GB", "5XB", "-5GB", True, -1, ["100GB"], {"a": 1}, None])
def test_parse_size_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_size(text)


@pytest.mark.parametrize(
    "size,expected",
    [
        (80 * 10**9, "80GB"),
        (85_500_000_000, "85.5GB"),
        (102 * 10**9, "102GB"),
        (1500 * 10**9, "1.5TB"),
        (999, "999B"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("300", 300.0),
        (60, 60.0),
        ("30s", 30.0),
        ("5m", 300.0),
        ("1h", 3600.0),
        ("1m30s", 90.0),
        ("250ms", 0.25),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == pytest.approx(expected)


@pytest.mark.parametrize("text", ["", "soon", "5 minutes", "5x", ["5m"], {"m": 5}, None, False])
def test_parse_duration_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_duration(text)
