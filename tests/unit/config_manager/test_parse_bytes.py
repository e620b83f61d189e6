import pytest

from telemetry_buffer.config_manager.helpers import parse_bytes


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0),
        (4096, 4096),
        ("0b", 0),
        ("1", 1),
        ("1k", 1024),
        ("1kb", 1024),
        ("1mb", 1024 * 1024),
        ("10m", 10 * 1024 * 1024),
        ("60MB", 60 * 1024 * 1024),
        ("  1gb  ", 1024 * 1024 * 1024),
        ("10485760", 10_485_760),
    ],
)
def test_parse_bytes_valid(value: int | str, expected: int) -> None:
    assert parse_bytes(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", "nope", "kb", "1KiB", "1gbps", "-1kb", "1.5gb", "10bm"],
)
def test_parse_bytes_invalid_raises(value: str) -> None:
    with pytest.raises(ValueError):
        parse_bytes(value)
