import logging

import pytest

from sublingo.utils import format_timecode, parse_timecode


@pytest.mark.parametrize(
    "text, expected",
    [
        ("00:01:02,345", 62345),
        ("00:01:02.345", 62345),
        ("01:02.345", 62345),
        ("1:00:00.000", 3600000),
        ("00:00:01.5", 1500),
        ("00:00:04.000 align:start position:0%", 4000),
    ],
)
def test_parse_accepts_srt_and_vtt_forms(text, expected):
    assert parse_timecode(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "garbage", "00:xx:01,000", "1,000"])
def test_parse_malformed_yields_zero(text):
    assert parse_timecode(text) == 0


def test_format_uses_three_components_and_separator():
    assert format_timecode(62345) == "00:01:02,345"
    assert format_timecode(62345, ".") == "00:01:02.345"
    assert format_timecode(3600001, ".") == "01:00:00.001"


def test_format_clamps_negative_values():
    assert format_timecode(-5) == "00:00:00,000"


def test_format_then_parse_is_stable():
    for ms in (0, 999, 61001, 7322456):
        assert parse_timecode(format_timecode(ms, ",")) == ms
        assert parse_timecode(format_timecode(ms, ".")) == ms


def test_parse_reports_malformed_input_to_given_logger(caplog):
    with caplog.at_level(logging.DEBUG, logger="test.timecode"):
        assert parse_timecode("garbage", logger=logging.getLogger("test.timecode")) == 0

    assert [record.name for record in caplog.records] == ["test.timecode"]
