import pytest

from sublingo.cue_parser import get_parser
from sublingo.exceptions import FormattingError
from sublingo.renderer import SubtitleRenderer


def test_srt_render_emits_translation_only_when_present(make_cue):
    cues = [
        make_cue(1, 1000, 5000, "Hello there", "你好"),
        make_cue(2, 5000, 7500, "How are you?"),
    ]

    text = SubtitleRenderer("srt").render(cues)

    assert text == (
        "1\n00:00:01,000 --> 00:00:05,000\nHello there\n你好\n\n"
        "2\n00:00:05,000 --> 00:00:07,500\nHow are you?\n\n"
    )


def test_vtt_render_has_header_and_dot_separator(make_cue):
    text = SubtitleRenderer("vtt").render([make_cue(1, 62345, 63000, "Line")])

    assert text == "WEBVTT\n\n1\n00:01:02.345 --> 00:01:03.000\nLine\n\n"


def test_empty_sequence_renders_header_only():
    assert SubtitleRenderer("srt").render([]) == ""
    assert SubtitleRenderer("vtt").render([]) == "WEBVTT\n\n"


@pytest.mark.parametrize("fmt", ["srt", "vtt"])
def test_render_then_parse_round_trips(make_cue, fmt):
    cues = [
        make_cue(1, 0, 1500, "First line"),
        make_cue(2, 1500, 3723004, "Second line, with punctuation!"),
        make_cue(3, 3723004, 3800000, "最后一行"),
    ]

    reparsed = get_parser(fmt).parse(SubtitleRenderer(fmt).render(cues))

    assert reparsed == cues


def test_write_creates_directory_and_file(make_cue, tmp_path):
    path = tmp_path / "out" / "abc.merged.srt"

    content = SubtitleRenderer("srt").write([make_cue(1, 0, 1000, "Hi")], str(path))

    assert path.read_text(encoding="utf-8") == content
    assert content.startswith("1\n00:00:00,000 --> 00:00:01,000\nHi\n")


def test_write_failure_raises_formatting_error(make_cue, tmp_path):
    target = tmp_path / "taken"
    target.mkdir()

    with pytest.raises(FormattingError):
        SubtitleRenderer("srt").write([make_cue(1, 0, 1000, "Hi")], str(target))
