import logging
import os

import pytest

from sublingo.exceptions import ConfigurationError
from sublingo.pipeline import SubtitlePipeline

from samples import SOURCE_SRT, TARGET_VTT

EXPECTED_SRT = (
    "1\n00:00:01,000 --> 00:00:05,000\nHello there\n你好\n\n"
    "2\n00:00:05,000 --> 00:00:07,500\nHow are you?\n你好吗？\n\n"
)


def test_full_pipeline_merges_filters_and_repairs(write_file):
    source = write_file("abc.ja.srt", SOURCE_SRT)
    target = write_file("abc.zh-Hans.vtt", TARGET_VTT)

    result = SubtitlePipeline().process(source, target)

    assert result.format_name == "srt"
    assert result.rendered == EXPECTED_SRT
    assert [cue.to_dict() for cue in result.cues] == [
        {"index": 1, "startTime": 1000, "endTime": 5000, "original": "Hello there", "translation": "你好"},
        {"index": 2, "startTime": 5000, "endTime": 7500, "original": "How are you?", "translation": "你好吗？"},
    ]


def test_missing_target_still_renders_source(write_file):
    source = write_file("abc.ja.srt", SOURCE_SRT)

    result = SubtitlePipeline().process(source, None)

    assert [cue.translation for cue in result.cues] == ["", ""]
    assert "Hello there\n\n" in result.rendered


def test_missing_source_gives_empty_result(tmp_path, write_file):
    target = write_file("abc.zh.vtt", TARGET_VTT)

    result = SubtitlePipeline().process(str(tmp_path / "abc.ja.srt"), target)

    assert result.is_empty
    assert result.rendered == ""


def test_no_files_is_a_legitimate_empty_result():
    result = SubtitlePipeline().process(None, None)

    assert result.is_empty
    assert result.format_name == "srt"
    assert result.to_dict()["subtitles"] == []


def test_unreadable_target_degrades_to_empty_side(write_file):
    source = write_file("abc.ja.srt", SOURCE_SRT)
    target = write_file("abc.zh.vtt", b"WEBVTT\n\n00:00:01.100 --> 00:00:04.100\n\xff\xfe\n")

    result = SubtitlePipeline().process(source, target)

    assert len(result.cues) == 2
    assert all(cue.translation == "" for cue in result.cues)


def test_output_format_follows_source_family(write_file):
    source = write_file("abc.en.vtt", "WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nHi\n")

    result = SubtitlePipeline().process(source, None)

    assert result.rendered == "WEBVTT\n\n1\n00:00:01.000 --> 00:00:02.000\nHi\n\n"


def test_configured_output_format_wins(write_file):
    source = write_file("abc.ja.srt", SOURCE_SRT)

    result = SubtitlePipeline({"output_format": "vtt"}).process(source, None)

    assert result.format_name == "vtt"
    assert result.rendered.startswith("WEBVTT\n\n1\n00:00:01.000 --> 00:00:05.000\n")


def test_long_cues_are_segmented_unless_disabled(write_file):
    long_text = "A very long line exceeding fifty characters with a comma, and more text after it"
    source = write_file("abc.en.srt", f"1\n00:00:00,000 --> 00:00:04,000\n{long_text}\n")

    segmented = SubtitlePipeline().process(source, None)
    unsegmented = SubtitlePipeline({"segment": False}).process(source, None)

    assert [(cue.index, cue.start_time, cue.end_time) for cue in segmented.cues] == [(1, 0, 2000), (2, 2000, 4000)]
    assert [cue.original for cue in unsegmented.cues] == [long_text]


def test_auxiliary_merge_is_optional(write_file):
    content = (
        "1\n00:00:01,000 --> 00:00:02,000\nMain line\n\n"
        "2\n00:00:02,000 --> 00:00:02,500\num\n\n"
        "3\n00:00:04,000 --> 00:00:05,000\nNext line\n"
    )
    source = write_file("abc.en.srt", content)

    plain = SubtitlePipeline().process(source, None)
    merged = SubtitlePipeline({"merge_auxiliary": True}).process(source, None)

    assert [cue.original for cue in plain.cues] == ["Main line", "um", "Next line"]
    assert [(cue.index, cue.original, cue.end_time) for cue in merged.cues] == [
        (1, "Main line", 4000),
        (2, "Next line", 5000),
    ]


def test_indices_are_contiguous_after_filtering(write_file):
    source = write_file("abc.ja.srt", SOURCE_SRT)

    result = SubtitlePipeline({"segment": False}).process(source, None)

    assert [cue.index for cue in result.cues] == [1, 2]


def test_invalid_config_is_rejected():
    with pytest.raises(ConfigurationError):
        SubtitlePipeline({"max_chars_per_segment": 0})


def test_process_video_locates_files_and_saves_result(tmp_path, write_file):
    write_file("abc.ja.srt", SOURCE_SRT)
    write_file("abc.zh-Hans.vtt", TARGET_VTT)
    output_dir = tmp_path / "merged"

    result = SubtitlePipeline().process_video("abc", str(tmp_path), str(output_dir))

    saved = output_dir / "abc.merged.srt"
    assert saved.read_text(encoding="utf-8") == EXPECTED_SRT
    assert result.source_path == os.path.join(str(tmp_path), "abc.ja.srt")


def test_process_video_without_files_writes_nothing(tmp_path):
    output_dir = tmp_path / "merged"

    result = SubtitlePipeline().process_video("nothing", str(tmp_path), str(output_dir))

    assert result.is_empty
    assert not output_dir.exists()


def test_log_messages_are_tagged_with_video_id(write_file, caplog):
    source = write_file("abc.ja.srt", SOURCE_SRT)

    with caplog.at_level(logging.INFO):
        SubtitlePipeline().process(source, None, video_id="abc")

    assert any(record.getMessage().startswith("[abc] Parsed 4 SRT cues") for record in caplog.records)
