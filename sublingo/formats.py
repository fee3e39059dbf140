"""Supported subtitle formats and their textual conventions."""

import os
from dataclasses import dataclass
from typing import Optional

from .exceptions import UnsupportedFormatError


@dataclass(frozen=True)
class SubtitleFormat:
    """Describes one cue-based subtitle format."""
    name: str
    extension: str
    separator: str  # between seconds and milliseconds in a timestamp
    header: str = ""


SRT = SubtitleFormat(name="srt", extension="srt", separator=",")
VTT = SubtitleFormat(name="vtt", extension="vtt", separator=".", header="WEBVTT\n\n")

SUPPORTED_FORMATS = {fmt.name: fmt for fmt in (SRT, VTT)}


def get_format(tag) -> SubtitleFormat:
    """
    Resolves a format tag ('srt', 'VTT', ...) to its SubtitleFormat.

    Args:
        tag: A format tag, or a SubtitleFormat (returned as is).

    Raises:
        UnsupportedFormatError: If the tag names no supported format.
    """
    if isinstance(tag, SubtitleFormat):
        return tag
    key = str(tag or "").strip().lower().lstrip(".")
    try:
        return SUPPORTED_FORMATS[key]
    except KeyError:
        raise UnsupportedFormatError(
            f"Unsupported subtitle format '{tag}'. Supported: {', '.join(sorted(SUPPORTED_FORMATS))}"
        ) from None


def detect_format(path: Optional[str]) -> Optional[SubtitleFormat]:
    """Returns the format implied by a file's extension, or None if unknown."""
    if not path:
        return None
    ext = os.path.splitext(path)[1].lower().lstrip(".")
    return SUPPORTED_FORMATS.get(ext)
