"""Serializes cue sequences back into subtitle text (SRT or VTT)."""

import logging
import os
from typing import List, Optional

from .exceptions import FormattingError
from .formats import SubtitleFormat, get_format
from .models import Cue
from .utils import ensure_dir_exists, format_timecode


class SubtitleRenderer:
    """Renders bilingual cues: original line first, translation line below it."""

    def __init__(self, subtitle_format="srt", logger: Optional[logging.Logger] = None):
        self.subtitle_format: SubtitleFormat = get_format(subtitle_format)
        self.logger = logger or logging.getLogger(__name__)

    def render(self, cues: List[Cue]) -> str:
        """
        Formats cues as subtitle text.

        Each block is the index, the 'start --> end' line, the original text and
        (only when present) the translation, followed by a blank line. VTT output
        starts with the WEBVTT header.
        """
        separator = self.subtitle_format.separator
        blocks = [self.subtitle_format.header]
        for cue in cues:
            lines = [
                str(cue.index),
                f"{format_timecode(cue.start_time, separator)} --> {format_timecode(cue.end_time, separator)}",
                cue.original,
            ]
            if cue.translation:
                lines.append(cue.translation)
            blocks.append("\n".join(lines) + "\n\n")
        return "".join(blocks)

    def write(self, cues: List[Cue], output_path: str) -> str:
        """
        Renders cues and writes them to a file.

        Args:
            cues: The cues to write.
            output_path: Destination file path; its directory is created if needed.

        Returns:
            The rendered text.

        Raises:
            FormattingError: If the file cannot be written.
            FileSystemError: If the output directory is invalid.
        """
        content = self.render(cues)
        output_dir = os.path.dirname(output_path)
        if output_dir:
            ensure_dir_exists(output_dir)
        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except IOError as e:
            self.logger.error(f"Failed to write {self.subtitle_format.name.upper()} file to {output_path}: {e}", exc_info=True)
            raise FormattingError(f"Could not write subtitle file: {e}") from e

        self.logger.info(f"Successfully wrote {len(cues)} subtitle blocks to {output_path}")
        return content
