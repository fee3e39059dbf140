"""Parses SRT and VTT subtitle text into cue sequences."""

import logging
import re
from typing import List, Optional

from .exceptions import SubtitleReadError
from .formats import SRT, VTT, SubtitleFormat, get_format
from .models import Cue
from .utils import parse_timecode


ARROW = "-->"
_TAG_RE = re.compile(r"<[^>]*>")


class CueParser:
    """
    Line-oriented cue parser shared by all supported formats.

    A line containing '-->' opens a cue; the non-blank lines after it are the
    cue text. A blank line, or the next timestamp line, closes the cue;
    in WebVTT a blank line directly after the timestamp does not. Lines
    seen while no cue is open (headers, index lines, cue identifiers, NOTE
    blocks) are ignored. Individual malformed cues never abort the parse.
    """

    subtitle_format: SubtitleFormat = SRT

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, content: str) -> List[Cue]:
        """
        Parses raw subtitle text.

        Args:
            content: The full text of a subtitle file.

        Returns:
            Cues in file order, indexed 1..n over the cues actually kept.
        """
        cues: List[Cue] = []
        time_line = None
        text_lines: List[str] = []

        for raw_line in (content or "").lstrip("\ufeff").splitlines():
            line = raw_line.strip()

            if not line:
                # Blank line: closes the open cue, unless the format lets a
                # cue keep waiting for its first text line.
                if time_line is not None and not text_lines and self._blank_keeps_empty_cue_open():
                    continue
                if time_line is not None:
                    self._flush(cues, time_line, text_lines)
                time_line = None
                text_lines = []
                continue

            if ARROW in line:
                # New timestamp; a cue still open here had no closing blank line
                if time_line is not None:
                    self._flush(cues, time_line, self._drop_next_index(text_lines))
                time_line = line
                text_lines = []
            elif time_line is not None:
                text_lines.append(line)
            # else: header, index, identifier or NOTE line outside a cue

        # Last cue may end at EOF without a blank line
        if time_line is not None:
            self._flush(cues, time_line, text_lines)

        return cues

    def parse_file(self, file_path: str) -> List[Cue]:
        """
        Reads and parses a subtitle file.

        Args:
            file_path: Path to a UTF-8 subtitle file (a BOM is tolerated).

        Returns:
            The parsed cues.

        Raises:
            SubtitleReadError: If the file cannot be opened or decoded.
        """
        try:
            with open(file_path, "r", encoding="utf-8-sig") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SubtitleReadError(f"Could not read subtitle file {file_path}: {e}") from e

        cues = self.parse(content)
        self.logger.info(f"Parsed {len(cues)} {self.subtitle_format.name.upper()} cues from {file_path}")
        return cues

    def _drop_next_index(self, text_lines: List[str]) -> List[str]:
        """Hook for formats whose next cue may start with an index line."""
        return text_lines

    def _blank_keeps_empty_cue_open(self) -> bool:
        """Hook for formats where a blank line may precede a cue's first text line."""
        return False

    def _flush(self, cues: List[Cue], time_line: str, text_lines: List[str]) -> None:
        start_text, _, end_text = time_line.partition(ARROW)
        start = parse_timecode(start_text, logger=self.logger)
        end = parse_timecode(end_text, logger=self.logger)

        # Join lines, then strip markup (<b>, <c.yellow>, inline <00:00:01.000> karaoke stamps)
        text = _TAG_RE.sub("", " ".join(text_lines)).strip()
        if not text:
            self.logger.debug(f"Discarding cue without text at '{time_line}'")
            return
        if end < start:
            self.logger.debug(f"Cue at '{time_line}' ends before it starts")

        cues.append(Cue(index=len(cues) + 1, start_time=start, end_time=end, original=text))


class SRTParser(CueParser):
    """SubRip parser. Index lines are informational; cues are renumbered."""

    subtitle_format = SRT

    def _drop_next_index(self, text_lines: List[str]) -> List[str]:
        # A missing blank line leaves the next cue's index as the last text line.
        if text_lines and text_lines[-1].isdigit():
            return text_lines[:-1]
        return text_lines


class VTTParser(CueParser):
    """WebVTT parser. Cue settings after the end timestamp are ignored."""

    subtitle_format = VTT

    def _blank_keeps_empty_cue_open(self) -> bool:
        # Auto-generated captions put a lone " " line between the timestamp and the text
        return True


_PARSERS = {SRT.name: SRTParser, VTT.name: VTTParser}


def get_parser(fmt, logger: Optional[logging.Logger] = None) -> CueParser:
    """Returns a parser for a format tag or SubtitleFormat."""
    return _PARSERS[get_format(fmt).name](logger=logger)
