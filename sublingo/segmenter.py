"""Splits over-long cues into shorter ones."""

import logging
import re
from typing import List, Optional

from .models import Cue, reindex

DEFAULT_MAX_LEN = 50
DEFAULT_LOOKBACK = 20
DEFAULT_SNAP_RADIUS = 5

# Split-point priorities, strongest first. Each split lands after the match.
_SPLIT_PATTERNS = (
    re.compile(r"[。？！?!;；]"),  # sentence end
    re.compile(r"[,，、]"),  # clause break
    re.compile(r"\s"),
)
_TRANSLATION_DELIMITERS = " ,，.。!！?？;；、"


class Segmenter:
    """Splits cues whose original text exceeds `max_len` characters."""

    def __init__(
        self,
        max_len: int = DEFAULT_MAX_LEN,
        lookback: int = DEFAULT_LOOKBACK,
        snap_radius: int = DEFAULT_SNAP_RADIUS,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initializes the Segmenter.

        Args:
            max_len: Maximum characters of original text per cue.
            lookback: How far back from `max_len` to search for a split point.
            snap_radius: How far around a proportional cut point to look for a
                         delimiter when slicing translation text.
            logger: Optional logger; defaults to this module's logger.
        """
        if max_len < 1:
            raise ValueError("max_len must be at least 1")
        if lookback < 0 or snap_radius < 0:
            raise ValueError("lookback and snap_radius must be non-negative")
        self.max_len = max_len
        self.lookback = lookback
        self.snap_radius = snap_radius
        self.logger = logger or logging.getLogger(__name__)

    def segment(self, cues: List[Cue]) -> List[Cue]:
        """
        Builds a new, fully re-indexed cue list with long cues split.

        A split cue's duration is shared equally between its pieces; the last
        piece ends exactly where the original cue ended. Translation text is
        sliced into the same number of pieces by length. The input cues are
        not modified.

        Args:
            cues: Cues in timeline order.

        Returns:
            The segmented cues.
        """
        result: List[Cue] = []
        for cue in cues:
            if len(cue.original) <= self.max_len:
                result.append(Cue(cue.index, cue.start_time, cue.end_time, cue.original, cue.translation))
                continue

            pieces = self.split_text(cue.original)
            count = len(pieces)
            if count == 0:
                # Whitespace-only text has nothing to split
                result.append(Cue(cue.index, cue.start_time, cue.end_time, cue.original, cue.translation))
                continue
            # Equal share per piece; integer division remainder goes to the last piece
            per_piece = cue.duration // count
            if cue.translation:
                translations = self.split_translation(cue.translation, count)
            else:
                translations = [""] * count

            start = cue.start_time
            for position, piece in enumerate(pieces):
                # Last piece is pinned to the original end time
                end = cue.end_time if position == count - 1 else start + per_piece
                result.append(Cue(cue.index, start, end, piece, translations[position]))
                start = end
            self.logger.debug(f"Split cue {cue.index} ({len(cue.original)} chars) into {count} parts")

        if len(result) != len(cues):
            self.logger.info(f"Split subtitles from {len(cues)} to {len(result)}")
        return reindex(result)

    def split_text(self, text: str) -> List[str]:
        """Cuts text into chunks of at most `max_len` characters at the best nearby break."""
        parts = []
        text = text.strip()
        while len(text) > self.max_len:
            # Look for a break only in the last `lookback` chars before max_len
            scan_start = max(0, self.max_len - self.lookback)
            offset = self._find_break(text[scan_start:self.max_len])
            # No break point found: hard cut at max_len
            split_at = scan_start + offset if offset is not None else self.max_len
            parts.append(text[:split_at].strip())
            text = text[split_at:].strip()
        if text:
            parts.append(text) # Remainder already fits
        return parts

    @staticmethod
    def _find_break(window: str) -> Optional[int]:
        # Strongest class wins; within a class, the last match is closest to max_len
        for pattern in _SPLIT_PATTERNS:
            matches = list(pattern.finditer(window))
            if matches:
                return matches[-1].end()
        return None

    def split_translation(self, text: str, parts: int) -> List[str]:
        """
        Slices text into `parts` roughly equal pieces, snapping each cut to a
        nearby space or punctuation mark when one is within `snap_radius`.
        """
        if parts <= 1:
            return [text]

        chunk_len = len(text) // parts
        pieces = []
        position = 0
        for _ in range(parts - 1):
            cut = self._snap(text, position + chunk_len, position)
            # Cut includes the delimiter; surrounding spaces are trimmed
            pieces.append(text[position:cut].strip())
            position = cut
        pieces.append(text[position:].strip())
        return pieces

    def _snap(self, text: str, target: int, floor: int) -> int:
        if target >= len(text):
            return len(text)
        # Widen the search one char at a time, right side first
        for offset in range(self.snap_radius + 1):
            right = target + offset
            if right < len(text) and text[right] in _TRANSLATION_DELIMITERS:
                return right + 1
            # Never step back to or before the previous cut
            left = target - offset
            if left > floor and text[left] in _TRANSLATION_DELIMITERS:
                return left + 1
        return target # No delimiter nearby: cut by length
