"""Removes noise cues and folds filler cues into their neighbours."""

import logging
import re
from typing import List, Optional

from .models import Cue, reindex

_WHITESPACE_RE = re.compile(r"\s+")
_DIGITS_RE = re.compile(r"[0-9]+")
_FILLER_RE = re.compile(r"^(ah|oh|um|uh|ま|あの|え|えっと|嗯|呃|那个)$", re.IGNORECASE)

MAX_NUMERIC_NOISE_LEN = 5
MAX_AUXILIARY_LEN = 2


def is_noise(text: str) -> bool:
    """True for stray counters (<= 5 digits) and bracketed annotations like '[Music]'."""
    clean = (text or "").strip()
    compact = _WHITESPACE_RE.sub("", clean)
    if _DIGITS_RE.fullmatch(compact) and len(compact) <= MAX_NUMERIC_NOISE_LEN:
        return True
    return clean.startswith("[") and clean.endswith("]")


def is_auxiliary(text: str) -> bool:
    """True for very short cues and bare filler words."""
    clean = (text or "").strip()
    return len(clean) <= MAX_AUXILIARY_LEN or bool(_FILLER_RE.match(clean))


class CueFilter:
    """Drops structurally noisy cues, preserving the order of the rest."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def filter(self, cues: List[Cue]) -> List[Cue]:
        """
        Returns the cues that are not noise. Indices are left untouched;
        callers renumber with models.reindex when they need contiguous indices.
        """
        kept = [cue for cue in cues if not is_noise(cue.original)]
        removed = len(cues) - len(kept)
        if removed:
            self.logger.info(f"Filtered {removed} noise cues, {len(kept)} remain")
        return kept


class AuxiliaryMerger:
    """Folds filler cues into the preceding main cue, extending its end time."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def merge(self, cues: List[Cue]) -> List[Cue]:
        """
        Returns a new, re-indexed list without auxiliary cues.

        An auxiliary cue that has no preceding main cue is kept as a main cue.
        The main cue's text and translation are not changed.
        """
        result: List[Cue] = []
        last_main = None
        for cue in cues:
            if last_main is not None and is_auxiliary(cue.original):
                last_main.end_time = max(last_main.end_time, cue.end_time)
                self.logger.debug(f"Merged auxiliary [{cue.original}] into [{last_main.original}]")
                continue
            result.append(cue)
            last_main = cue

        if len(result) != len(cues):
            self.logger.info(f"Merged {len(cues) - len(result)} auxiliary cues")
        return reindex(result)
