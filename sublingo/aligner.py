"""Merges a target-language track into a source-language track by start time."""

import logging
from typing import List, Optional

from .models import Cue

DEFAULT_TOLERANCE_MS = 200


class Aligner:
    """
    Greedy first-match aligner.

    For each source cue the target cues are scanned in order and the first one
    whose start time differs by less than the tolerance supplies the
    translation. This is not a nearest-distance match: ties and out-of-order
    candidates resolve by target scan order.
    """

    def __init__(self, tolerance_ms: int = DEFAULT_TOLERANCE_MS, logger: Optional[logging.Logger] = None):
        if tolerance_ms < 0:
            raise ValueError("Alignment tolerance must be non-negative")
        self.tolerance_ms = tolerance_ms
        self.logger = logger or logging.getLogger(__name__)

    def align(self, source: List[Cue], target: List[Cue]) -> None:
        """Sets `translation` on source cues in place. Existing translations are kept."""
        if not source or not target:
            return

        self.logger.info(f"Aligning subtitles... Source: {len(source)}, Target: {len(target)}")
        matched = 0
        for source_cue in source:
            for target_cue in target:
                # First target in scan order within tolerance wins, not the nearest
                if abs(source_cue.start_time - target_cue.start_time) < self.tolerance_ms:
                    if not source_cue.translation: # Keep translations set upstream
                        source_cue.translation = target_cue.original
                    matched += 1
                    break

        self.logger.info(f"Matched {matched}/{len(source)} source cues")
