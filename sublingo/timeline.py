"""Closes gaps between consecutive cues."""

import logging
from typing import List, Optional

from .models import Cue


class TimelineRepairer:
    """Extends each cue's end time to the next cue's start time."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def repair(self, cues: List[Cue]) -> None:
        """
        Rewrites end times in place so there is no gap (and no flicker) between
        cues. Where the next cue does not start later than the current one the
        current cue is left as is and the anomaly is logged. The last cue is
        never touched.
        """
        anomalies = 0
        if len(cues) > 1:
            self.logger.info(f"Closing timeline gaps for {len(cues)} cues...")
        # Each cue runs until the next one starts; the last cue keeps its end
        for current, following in zip(cues, cues[1:]):
            if following.start_time > current.start_time:
                current.end_time = following.start_time
            else:
                anomalies += 1
                self.logger.warning(
                    f"Timeline anomaly: cue {following.index} starts at {following.start_time}ms, "
                    f"not after cue {current.index} at {current.start_time}ms. Left unchanged."
                )

        # Inverted cues are reported, never passed on silently
        for cue in cues:
            if cue.end_time < cue.start_time:
                self.logger.warning(
                    f"Cue {cue.index} ends before it starts ({cue.start_time}ms -> {cue.end_time}ms)"
                )

        if anomalies:
            self.logger.warning(f"{anomalies} timeline anomalies left unrepaired")
