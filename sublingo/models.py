"""Data models for Sublingo."""

from dataclasses import dataclass, field
from typing import List, Optional

@dataclass
class Cue:
    """One timestamped subtitle entry, times in milliseconds."""
    index: int
    start_time: int
    end_time: int
    original: str
    translation: str = ""

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "original": self.original,
            "translation": self.translation,
        }

@dataclass
class PipelineResult:
    """Holds the rendered subtitle text and the cue sequence it was built from."""
    rendered: str
    format_name: str
    cues: List[Cue] = field(default_factory=list)
    source_path: Optional[str] = None
    target_path: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.cues

    def to_dict(self) -> dict:
        return {
            "format": self.format_name,
            "source": self.source_path,
            "target": self.target_path,
            "subtitles": [cue.to_dict() for cue in self.cues],
        }

def reindex(cues: List[Cue]) -> List[Cue]:
    """Renumbers cues 1..n in sequence order, in place. Returns the same list."""
    for position, cue in enumerate(cues, start=1):
        cue.index = position
    return cues
