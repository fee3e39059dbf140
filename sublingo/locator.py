"""Finds subtitle files on disk and saves merged results.

Files follow the '<videoId>.<langTag>.<ext>' naming convention, e.g.
'dQw4w9WgXcQ.ja.vtt' or 'dQw4w9WgXcQ.zh-Hans.vtt'.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .formats import SUPPORTED_FORMATS
from .models import PipelineResult
from .renderer import SubtitleRenderer

logger = logging.getLogger(__name__)

MERGED_TAG = "merged"
DEFAULT_SOURCE_PRIORITY = ("ja", "en")
DEFAULT_TARGET_PREFIXES = ("zh",)


@dataclass
class SubtitleFiles:
    """The located source and target subtitle files; either may be None."""
    source: Optional[str] = None
    target: Optional[str] = None


def split_subtitle_name(filename: str) -> Optional[Tuple[str, str, str]]:
    """Splits '<videoId>.<langTag>.<ext>' into its parts, or returns None."""
    parts = filename.rsplit(".", 2)
    if len(parts) != 3 or not all(parts):
        return None
    video_id, lang_tag, ext = parts
    if ext.lower() not in SUPPORTED_FORMATS:
        return None
    return video_id, lang_tag.lower(), ext.lower()


def _list_entries(directory: str) -> List[str]:
    if not directory or not os.path.isdir(directory):
        logger.warning(f"Subtitle directory not found: {directory}")
        return []
    return sorted(os.listdir(directory))


def _pick(candidates: List[Tuple[str, str]], prefixes: Iterable[str]) -> Optional[str]:
    for prefix in prefixes:
        for lang_tag, filename in candidates:
            if lang_tag.startswith(prefix.lower()):
                return filename
    return None


def find_subtitle_files(
    directory: str,
    video_id: str,
    source_priority: Iterable[str] = DEFAULT_SOURCE_PRIORITY,
    target_prefixes: Iterable[str] = DEFAULT_TARGET_PREFIXES
) -> SubtitleFiles:
    """
    Chooses the source and target subtitle files for a video.

    The source is the first language in `source_priority` that has a file
    (so 'ja' wins over 'en' by default); the target is the first file whose
    language tag starts with one of `target_prefixes`. Among several files for
    the same language the alphabetically first name wins.
    """
    candidates = []
    for filename in _list_entries(directory):
        parsed = split_subtitle_name(filename)
        if parsed is None or parsed[0] != video_id or parsed[1] == MERGED_TAG:
            continue
        logger.debug(f"Found subtitle file: {filename} (Lang: {parsed[1]})")
        candidates.append((parsed[1], filename))

    source = _pick(candidates, source_priority)
    target = _pick(candidates, target_prefixes)
    return SubtitleFiles(
        source=os.path.join(directory, source) if source else None,
        target=os.path.join(directory, target) if target else None
    )


def list_video_ids(directory: str) -> List[str]:
    """Returns the sorted, distinct video ids that have subtitle files in a directory."""
    video_ids = set()
    for filename in _list_entries(directory):
        parsed = split_subtitle_name(filename)
        if parsed is not None and parsed[1] != MERGED_TAG:
            video_ids.add(parsed[0])
    return sorted(video_ids)


def merged_path(output_dir: str, video_id: str, format_name: str) -> str:
    return os.path.join(output_dir, f"{video_id}.{MERGED_TAG}.{format_name}")


def save_merged(output_dir: str, video_id: str, result: PipelineResult) -> str:
    """
    Writes a pipeline result to '<output_dir>/<video_id>.merged.<ext>'.

    Returns:
        The path written.

    Raises:
        FormattingError: If the file cannot be written.
        FileSystemError: If the output directory is invalid.
    """
    path = merged_path(output_dir, video_id, result.format_name)
    SubtitleRenderer(result.format_name).write(result.cues, path)
    return path
