"""Utility functions for Sublingo."""

import os
import re
import logging
from typing import Optional
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

# [HH:]MM:SS[<sep>mmm], where <sep> is ',' (SRT) or '.' (VTT)
_TIMECODE_RE = re.compile(r"^(?:(\d+):)?(\d{1,2}):(\d{1,2})(?:[.,](\d+))?$")

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def parse_timecode(text: str, logger: Optional[logging.Logger] = None) -> int:
    """
    Parses a subtitle timestamp into integer milliseconds.

    Accepts HH:MM:SS,mmm (SRT) or HH:MM:SS.mmm (VTT), with the hours component
    optional. Anything after the first whitespace (VTT cue settings such as
    'align:start position:0%') is ignored.

    Args:
        text: The timestamp text.
        logger: Where malformed timestamps are reported; defaults to this
                module's logger.

    Returns:
        The offset in milliseconds, or 0 if the timestamp is malformed.
    """
    log = logger or logging.getLogger(__name__)
    tokens = (text or "").split()
    if not tokens:
        log.debug("Empty timestamp, using 0")
        return 0
    match = _TIMECODE_RE.match(tokens[0])
    if not match:
        log.debug(f"Malformed timestamp '{tokens[0]}', using 0")
        return 0
    hours, minutes, seconds, fraction = match.groups()
    millis = int((fraction or "0")[:3].ljust(3, "0"))
    return ((int(hours or 0) * 60 + int(minutes)) * 60 + int(seconds)) * 1000 + millis

def format_timecode(milliseconds: int, separator: str = ",") -> str:
    """
    Formats milliseconds into HH:MM:SS<sep>mmm.

    Args:
        milliseconds: Time offset in milliseconds.
        separator: ',' for SRT, '.' for VTT.

    Returns:
        Formatted time string.
    """
    if milliseconds < 0:
        milliseconds = 0 # Ensure non-negative time
    milliseconds = int(milliseconds)
    hrs = milliseconds // 3600000
    milliseconds %= 3600000
    mins = milliseconds // 60000
    milliseconds %= 60000
    secs = milliseconds // 1000
    milliseconds %= 1000
    return f"{hrs:02d}:{mins:02d}:{secs:02d}{separator}{milliseconds:03d}"
