"""Orchestrates the bilingual subtitle pipeline."""

import logging
import os
import time
from typing import List, Optional

from .aligner import Aligner
from .config_loader import ConfigLoader
from .cue_filter import AuxiliaryMerger, CueFilter
from .cue_parser import get_parser
from .exceptions import SubtitleReadError
from .formats import SRT, SubtitleFormat, detect_format, get_format
from .locator import find_subtitle_files, save_merged
from .log_setup import VideoLoggerAdapter
from .models import Cue, PipelineResult, reindex
from .renderer import SubtitleRenderer
from .segmenter import Segmenter
from .timeline import TimelineRepairer


class SubtitlePipeline:
    """
    Turns a source-language and a target-language subtitle file into one
    bilingual subtitle track.

    Stages: parse -> filter -> align -> (merge auxiliary) -> repair gaps
    -> (segment) -> render. Each run owns its cue lists; nothing is shared
    between runs.
    """

    def __init__(self, config: Optional[dict] = None, logger: Optional[logging.Logger] = None):
        """
        Initializes the SubtitlePipeline.

        Args:
            config: Settings overlaid on config_loader.DEFAULT_CONFIG.
            logger: Optional logger handed to every stage.

        Raises:
            ConfigurationError: If a setting is invalid.
        """
        self.config = ConfigLoader().with_defaults(config)
        self.logger = logger or logging.getLogger(__name__)

    def process(
        self,
        source_path: Optional[str],
        target_path: Optional[str],
        video_id: Optional[str] = None
    ) -> PipelineResult:
        """
        Runs every stage for one pair of files.

        A missing or unreadable file contributes an empty track; the remaining
        stages still run. Both tracks empty yields an empty result, not an error.

        Args:
            source_path: Source-language subtitle file (anchors the timing), or None.
            target_path: Target-language subtitle file supplying translations, or None.
            video_id: Optional id used to tag log messages.

        Returns:
            The rendered text and the final cue list.
        """
        log = VideoLoggerAdapter(self.logger, video_id) if video_id else self.logger
        output_format = self._resolve_format(source_path, target_path)

        source = self._load(source_path, "source", log)
        target = self._load(target_path, "target", log)

        cue_filter = CueFilter(logger=log)
        source = reindex(cue_filter.filter(source))
        target = reindex(cue_filter.filter(target))

        Aligner(tolerance_ms=self.config['align_tolerance_ms'], logger=log).align(source, target)

        if self.config['merge_auxiliary']:
            source = AuxiliaryMerger(logger=log).merge(source)

        TimelineRepairer(logger=log).repair(source)

        if self.config['segment']:
            segmenter = Segmenter(
                max_len=self.config['max_chars_per_segment'],
                lookback=self.config['split_lookback_chars'],
                snap_radius=self.config['translation_snap_radius'],
                logger=log
            )
            source = segmenter.segment(source)

        rendered = SubtitleRenderer(output_format, logger=log).render(source)
        if not source:
            log.info("No subtitles available after processing")

        return PipelineResult(
            rendered=rendered,
            format_name=output_format.name,
            cues=source,
            source_path=source_path,
            target_path=target_path
        )

    def process_video(self, video_id: str, subtitle_dir: str, output_dir: Optional[str] = None) -> PipelineResult:
        """
        Locates the source/target files for a video id, processes them and,
        when `output_dir` is given and there is something to write, saves
        '<video_id>.merged.<ext>' there.

        Raises:
            FormattingError: If the merged file cannot be written.
            FileSystemError: If the output directory is invalid.
        """
        start_time = time.time()
        log = VideoLoggerAdapter(self.logger, video_id)
        log.info("--- Starting subtitle merge ---")

        files = find_subtitle_files(
            subtitle_dir,
            video_id,
            source_priority=self.config['source_lang_priority'],
            target_prefixes=self.config['target_lang_prefixes']
        )
        if files.source:
            log.info(f"Using Source: {os.path.basename(files.source)}")
        if files.target:
            log.info(f"Using Target: {os.path.basename(files.target)}")

        result = self.process(files.source, files.target, video_id=video_id)

        if output_dir and not result.is_empty:
            save_merged(output_dir, video_id, result)

        log.info(f"--- Finished in {time.time() - start_time:.2f} seconds with {len(result.cues)} cues ---")
        return result

    def _resolve_format(self, source_path: Optional[str], target_path: Optional[str]) -> SubtitleFormat:
        if self.config['output_format']:
            return get_format(self.config['output_format'])
        return detect_format(source_path) or detect_format(target_path) or SRT

    def _load(self, path: Optional[str], side: str, log) -> List[Cue]:
        if not path:
            log.info(f"No {side} subtitle file")
            return []
        if not os.path.isfile(path):
            log.warning(f"The {side} subtitle file does not exist: {path}")
            return []

        fmt = detect_format(path)
        if fmt is None:
            log.warning(f"Unrecognized extension for {path}, parsing as {SRT.name.upper()}")
            fmt = SRT

        try:
            return get_parser(fmt, logger=log).parse_file(path)
        except SubtitleReadError as e:
            log.warning(f"Continuing without {side} subtitles: {e}")
            return []
