#!/usr/bin/env python3
"""
Sublingo Batch Processing Entry Point

Merges the subtitle tracks of every video found in a directory, writing
'<videoId>.merged.<ext>' files into an output folder.
"""

import argparse
import logging
import os
import sys
import time
from typing import Optional, Tuple

# Progress bar library
from tqdm import tqdm

# Import necessary components from the sublingo package
from sublingo.config_loader import ConfigLoader
from sublingo.log_setup import setup_logging
from sublingo.locator import list_video_ids
from sublingo.pipeline import SubtitlePipeline
from sublingo.exceptions import SublingoError, ConfigurationError, FileSystemError
from sublingo.utils import ensure_dir_exists

# Initialize logger for this script
logger = logging.getLogger(__name__)

def process_directory(pipeline: SubtitlePipeline, input_dir: str, output_dir: str) -> Tuple[int, int, int]:
    """
    Runs the pipeline for every video id that has subtitle files in `input_dir`.

    Args:
        pipeline: A configured SubtitlePipeline, shared by all videos.
        input_dir: Directory holding '<videoId>.<lang>.<ext>' files.
        output_dir: Directory receiving the merged files.

    Returns:
        A (processed, empty, failed) tuple of counts.

    Raises:
        FileNotFoundError: If the input directory doesn't exist.
        ValueError: If the input path is not a directory.
    """
    if not os.path.exists(input_dir):
        raise FileNotFoundError(f"Input directory not found: {input_dir}")
    if not os.path.isdir(input_dir):
        raise ValueError(f"Input path is not a directory: {input_dir}")

    video_ids = list_video_ids(input_dir)
    logger.info(f"Found subtitle files for {len(video_ids)} videos in {input_dir}")

    processed = empty = failed = 0
    with tqdm(total=len(video_ids), unit="video", desc="Starting Batch") as pbar:
        for video_id in video_ids:
            pbar.set_description(f"Processing: {video_id[:30]}")
            try:
                result = pipeline.process_video(video_id, input_dir, output_dir)
                if result.is_empty:
                    logger.warning(f"No subtitles produced for {video_id}")
                    empty += 1
                else:
                    processed += 1
            except SublingoError as e:
                logger.error(f"Sublingo failed for video '{video_id}': {e}")
                failed += 1
            finally:
                pbar.update(1) # Increment progress bar regardless of success/failure
    return processed, empty, failed


def resolve_output_dir(input_dir: str, output_dir: Optional[str] = None) -> str:
    """Returns the explicit output directory, or '<input_dir>/merged' next to the inputs."""
    return output_dir or os.path.join(input_dir, "merged")


def run_batch_processing():
    """Parses arguments, sets up, and runs the batch subtitle merge."""
    parser = argparse.ArgumentParser(
        description="Sublingo Batch: merge source/target subtitle tracks for every video in a directory.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "-i", "--input-dir",
        required=True,
        help="Directory containing '<videoId>.<lang>.<srt|vtt>' subtitle files."
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=None,
        help="Directory for merged files. Defaults to '<input-dir>/merged', ignoring the config's output_dir."
    )
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to the configuration YAML file."
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level for console and file output."
    )

    args = parser.parse_args()

    # --- Setup Logging (Initial) ---
    log_level = getattr(logging, args.log_level.upper(), logging.INFO)
    setup_logging(log_level=log_level, log_dir='logs', log_file='sublingo_batch_init.log')

    # --- Load Configuration ---
    try:
        config = ConfigLoader().load_config(args.config)
    except (ConfigurationError, FileNotFoundError) as e:
        logger.critical(f"Failed to load configuration: {e}", exc_info=True)
        sys.exit(1)

    # --- Re-configure Logging (Final) ---
    setup_logging(
        log_level=log_level,
        log_dir=config.get('log_dir', 'logs'),
        log_file=config.get('log_file', 'sublingo_batch.log')
    )
    logger.info("Logging re-configured with settings from config file for batch processing.")

    output_dir = resolve_output_dir(args.input_dir, args.output_dir)
    try:
        ensure_dir_exists(output_dir)
        pipeline = SubtitlePipeline(config=config)
    except (SublingoError, ValueError) as e:
        logger.critical(f"Failed to initialize batch processing: {e}")
        sys.exit(1)

    batch_start_time = time.time()
    logger.info("--- Starting Batch Subtitle Merge ---")
    try:
        processed, empty, failed = process_directory(pipeline, args.input_dir, output_dir)
    except (FileNotFoundError, ValueError, FileSystemError) as e:
        logger.critical(f"Input directory error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Batch process interrupted by user (Ctrl+C). Exiting.")
        sys.exit(1)

    total = processed + empty + failed
    logger.info("--- Batch Subtitle Merge Finished ---")
    logger.info(f"Total time: {time.time() - batch_start_time:.2f} seconds")
    logger.info(f"Successfully processed: {processed}/{total} videos")
    logger.info(f"Without subtitles: {empty}/{total} videos")
    logger.info(f"Failed: {failed}/{total} videos")

    sys.exit(1 if failed > 0 else 0) # Indicate partial failure with exit code


if __name__ == "__main__":
    # Basic check for minimal Python version if necessary
    if sys.version_info < (3, 8):
        sys.stderr.write("Sublingo requires Python 3.8 or later.\n")
        sys.exit(1)

    run_batch_processing()
