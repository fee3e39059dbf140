"""Command-Line Interface handler for Sublingo."""

import argparse
import json
import logging
import os
import sys

from .config_loader import ConfigLoader
from .log_setup import setup_logging
from .locator import merged_path, save_merged, split_subtitle_name
from .pipeline import SubtitlePipeline
from .exceptions import SublingoError, ConfigurationError
from .utils import ensure_dir_exists

logger = logging.getLogger(__name__) # Get logger for this module

class CLIHandler:
    """Parses arguments and runs the subtitle pipeline for one video."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Creates the argument parser for the CLI."""
        parser = argparse.ArgumentParser(
            description="Sublingo: merge a source-language and a target-language subtitle track into one bilingual subtitle file.",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
        )
        parser.add_argument(
            "-s", "--source",
            default=None,
            help="Source-language subtitle file (.srt or .vtt). Its timing anchors the output."
        )
        parser.add_argument(
            "-t", "--target",
            default=None,
            help="Target-language subtitle file whose text becomes the translation line."
        )
        parser.add_argument(
            "--video-id",
            default=None,
            help="Locate '<video-id>.<lang>.<ext>' files in the subtitle directory instead of passing paths."
        )
        parser.add_argument(
            "--subtitle-dir",
            default=None, # Default taken from config file
            help="Directory searched when --video-id is given."
        )
        parser.add_argument(
            "-o", "--output-dir",
            default=None, # Default taken from config file
            help="Directory for '<video-id>.merged.<ext>'. Without it the result is printed to stdout."
        )
        parser.add_argument(
            "-c", "--config",
            default=None,
            help="Path to the configuration YAML file. Built-in defaults are used when omitted."
        )
        parser.add_argument(
            "--format",
            default=None,
            choices=["srt", "vtt"],
            help="Output format. Defaults to the format of the input files."
        )
        parser.add_argument(
            "--max-len",
            type=int,
            default=None,
            help="Maximum characters per cue before it is split."
        )
        parser.add_argument(
            "--no-segment",
            action="store_true",
            help="Do not split long cues."
        )
        parser.add_argument(
            "--merge-aux",
            action="store_true",
            help="Fold short filler cues into the preceding cue."
        )
        parser.add_argument(
            "--json",
            action="store_true",
            help="Emit the cue list as JSON: saved next to the merged file, or printed instead of the subtitle text."
        )
        parser.add_argument(
            "--log-level",
            default="INFO",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
            help="Set the logging level for console and file output."
        )
        return parser

    def _apply_overrides(self, args: argparse.Namespace, config: dict) -> dict:
        overrides = {
            'subtitle_dir': args.subtitle_dir,
            'output_dir': args.output_dir,
            'output_format': args.format,
            'max_chars_per_segment': args.max_len,
        }
        for key, value in overrides.items():
            if value is not None:
                logger.info(f"Overriding {key} from config with CLI argument: {value}")
                config[key] = value
        if args.no_segment:
            config['segment'] = False
        if args.merge_aux:
            config['merge_auxiliary'] = True
        return config

    def run(self, argv=None) -> None:
        """Parses arguments, sets up logging, loads config, and runs the pipeline."""
        args = self.parser.parse_args(argv)
        if not (args.source or args.target or args.video_id):
            self.parser.error("pass --source and/or --target, or --video-id")

        log_level = getattr(logging, args.log_level.upper(), logging.INFO)
        # Logs go to stderr when stdout carries the result.
        log_stream = sys.stderr if not args.output_dir else sys.stdout
        setup_logging(log_level=log_level, log_dir='logs', log_file='sublingo_init.log', stream=log_stream)

        # --- Load Configuration ---
        config = {}
        if args.config:
            try:
                config = ConfigLoader().load_config(args.config)
            except ConfigurationError as e:
                logger.critical(f"Failed to load configuration from {args.config}: {e}", exc_info=True)
                sys.exit(1)
            except FileNotFoundError:
                logger.critical(f"Configuration file not found: {args.config}")
                sys.exit(1)

            setup_logging(
                log_level=log_level,
                log_dir=config.get('log_dir', 'logs'),
                log_file=config.get('log_file', 'sublingo.log'),
                stream=log_stream
            )
            logger.info("Logging re-configured with settings from config file.")

        config = self._apply_overrides(args, config)

        try:
            pipeline = SubtitlePipeline(config=config)
            output_dir = pipeline.config['output_dir']

            if args.video_id:
                subtitle_dir = pipeline.config['subtitle_dir']
                if not subtitle_dir:
                    raise ConfigurationError("--video-id needs --subtitle-dir or 'subtitle_dir' in the config")
                video_id = args.video_id
                result = pipeline.process_video(video_id, subtitle_dir, output_dir)
            else:
                video_id = self._video_id_from_paths(args.source, args.target)
                result = pipeline.process(args.source, args.target, video_id=video_id)
                if output_dir and not result.is_empty:
                    save_merged(output_dir, video_id, result)

            if result.is_empty:
                logger.warning("No subtitles were produced.")

            if output_dir:
                if args.json:
                    ensure_dir_exists(output_dir)
                    json_path = os.path.splitext(merged_path(output_dir, video_id, result.format_name))[0] + ".json"
                    with open(json_path, 'w', encoding='utf-8') as f:
                        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
                    logger.info(f"Cue list saved to: {json_path}")
            elif args.json:
                sys.stdout.write(json.dumps(result.to_dict(), ensure_ascii=False, indent=2) + "\n")
            else:
                sys.stdout.write(result.rendered)

            logger.info("Sublingo finished successfully.")
            sys.exit(0)

        except SublingoError as e:
            logger.error(f"A Sublingo error occurred: {e}")
            sys.exit(1)
        except OSError as e:
            logger.error(f"Could not write output: {e}")
            sys.exit(1)
        except KeyboardInterrupt:
            logger.warning("Process interrupted by user (Ctrl+C). Exiting.")
            sys.exit(1)
        except Exception as e:
            logger.critical(f"An unexpected critical error occurred at the top level: {e}", exc_info=True)
            sys.exit(2) # Use a different exit code for unexpected crashes

    @staticmethod
    def _video_id_from_paths(*paths) -> str:
        for path in paths:
            if path:
                parsed = split_subtitle_name(os.path.basename(path))
                if parsed:
                    return parsed[0]
                return os.path.splitext(os.path.basename(path))[0]
        return "subtitles"

def main() -> None:
    CLIHandler().run()
