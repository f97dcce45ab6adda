"""
Command-line interface for Columbus Log Converter.

Converts Columbus V-900 CSV track logs and exports track, waypoints and
conversion statistics.
"""

import argparse
import sys
import logging
from pathlib import Path
from typing import List

from . import __version__
from .config import ConversionConfig
from .converter import ColumbusConverter
from .models import ConversionResult
from .parsers import is_columbus_file
from .utils import FileHandler, FormatError


class ConsoleNotifier:
    """Prints user messages to the terminal."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def info(self, message: str) -> None:
        if not self.quiet:
            print(message)

    def warning(self, message: str) -> None:
        print(f"Warning: {message}", file=sys.stderr)


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description="Convert Columbus V-900 GPS/audio logger CSV files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a single track log
  columbus-log-converter 09050819.CSV

  # Convert several logs into a custom output directory
  columbus-log-converter day1.csv day2.csv -o /path/to/output

  # Check which files look like Columbus logs
  columbus-log-converter --input-dir /media/sdcard --check

  # Ignore fix mode and DOP values of extended mode logs
  columbus-log-converter track.csv --ignore-dop
        """
    )

    # Input arguments
    parser.add_argument(
        'files',
        nargs='*',
        help='CSV files to convert'
    )
    parser.add_argument(
        '--input-dir', '-i',
        type=str,
        help='Directory to search for CSV files (alternative to specifying files)'
    )

    # Output arguments
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output directory (default: output)'
    )

    # Configuration arguments
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Configuration file path (JSON format)'
    )

    parser.add_argument(
        '--save-config',
        type=str,
        help='Save current configuration to file'
    )

    # Conversion parameters
    parser.add_argument(
        '--ignore-dop',
        action='store_true',
        help='Ignore fix mode and DOP fields of extended mode records'
    )

    parser.add_argument(
        '--no-summary',
        action='store_true',
        help='Do not print the import summary'
    )

    parser.add_argument(
        '--no-conversion-warnings',
        action='store_true',
        help='Do not warn about date and DOP conversion faults'
    )

    parser.add_argument(
        '--no-missing-audio-warnings',
        action='store_true',
        help='Do not warn about missing audio files'
    )

    parser.add_argument(
        '--force',
        action='store_true',
        help='Convert files even if they do not look like Columbus logs'
    )

    parser.add_argument(
        '--plot',
        action='store_true',
        help='Save a plot of each converted track'
    )

    # Logging and debugging
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    # Validation and info
    parser.add_argument(
        '--check',
        action='store_true',
        help='Only check whether the input files are Columbus logs'
    )

    parser.add_argument(
        '--list-files',
        action='store_true',
        help='List discovered CSV files and exit'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    return parser


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False):
    """Configure logging based on command line arguments."""
    if quiet:
        level = logging.ERROR
    elif debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def discover_log_files(input_dir: str) -> List[str]:
    """Discover CSV files in the specified directory."""
    file_handler = FileHandler()
    return file_handler.find_log_files(input_dir)


def validate_files(files: List[str]) -> List[str]:
    """Validate that input files exist and are readable."""
    valid_files = []

    for file_path in files:
        path = Path(file_path)
        if not path.exists():
            print(f"Warning: File not found: {file_path}", file=sys.stderr)
            continue

        if not path.is_file():
            print(f"Warning: Not a file: {file_path}", file=sys.stderr)
            continue

        valid_files.append(str(path.absolute()))

    return valid_files


def create_config_from_args(args: argparse.Namespace) -> ConversionConfig:
    """Create ConversionConfig from command line arguments."""
    # Start with config file if provided
    if args.config:
        try:
            config = ConversionConfig.from_file(args.config)
        except (OSError, ValueError, TypeError) as e:
            print(f"Error loading config file: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        config = ConversionConfig()

    # Override with command line arguments
    if args.ignore_dop:
        config.ignore_dop_fields = True

    if args.no_summary:
        config.show_summary = False

    if args.no_conversion_warnings:
        config.warn_on_conversion_errors = False

    if args.no_missing_audio_warnings:
        config.warn_on_missing_audio = False

    if args.plot:
        config.create_visualizations = True

    if args.verbose or args.debug:
        config.verbose = True

    if args.output:
        config.output_dir = args.output

    return config


def export_result(result: ConversionResult, config: ConversionConfig,
                  file_handler: FileHandler) -> List[str]:
    """Write the converted data of one file to the output directory."""
    output_dir = Path(config.output_dir)
    stem = result.source_file.stem if result.source_file else "track"
    written = []

    if "csv" in config.output_formats:
        track_path = output_dir / f"{stem}_track.csv"
        waypoint_path = output_dir / f"{stem}_waypoints.csv"
        file_handler.save_csv(result.track_frame(), str(track_path))
        file_handler.save_csv(result.waypoint_frame(), str(waypoint_path))
        written.extend([str(track_path), str(waypoint_path)])

    if "json" in config.output_formats:
        summary_path = output_dir / f"{stem}_summary.json"
        file_handler.save_json(result.to_dict(), str(summary_path))
        written.append(str(summary_path))

    if config.create_visualizations:
        from .utils.visualization import TrackVisualizer

        plot_path = output_dir / f"{stem}_track.png"
        written.append(TrackVisualizer().plot_conversion(result, str(plot_path)))

    return written


def main(argv: List[str] = None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Handle special cases first
    if not args.files and not args.input_dir:
        parser.print_help()
        return 1

    # Ensure only one input method is used
    if args.files and args.input_dir:
        print("Error: Cannot specify both files and --input-dir", file=sys.stderr)
        return 1

    # Setup logging
    setup_logging(args.verbose, args.debug, args.quiet)
    logger = logging.getLogger('columbus_log_converter.cli')

    try:
        # Discover input files
        if args.input_dir:
            logger.info(f"Discovering CSV files in: {args.input_dir}")
            files = discover_log_files(args.input_dir)
            if not files:
                print(
                    f"No CSV files found in directory: {args.input_dir}", file=sys.stderr)
                return 1
        else:
            files = args.files

        # Validate files
        valid_files = validate_files(files)
        if not valid_files:
            print("No valid CSV files to convert", file=sys.stderr)
            return 1

        # Handle list files option
        if args.list_files:
            print("Discovered CSV files:")
            for file_path in valid_files:
                print(f"  {file_path}")
            return 0

        config = create_config_from_args(args)

        # Handle check only option
        if args.check:
            for file_path in valid_files:
                recognized = is_columbus_file(file_path, config.encoding)
                print(f"{file_path}: {'Columbus log' if recognized else 'not recognized'}")
            return 0

        # Save configuration if requested
        if args.save_config:
            config.to_file(args.save_config)
            logger.info(f"Configuration saved to: {args.save_config}")

        file_handler = FileHandler()
        if not file_handler.validate_output_directory(config.output_dir):
            print(
                f"Error: Cannot write to output directory: {config.output_dir}", file=sys.stderr)
            return 1

        converter = ColumbusConverter(config, ConsoleNotifier(quiet=args.quiet))
        failed = 0
        for file_path in valid_files:
            if not args.force and not converter.is_recognized(file_path):
                print(f"Warning: Not a Columbus log, skipping: {file_path}", file=sys.stderr)
                continue

            try:
                result = converter.convert(file_path)
            except FormatError as e:
                print(f"Error: {file_path}: {e}", file=sys.stderr)
                failed += 1
                continue

            written = export_result(result, config, file_handler)
            if not args.quiet:
                print(f"{result.description}")
                for output_path in written:
                    print(f"  {output_path}")

        return 1 if failed else 0

    except KeyboardInterrupt:
        print("\nConversion interrupted by user", file=sys.stderr)
        return 130

    except Exception as e:
        logger.error(f"Conversion failed: {str(e)}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
