"""CLI entry point for zwift_today."""

import argparse
import logging
import sys
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

from .client import IntervalsClient
from .config import (
    DEFAULT_ENV_FILE, DEFAULT_FORMAT, DOWNLOAD_METHODS, FILE_FORMATS,
    Settings, load_settings, read_environment
)
from .exceptions import ZwiftTodayError
from .utils import today_iso, write_workout_file
from .workout import SelectedWorkout

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of one run."""
    workout: Optional[SelectedWorkout] = None
    path: Optional[Path] = None


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity setting."""
    level = logging.DEBUG if verbose else logging.INFO

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    if verbose:
        formatter = logging.Formatter('[%(levelname)s] %(name)s: %(message)s')
    else:
        formatter = logging.Formatter('%(message)s')

    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def print_progress(message: str) -> None:
    """Print a progress message to stdout."""
    print(message)


def _iso_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD") from e


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='zwift_today',
        description="Download today's cycling workout from intervals.icu as a Zwift file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  INTERVALS_TOKEN   intervals.icu API key (required)
  INTERVALS_ID      intervals.icu athlete ID (required)
  INTERVALS_OUTPUT  default output path

Examples:
  %(prog)s --output ~/Documents/Zwift/Workouts/123456/today.zwo
  %(prog)s --date 2024-05-01 --verbose
  %(prog)s --dry-run
        """
    )

    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=None,
        help=f'Output file (default: $INTERVALS_OUTPUT or ./today.{DEFAULT_FORMAT})'
    )

    parser.add_argument(
        '--date',
        type=_iso_date,
        default=None,
        help='Day to look up as YYYY-MM-DD (default: today)'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=None,
        help='Request timeout in seconds (default: $INTERVALS_TIMEOUT or 30)'
    )

    parser.add_argument(
        '--format',
        dest='file_format',
        choices=FILE_FORMATS,
        default=DEFAULT_FORMAT,
        help=f'Workout file format to download (default: {DEFAULT_FORMAT})'
    )

    parser.add_argument(
        '--download-method',
        choices=DOWNLOAD_METHODS,
        type=str.upper,
        default='GET',
        help='HTTP method for the download request (default: GET)'
    )

    parser.add_argument(
        '--ride-type',
        dest='ride_types',
        action='append',
        default=None,
        help='Activity type counted as cycling; repeat for several '
             '(default: $INTERVALS_RIDE_TYPES or Ride, VirtualRide)'
    )

    parser.add_argument(
        '--base-url',
        default=None,
        help='API origin (default: $INTERVALS_BASE_URL or https://intervals.icu)'
    )

    parser.add_argument(
        '--env-file',
        type=Path,
        default=DEFAULT_ENV_FILE,
        help='dotenv file read for missing variables (default: ./.env)'
    )

    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Look up the workout without downloading it'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    return parser


def run(
    settings: Settings,
    day: str,
    client: Optional[IntervalsClient] = None,
    dry_run: bool = False
) -> RunResult:
    """Look up the day's ride, download it and write it to disk.

    Args:
        settings: Resolved configuration
        day: Date to look up as YYYY-MM-DD
        client: Client to use; one is created (and closed) when omitted
        dry_run: Stop after the lookup

    Returns:
        RunResult with the selected workout and written path, either of
        which is None when the run stopped early

    Raises:
        ZwiftTodayError: On any failed step; later steps are not attempted
    """
    owns_client = client is None
    if owns_client:
        client = IntervalsClient(settings, progress_callback=print_progress)

    try:
        print_progress(f"Todays date is: {day} ... ")
        print_progress("Querying intervals.icu for today's workouts ... ")

        workout = client.find_workout(day)
        if workout is None:
            print_progress("No workout")
            return RunResult()

        if dry_run:
            print_progress(f"Found workout - {workout.name} [ID: {workout.id}]")
            return RunResult(workout=workout)

        print_progress(f"Attempting to download workout - {workout.name} ... ")
        data = client.download_workout(workout.id)

        print_progress(f"Writing workout {workout.name} to file ... ")
        path = write_workout_file(data, settings.output_path)
        print_progress(f"Saved {workout.name} to {path}")
        return RunResult(workout=workout, path=path)

    finally:
        if owns_client:
            client.close()


def main(argv=None) -> int:
    """Main entry point.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success or nothing scheduled, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        settings = load_settings(
            read_environment(args.env_file),
            output_path=args.output,
            base_url=args.base_url,
            timeout=args.timeout,
            ride_types=tuple(args.ride_types) if args.ride_types else None,
            file_format=args.file_format,
            download_method=args.download_method,
        )
        run(settings, args.date or today_iso(), dry_run=args.dry_run)
        return 0

    except ZwiftTodayError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
