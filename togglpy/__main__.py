"""Main module for the togglPy package."""
import argparse
import io
import logging
import os
import sys
from datetime import tzinfo
from typing import Optional, Sequence, TextIO

from dotenv import load_dotenv

from . import __version__
from .api.client import DEFAULT_API_URL, TogglClient, TogglRepository
from .commands import DailyCommand, MonthlyCommand
from .errors import ConfigError, TogglPyError, iter_causes
from .reports.presenter import FORMATS, ConsolePresenter
from .utils.date_utils import SystemClock, local_timezone, parse_date, parse_month
from .utils.file_utils import write_markdown
from .utils.log_utils import LEVELS, setup_logging

logger = logging.getLogger("togglpy")


# --- Environment Setup ---
def load_environment():
    """Load environment variables from a .env file in the working directory, if any."""
    env_file = os.path.join(os.getcwd(), '.env')
    if os.path.exists(env_file):
        load_dotenv(env_file)


def get_env_var(key: str) -> str:
    """Get a required environment variable.

    Args:
        key: Environment variable name

    Returns:
        Environment variable value

    Raises:
        ConfigError: If the environment variable is not set
    """
    value = os.getenv(key)
    if not value:
        raise ConfigError(f"{key} must be set in your environment or .env")
    return value


def create_client() -> TogglClient:
    """Create a TogglClient from environment configuration."""
    api_token = get_env_var("TOGGL_API_TOKEN")
    base_url = os.getenv("TOGGL_API_URL") or DEFAULT_API_URL
    timeout = os.getenv("TOGGLPY_TIMEOUT")
    try:
        timeout = float(timeout) if timeout else None
    except ValueError as e:
        raise ConfigError(f"TOGGLPY_TIMEOUT must be a number of seconds, got '{timeout}'") from e
    return TogglClient(api_token, base_url=base_url, timeout=timeout)


# --- CLI Logic ---
def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Summarize Toggl Track time entries by day or month.",
        epilog="""
Examples:
    # List today's time entries
  togglpy daily
    ---
    # List the time entries of a specific day
  togglpy daily --date 2024-01-05
    ---
    # Show hours per project and tag for the current month
  togglpy monthly
    ---
    # Show hours per project and tag for each day of January 2024 as tables
  togglpy monthly --month 2024-01 --daily --format table
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog="togglpy"
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', '--verbosity', choices=list(LEVELS), default='info', help='Log level (default: info)')

    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    output_options = argparse.ArgumentParser(add_help=False)
    output_options.add_argument('--format', dest='fmt', choices=FORMATS, default='list', help='Output format (default: list)')
    output_options.add_argument('--md', help='Export output as markdown to the given file path')
    output_options.add_argument('--overwrite', action='store_true', help='Overwrite the markdown file if it exists instead of appending')

    daily = subparsers.add_parser('daily', parents=[output_options], help="List the time entries of a day")
    daily.add_argument('-d', '--date', help='Date in the format YYYY-MM-DD (default: today)')

    monthly = subparsers.add_parser('monthly', parents=[output_options], help="Total hours by project and tag for a month")
    monthly.add_argument('-m', '--month', help='Month in the format YYYY-MM (default: this month)')
    monthly.add_argument('--daily', action='store_true', help='Show the totals for each day')

    return parser.parse_args(argv)


def run(args: argparse.Namespace, repository: TogglRepository, clock, local_tz: tzinfo,
        output: Optional[TextIO] = None) -> None:
    """Run the selected command and print its report.

    Args:
        args: Parsed arguments
        repository: Source of time entries and projects
        clock: Provides the current instant
        local_tz: Timezone defining days and months
        output: Stream to print to (defaults to stdout)
    """
    output = output if output is not None else sys.stdout
    md_buffer = io.StringIO() if args.md else None
    presenter = ConsolePresenter(local_tz, md_buffer or output, args.fmt)

    if args.command == 'daily':
        date = parse_date(args.date, local_tz) if args.date else None
        entries = DailyCommand(repository, clock, local_tz).run(date)
        presenter.show_time_entries(entries)
        title = f"Time entries of {args.date or clock.now().astimezone(local_tz).date().isoformat()}"
    else:
        month = parse_month(args.month, local_tz) if args.month else None
        command = MonthlyCommand(repository, clock, local_tz)
        if args.daily:
            presenter.show_daily_durations(command.run_daily_duration(month))
        else:
            presenter.show_durations(command.run_monthly_duration(month))
        title = f"Hours of {args.month or clock.now().astimezone(local_tz).strftime('%Y-%m')}"

    if md_buffer:
        write_markdown(args.md, f"\n{md_buffer.getvalue()}\n", title, args.overwrite)
        logger.info("Markdown output written to '%s'", args.md)


def log_error(err: BaseException):
    """Log an error together with every exception that caused it."""
    chain = list(iter_causes(err))
    logger.error("%s", chain[0])
    for cause in chain[1:]:
        logger.error("Caused by: %s: %s", type(cause).__name__, cause)
    logger.debug("Traceback", exc_info=err)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    load_environment()

    try:
        setup_logging(args.verbosity, os.getenv("TOGGLPY_LOG_DIR"))
        run(args, create_client(), SystemClock(), local_timezone())
    except TogglPyError as e:
        log_error(e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
