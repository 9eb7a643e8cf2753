"""jikan - cli timesheet.

Usage:
    jikan display -p acme -m 4
    jikan set -p acme -d 2024-04-01 -t 8
    jikan print -p acme -d 2024-04-15
"""
import argparse
import logging
import sys
from datetime import date
from typing import List, Optional, Protocol

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from . import __version__
from .config import Settings, load_config
from .errors import JikanError
from .models import MonthKey
from .render import CalendarRenderer, print_calendar
from .store import TimesheetStore

logger = logging.getLogger(__name__)


class ParameterResolver(Protocol):
    """Supplies values the user left off the command line."""

    def project(self) -> str:
        ...

    def day(self, default: date) -> date:
        ...

    def hours(self) -> int:
        ...


class PromptResolver:
    """Asks for missing parameters on the terminal."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def project(self) -> str:
        while True:
            name = Prompt.ask("Project name", console=self.console).strip()
            if name:
                return name

    def day(self, default: date) -> date:
        while True:
            answer = Prompt.ask("Date", default=default.isoformat(), console=self.console)
            try:
                return date.fromisoformat(answer.strip())
            except ValueError:
                self.console.print("[red]Please enter a date as YYYY-MM-DD[/red]")

    def hours(self) -> int:
        while True:
            value = IntPrompt.ask("Hours spent working", console=self.console)
            if value >= 0:
                return value
            self.console.print("[red]Hours can't be negative[/red]")


# =============================================================================
# Argument types
# =============================================================================

def iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def month_number(value: str) -> int:
    try:
        month = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid month '{value}'")
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month must be 1-12, got {month}")
    return month


def hours_value(value: str) -> int:
    try:
        hours = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid hours '{value}', expected a whole number")
    if hours < 0:
        raise argparse.ArgumentTypeError("hours can't be negative")
    return hours


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jikan",
        description="jikan - cli timesheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  display (d)  Show a month's calendar
  set (s)      Record hours for a day
  print (p)    Dump the stored file for a month

Examples:
  jikan set -p acme -t 8
  jikan display -p acme -m 4
""",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"jikan (version {__version__})"
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command")

    for name, alias, help_text in (
        ("display", "d", "Show a month's calendar"),
        ("print", "p", "Dump the stored timesheet file"),
    ):
        sub = subparsers.add_parser(name, aliases=[alias], help=help_text)
        sub.add_argument("-p", "--project", help="Project name")
        when = sub.add_mutually_exclusive_group()
        when.add_argument("-d", "--date", type=iso_date, help="Any date in the month (YYYY-MM-DD)")
        when.add_argument("-m", "--month", type=month_number, help="Month of the current year (1-12)")

    set_parser = subparsers.add_parser("set", aliases=["s"], help="Record hours for a day")
    set_parser.add_argument("-p", "--project", help="Project name")
    set_parser.add_argument("-d", "--day", type=iso_date, help="Day (YYYY-MM-DD), default today")
    set_parser.add_argument("-t", "--hours", type=hours_value, help="Hours spent working")

    return parser


# =============================================================================
# Commands
# =============================================================================

def target_date(args, today: date) -> date:
    if args.date is not None:
        return args.date
    if args.month is not None:
        return today.replace(day=1, month=args.month)
    return today


def resolve_project(args, settings: Settings, resolver: ParameterResolver) -> str:
    if args.project:
        return args.project
    if settings.default_project:
        return settings.default_project
    return resolver.project()


def show_month(store: TimesheetStore, key: MonthKey, console: Console):
    record = store.load(key)
    lines = CalendarRenderer().render(key.first_day, record)
    print_calendar(console, lines)


def handle_display(args, store, settings, resolver, today, console):
    project = resolve_project(args, settings, resolver)
    show_month(store, MonthKey.for_date(project, target_date(args, today)), console)


def handle_print(args, store, settings, resolver, today, console):
    project = resolve_project(args, settings, resolver)
    key = MonthKey.for_date(project, target_date(args, today))
    console.out(store.read_raw(key), end="", highlight=False)


def handle_set(args, store, settings, resolver, today, console):
    project = resolve_project(args, settings, resolver)
    day = args.day if args.day is not None else resolver.day(today)
    hours = args.hours if args.hours is not None else resolver.hours()

    key = MonthKey.for_date(project, day)
    store.record_day(key, day, hours)
    logger.info(f"{key}: {day.isoformat()} = {hours}h")
    show_month(store, key, console)


HANDLERS = {
    "display": handle_display,
    "d": handle_display,
    "print": handle_print,
    "p": handle_print,
    "set": handle_set,
    "s": handle_set,
}


def setup_logging(level: str):
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def report_error(error: JikanError):
    Console(stderr=True).print(f"❌ {error}", markup=False, highlight=False, soft_wrap=True)


def main(
    argv: Optional[List[str]] = None,
    resolver: Optional[ParameterResolver] = None,
    today: Optional[date] = None,
    console: Optional[Console] = None,
    settings: Optional[Settings] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if settings is None:
        try:
            settings = load_config()
        except JikanError as e:
            report_error(e)
            return 1
    setup_logging("DEBUG" if args.verbose else settings.log_level)

    if args.command is None:
        parser.print_help(sys.stderr)
        return 0

    console = console or Console()
    resolver = resolver or PromptResolver(console)
    today = today or date.today()
    store = TimesheetStore(settings.data_dir)
    logger.debug(f"Data directory: {settings.data_dir}")

    try:
        HANDLERS[args.command](args, store, settings, resolver, today, console)
    except JikanError as e:
        logger.debug("Command failed", exc_info=True)
        report_error(e)
        return 1

    return 0


def run():
    sys.exit(main())


if __name__ == '__main__':
    run()
