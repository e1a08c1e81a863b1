"""
Budget CLI - Command-line interface.

Usage:
    budget create [--config budget.yaml]        # (Re)create the ledger
    budget add -c car -a 10000 -m fuel          # Record an expense (today)
    budget add --date 2024-06-05 --category car --amount 10000 --comment fuel
    budget status                               # Planned vs actual, this month
    budget filter --from 2024-06-01 --category car --category food --min 100
    budget categories                           # List planned categories

Every command exits with status 0 on success and 1 on any reported error,
including usage errors.
"""

import argparse
import sys
from datetime import date
from typing import Optional, Sequence

import structlog

from budget import __version__
from budget.audit import AuditLogger, configure_logging, create_correlation_id
from budget.config import LedgerSettings, get_settings
from budget.errors import LedgerError
from budget.models.ledger import FilterCriteria, Period
from budget.orchestrator import create_app_components
from budget.presentation import render_categories, render_filter, render_status
from budget.validation import check_amount, parse_date


class LedgerArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with the same exit status as every other error."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = LedgerArgumentParser(
        prog="budget",
        description="Budget is a minimal budgeting app",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--db", dest="db_path", help="Ledger database file (overrides BUDGET_DB_PATH)")
    parser.add_argument("--config", dest="config_path", help="Budget YAML document (overrides BUDGET_CONFIG_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    create = subparsers.add_parser(
        "create",
        help="Create new budget",
        description="Create a new budget from the YAML document. Replaces any existing ledger.",
    )
    create.add_argument("config_file", nargs="?", help="Budget YAML document (defaults to --config)")

    add = subparsers.add_parser(
        "add",
        help="Add new expense",
        description=(
            "Add new expense with the following details: date, category, amount, comment. "
            "The date defaults to today."
        ),
    )
    add.add_argument("-d", "--date", dest="date", help="Date of the expense in YYYY-MM-DD format")
    add.add_argument("-c", "--category", required=True, help="Category of the expense")
    add.add_argument("-a", "--amount", type=int, required=True, help="Expense amount")
    add.add_argument("-m", "--comment", default="", help="Additional information")

    subparsers.add_parser(
        "status",
        help="Provide actual status of your expenses",
        description="Compare spending this month against your monthly plan.",
    )

    filt = subparsers.add_parser(
        "filter",
        help="List expenses matching date, category and amount filters",
        description="Defaults: from the first day of this month to today, amounts 0..100000.",
    )
    filt.add_argument("--from", dest="date_from", help="First date to include (YYYY-MM-DD)")
    filt.add_argument("--to", dest="date_to", help="Last date to include (YYYY-MM-DD)")
    filt.add_argument(
        "-c", "--category", dest="categories", action="append", default=[],
        help="Category to include (repeatable; default: all)",
    )
    filt.add_argument("--min", dest="min_amount", type=int, help="Smallest amount to include")
    filt.add_argument("--max", dest="max_amount", type=int, help="Largest amount to include")

    subparsers.add_parser("categories", help="List planned categories")

    return parser


def resolve_settings(args: argparse.Namespace, base: Optional[LedgerSettings] = None) -> LedgerSettings:
    """Apply command-line path overrides on top of the environment settings."""
    settings = base or get_settings()
    overrides = {}
    if args.db_path:
        overrides["db_path"] = args.db_path
    if args.config_path:
        overrides["config_path"] = args.config_path
    if not overrides:
        return settings
    return LedgerSettings.model_validate({**settings.model_dump(), **overrides})


def build_filter_criteria(
    args: argparse.Namespace,
    settings: LedgerSettings,
    today: date,
) -> FilterCriteria:
    """Turn parsed `filter` flags into the explicit criteria struct."""
    date_from = parse_date(args.date_from) if args.date_from else today.replace(day=1)
    date_to = parse_date(args.date_to) if args.date_to else today
    min_amount = args.min_amount if args.min_amount is not None else settings.default_min_amount
    max_amount = args.max_amount if args.max_amount is not None else settings.default_max_amount
    check_amount(min_amount)
    check_amount(max_amount)

    return FilterCriteria(
        date_from=date_from,
        date_to=date_to,
        categories=args.categories,
        min_amount=min_amount,
        max_amount=max_amount,
    )


def run_command(args: argparse.Namespace, settings: LedgerSettings, today: date) -> None:
    setup_flow, entry_flow, report_flow = create_app_components(settings)
    correlation_id = create_correlation_id()

    if args.command == "create":
        config_path = args.config_file or settings.config_path
        categories = setup_flow.create_from_file(config_path, correlation_id=correlation_id)
        print(f"Budget with {len(categories)} categories set up at: {settings.db_path}")

    elif args.command == "add":
        stored = entry_flow.add_expense(
            date_text=today if args.date is None else args.date,
            category=args.category,
            amount=args.amount,
            comment=args.comment,
            correlation_id=correlation_id,
        )
        print(
            f"Added expense #{stored.id}: {stored.date.isoformat()} "
            f"{stored.category} {stored.amount}"
        )

    elif args.command == "status":
        report = report_flow.status(Period.current(today), correlation_id=correlation_id)
        print(render_status(report))

    elif args.command == "filter":
        criteria = build_filter_criteria(args, settings, today)
        result = report_flow.filter(criteria, correlation_id=correlation_id)
        print(render_filter(result))

    elif args.command == "categories":
        print(render_categories(report_flow.categories()))


def main(
    argv: Optional[Sequence[str]] = None,
    settings: Optional[LedgerSettings] = None,
    today: Optional[date] = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = resolve_settings(args, settings)
    configure_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        json_output=settings.log_json,
    )
    structlog.get_logger(__name__).debug(
        "command_started",
        command=args.command,
        db_path=str(settings.db_path),
    )

    try:
        run_command(args, settings, today or date.today())
    except LedgerError as e:
        AuditLogger().log_command_failed(args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
