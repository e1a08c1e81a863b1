"""
Report rendering for the terminal.

Turns report models into aligned text tables. The totals row is
set apart from the body with a separating line.
"""

from typing import Iterable

from tabulate import SEPARATING_LINE, tabulate

from budget.models.ledger import Category, FilterResult, StatusReport


STATUS_HEADERS = [
    "Category",
    "Planned Monthly Expense",
    "Actual Expense this Month",
    "Balance",
]
FILTER_HEADERS = ["ID", "Date", "Category", "Amount", "Comment"]
CATEGORY_HEADERS = ["Category", "Planned Monthly Expense"]

TABLE_FORMAT = "simple"


def render_status(report: StatusReport) -> str:
    rows = [[r.category, r.planned, r.actual, r.balance] for r in report.rows]
    totals = report.totals
    rows.append(SEPARATING_LINE)
    rows.append([totals.category, totals.planned, totals.actual, totals.balance])

    lines = [f"Budget status for {report.period.label}", ""]
    lines.append(tabulate(rows, headers=STATUS_HEADERS, tablefmt=TABLE_FORMAT))

    if report.income is not None:
        lines.append("")
        lines.append(
            f"Income: {report.income}  |  Planned: {totals.planned}  |  "
            f"Unallocated: {report.unallocated}"
        )

    return "\n".join(lines)


def render_filter(result: FilterResult) -> str:
    criteria = result.criteria
    header = (
        f"Expenses from {criteria.date_from.isoformat()} to "
        f"{criteria.date_to.isoformat()}, amount {criteria.min_amount}..{criteria.max_amount}"
    )
    if criteria.categories:
        header += f", categories: {', '.join(sorted(criteria.categories))}"

    if not result.matches:
        return f"{header}\n\nNo matching expenses."

    rows = [
        [t.id, t.date.isoformat(), t.category, t.amount, t.comment]
        for t in result.matches
    ]
    rows.append(SEPARATING_LINE)
    rows.append(["TOTAL", f"{result.match_count} expenses", "", result.total, ""])

    return "\n".join([
        header,
        "",
        tabulate(rows, headers=FILTER_HEADERS, tablefmt=TABLE_FORMAT),
    ])


def render_categories(categories: Iterable[Category]) -> str:
    categories = list(categories)
    rows = [[c.name, c.planned_amount] for c in categories]
    rows.append(SEPARATING_LINE)
    rows.append(["TOTAL", sum(c.planned_amount for c in categories)])
    return tabulate(rows, headers=CATEGORY_HEADERS, tablefmt=TABLE_FORMAT)
