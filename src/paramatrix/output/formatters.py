"""Human and JSON rendering of collection reports.

The CLI renders a CollectionReport for humans (Rich tables) or machines
(--json).  Rendering is read-only: it never touches case subjects.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from paramatrix.output.console import create_console, get_output

if TYPE_CHECKING:
    from paramatrix.domain.cases import Case
    from paramatrix.services.result import CollectionReport, ExpansionResult


def case_to_dict(case: Case) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": case.name,
        "ok": case.ok,
        "indices": list(case.combination.indices),
        "values": [repr(v) for v in case.combination.values],
        "test_ids": list(case.test_ids),
    }
    if case.error is not None:
        data["error"] = {
            "code": str(case.error.code),
            "message": case.error.message,
            "detail": case.error.detail,
        }
    return data


def result_to_dict(result: ExpansionResult) -> dict[str, Any]:
    data: dict[str, Any] = {
        "ok": result.ok,
        "declaration": result.declaration,
        "cases": [case_to_dict(c) for c in result.cases],
        "warnings": list(result.warnings),
    }
    if result.error is not None:
        data["error"] = result.error.model_dump()
    if result.meta:
        data["meta"] = result.meta
    return data


def report_to_dict(report: CollectionReport) -> dict[str, Any]:
    return {
        "subject": report.subject,
        "ok": report.ok,
        "case_count": report.case_count,
        "failure_count": report.failure_count,
        "declarations": [result_to_dict(r) for r in report.results],
    }


def format_reports(
    reports: list[CollectionReport],
    *,
    json_output: bool = False,
    quiet: bool = False,
    no_color: bool = False,
) -> str:
    """Format collection reports for display.

    Args:
        reports: One report per subject type.
        json_output: If True, return JSON; otherwise return Rich-rendered text.
        quiet: Human mode only; print failures and the summary line.
        no_color: Disable ANSI escape codes.
    """
    if json_output:
        return _json.dumps([report_to_dict(r) for r in reports], indent=2, default=str)

    console = create_console(no_color=no_color)
    for report in reports:
        console.print(f"[pmx.subject]{escape(report.subject)}[/]")
        for result in report.results:
            _render_result(console, result, quiet=quiet)

    cases = sum(r.case_count for r in reports)
    failures = sum(r.failure_count for r in reports)
    style = "pmx.ok" if failures == 0 else "pmx.error"
    console.print(f"[{style}]{cases} case(s), {failures} failure(s)[/]")
    return get_output(console).rstrip("\n")


def _render_result(console: Console, result: ExpansionResult, *, quiet: bool) -> None:
    source = escape(result.declaration)
    if not result.ok:
        assert result.error is not None
        console.print(
            f"  [pmx.error]ERROR[/] [pmx.source]{source}[/] "
            f"{escape(result.error.code)}: {escape(result.error.message)}"
        )
        return

    meta = result.meta or {}
    if not quiet:
        console.print(
            f"  [pmx.source]{source}[/] [pmx.dim]({meta.get('mode', '?')}, "
            f"{meta.get('strategy', '?')}, {len(result.cases)} case(s))[/]"
        )
    shown = result.failed_cases if quiet else result.cases
    if shown:
        table = Table(show_header=not quiet, box=None, padding=(0, 2, 0, 4))
        table.add_column("Case", style="pmx.case")
        table.add_column("Operations", style="pmx.operation")
        table.add_column("Status")
        for case in shown:
            if case.error is None:
                status = "[pmx.ok]ok[/]"
            else:
                status = f"[pmx.error]{escape(case.error.message)}[/]"
            table.add_row(escape(case.name), ", ".join(case.operations), status)
        console.print(table)
    for warning in result.warnings:
        console.print(f"    [pmx.warning]WARNING[/] {escape(warning)}")
