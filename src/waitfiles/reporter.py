"""Reporting of outcomes to the user.

Resolved paths go to stdout as ``"<path> exists!"`` lines so pipelines can
consume them. Failures and the partial-failure summary go to stderr.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from waitfiles.logging import get_logger
from waitfiles.outcome import Failed, Outcome, Resolved

if TYPE_CHECKING:
    from waitfiles.coordinator import CompletionSummary

log = get_logger("reporter")


class Reporter:
    """Prints outcomes as they arrive and the final signal."""

    def __init__(self, out: TextIO | None = None, console: Console | None = None) -> None:
        self._out = out
        self._console = console or Console(stderr=True, highlight=False, soft_wrap=True)

    def report(self, outcome: Outcome) -> None:
        if isinstance(outcome, Resolved):
            self.resolved(outcome)
        else:
            self.failed(outcome)

    def resolved(self, outcome: Resolved) -> None:
        print(outcome, file=self._out or sys.stdout, flush=True)

    def failed(self, outcome: Failed) -> None:
        self._console.print(f"[red]{escape(str(outcome))}[/red]")

    def finished(self, summary: CompletionSummary) -> None:
        """Emit the final signal once every waiter has been joined."""
        if summary.all_resolved:
            log.info("all files now exist")
            return

        log.error(
            "%d of %d paths resolved, %d failed",
            len(summary.resolved),
            summary.requested,
            len(summary.failed),
        )
        table = Table(title="Unresolved paths", title_justify="left")
        table.add_column("Path", style="bold")
        table.add_column("Error", style="red")
        for outcome in summary.failed:
            table.add_row(escape(str(outcome.path)), escape(str(outcome.error)))
        self._console.print(table)

