"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
status messages, per-pipeline summaries and the dry-run preview. Supports
verbosity levels and the --no-color flag.
"""

from rich.console import Console
from rich.markup import escape

from src.asset_sync.models import FileOutcome, PipelineReport
from src.cli.models import SyncSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.info("Loaded 2 pipeline(s)")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {message}", style="red")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print_pipeline_summary(self, report: PipelineReport) -> None:
        """Display the outcome counts of one pipeline, then any failures.

        Args:
            report: Finished pipeline report
        """
        self.console.print(f"\n[bold]{report.pipeline.capitalize()} → {report.bucket}:[/bold]")

        rows = [
            (FileOutcome.UPLOADED, "[green]↑[/green] Uploaded"),
            (FileOutcome.REFRESHED, "[blue]↻[/blue] Refreshed"),
            (FileOutcome.PRUNED, "[red]✗[/red] Pruned"),
            (FileOutcome.UNCHANGED, "[dim]─[/dim] Unchanged"),
        ]
        for outcome, label in rows:
            count = report.count(outcome)
            if count > 0:
                self.console.print(f"  {label}: {count} file(s)")

        for name in report.failed:
            outcome = report.outcomes[name]
            self.console.print(f"  [red]⚡[/red] {escape(name)}: {outcome.value.replace('_', ' ')}")
            if outcome is FileOutcome.REFRESH_PARTIAL_FAILURE:
                self.console.print(
                    f"    [yellow]removed from {report.bucket} but not re-uploaded; "
                    f"it will be uploaded on the next run[/yellow]"
                )

        if not report.outcomes:
            self.console.print("  [yellow]No files to sync[/yellow]")

    def print_dryrun_summary(self, report: PipelineReport) -> None:
        """Display the actions a pipeline would apply.

        Args:
            report: Dry-run pipeline report
        """
        actions = report.actions
        self.console.print(f"\n[bold]Dry Run - {report.pipeline} → {report.bucket}:[/bold]")

        sections = [
            ("[green]Would upload", actions.to_upload),
            ("[blue]Would refresh", actions.to_refresh),
            ("[red]Would prune", actions.to_prune),
        ]
        for label, names in sections:
            if names:
                self.console.print(f"\n{label} ({len(names)} file(s)):[/]")
                for name in sorted(names):
                    self.console.print(f"  • {escape(name)}")

        if actions.is_empty:
            self.console.print("\n[green]Already in sync. No changes to apply.[/green]")

    def print_summary(self, summary: SyncSummary) -> None:
        """Display the overall status line for the run."""
        changed = summary.uploaded_count + summary.refreshed_count + summary.pruned_count
        if summary.failed_count > 0:
            self.console.print(
                f"\n[red]Sync completed with {summary.failed_count} failed file(s)[/red]"
            )
        elif summary.skipped_count > 0:
            self.console.print(
                f"\n[yellow]Dry run: {summary.skipped_count} change(s) not applied[/yellow]"
            )
        elif changed == 0:
            self.console.print("\n[green]Already in sync. No changes detected.[/green]")
        else:
            self.console.print(f"\n[green]Sync completed successfully ({changed} change(s))[/green]")
