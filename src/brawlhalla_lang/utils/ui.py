"""Console output for the command line: summaries and error panels."""

from __future__ import annotations

from typing import Optional, Sequence, TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.diagnostics import CONFIG_ENTRY, MISSING_VALUE

if TYPE_CHECKING:
    from ..core.pipeline import ExportResult
    from ..core.registry import LanguageDescriptor

console = Console()


def show_error(message: str, title: str = "错误 / Error", out: Optional[Console] = None) -> None:
    """Show a fatal error."""
    text = Text()
    text.append(f"❌ {message}", style="red")
    (out or console).print(Panel(text, title=title, border_style="red"))


def show_languages(languages: Sequence["LanguageDescriptor"], out: Optional[Console] = None) -> None:
    """List accepted languages in column order."""
    table = Table(title="Languages")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("ID", justify="right")
    for i, lang in enumerate(languages, 1):
        table.add_row(str(i), Text(lang.name), str(lang.id))
    (out or console).print(table)


def show_summary(result: "ExportResult", out: Optional[Console] = None) -> None:
    """
    Print per-language coverage after an export.

    Args:
        result: finished export run
        out: console to print to (module console by default)
    """
    out = out or console
    total_keys = len(result.table.rows) if result.table is not None else 0
    failed = {lang.id for lang in result.failed_languages}

    table = Table(title=f"导出完成 / Export complete: {total_keys} keys")
    table.add_column("Language", style="cyan")
    table.add_column("ID", justify="right")
    table.add_column("Entries", justify="right")
    table.add_column("Missing", justify="right")
    table.add_column("Status")

    missing_by_lang: dict[str, int] = {}
    for diag in result.diagnostics.of_kind(MISSING_VALUE):
        missing_by_lang[diag.language] = missing_by_lang.get(diag.language, 0) + 1

    for lang in result.languages:
        status = "[red]decode failed[/red]" if lang.id in failed else "[green]ok[/green]"
        table.add_row(
            Text(lang.name),
            str(lang.id),
            str(result.entry_counts.get(lang.id, 0)),
            str(missing_by_lang.get(lang.name, 0)),
            status,
        )
    out.print(table)

    counts = result.diagnostics.counts()
    skipped = counts.get(CONFIG_ENTRY, 0)
    if skipped:
        out.print(f"[yellow]⚠️  Skipped {skipped} language declaration(s)[/yellow]")
    if result.output_path is not None:
        out.print(f"[dim]Output: {escape(str(result.output_path))} ({result.bytes_written} bytes)[/dim]")
