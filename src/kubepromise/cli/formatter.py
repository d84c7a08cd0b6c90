# src/kubepromise/cli/formatter.py
from typing import Any, Dict

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

# Initialize the Rich console for high-quality terminal output
console = Console()


class KubeFormatter:
    """
    KubeFormatter: The visual heart of the CLI.
    Responsible for rendering previews, errors and the generation report.
    """

    def print_header(self, subtitle: str, version: str):
        """Renders the KubePromise splash header with themed styling."""
        console.print(Panel.fit(
            f"[bold cyan]KubePromise v{version}[/bold cyan]\n"
            "══════════════════════════════════════════════════════════════════",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    def print_error(self, message: str):
        console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def display_rendered(self, rendered: Dict[str, str]):
        """
        Shows each file a dry run would write, as YAML syntax panels.
        """
        for rel_path, content in rendered.items():
            syntax = Syntax(content.rstrip(), "yaml", theme="monokai", line_numbers=True)
            console.print(Panel(syntax, title=f"[bold green]{rel_path}[/bold green]", border_style="green"))

    def print_final_table(self, result: Dict[str, Any]):
        """
        Builds the table of generated files shown at the end of a run.
        """
        title = "KubePromise Preview" if result["dry_run"] else "KubePromise Generation Report"
        table = Table(title=title, show_lines=True, header_style="bold magenta")
        table.add_column("File Path", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Result", justify="center")

        status = "[yellow]PREVIEW[/yellow]" if result["dry_run"] else "[green]WRITTEN[/green]"
        for rel_path in result["files"]:
            table.add_row(rel_path, status, "✅")

        console.print(table)

    def print_summary(self, result: Dict[str, Any]):
        operator = result["operator"]
        api = result["api"]
        console.print(Panel(
            f"[bold white]Summary Report[/bold white]\n"
            f"════════════════════════════════════════\n"
            f"Source CRD:      {result['crd_name']}\n"
            f"Operator API:    {operator['group']}/{operator['version']}, Kind={operator['kind']}\n"
            f"Promise API:     {api['group']}/{api['version']}, Kind={api['kind']}\n"
            f"Promise CRD:     [green]{result['api_name']}[/green]\n"
            f"Dependencies:    {result['resource_count']} resources\n"
            f"Output:          {result['output_dir']}",
            border_style="dim"
        ))

        if result["dry_run"]:
            console.print("\n[bold cyan]Dry Run Mode:[/bold cyan] No files were written. Re-run without --dry-run to apply.")
