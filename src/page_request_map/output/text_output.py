"""
Human-readable text output formatter.
"""

from io import StringIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from page_request_map.models.descriptor import ServiceGroupMap
from page_request_map.models.report import PageRequestReport
from page_request_map.output.formatters import BaseFormatter, register_formatter

_METHOD_STYLES = {
    "GET": "green",
    "POST": "yellow",
    "PUT": "blue",
    "PATCH": "cyan",
    "DELETE": "red",
}


@register_formatter("text")
class TextFormatter(BaseFormatter):
    """
    Format output as human-readable text using Rich.
    """

    colorize = True

    def _method_style(self, method: str) -> str:
        """Get the style for an HTTP method."""
        if not self.colorize:
            return ""
        return _METHOD_STYLES.get(method.upper(), "magenta")

    def _console(self, output: StringIO) -> Console:
        return Console(file=output, force_terminal=self.colorize, width=120)

    def format(self, report: PageRequestReport) -> str:
        """Format a page request report as text."""
        output = StringIO()
        console = self._console(output)

        # Header
        console.print()
        console.print(
            Panel.fit(
                "[bold]Page Request Map[/bold]\n"
                "Resolution Report",
                border_style="blue",
            )
        )
        console.print()

        # Summary
        console.print("[bold]Summary[/bold]")
        console.print(f"  Source Root: {report.src_root}")
        console.print(f"  Files: {report.total_files}")
        console.print(f"  Service Groups: {report.service_groups}")
        console.print(f"  Pages: {report.page_count}")
        console.print(f"  Distinct Requests: {report.request_count}")
        if report.duration_ms:
            console.print(f"  Resolution Time: {report.duration_ms:.2f}ms")
        console.print()

        entries = [
            entry for entry in report.entries
            if entry.requests or not self.config.omit_empty
        ]
        if entries:
            table = Table(title="Page Requests", show_header=True, header_style="bold")
            table.add_column("Page", style="cyan")
            table.add_column("Method")
            table.add_column("URL", style="green")
            table.add_column("Function", style="yellow")

            for entry in entries:
                if not entry.requests:
                    table.add_row(entry.page, "", "[dim]none[/dim]", "")
                    continue
                for index, descriptor in enumerate(entry.requests):
                    style = self._method_style(descriptor.method)
                    method = f"[{style}]{descriptor.method}[/{style}]" if style else descriptor.method
                    table.add_row(
                        entry.page if index == 0 else "",
                        method,
                        descriptor.url,
                        descriptor.name,
                    )

            console.print(table)
            console.print()
        else:
            console.print("[dim]No pages use any API requests.[/dim]")
            console.print()

        # Errors and warnings
        if report.errors:
            console.print("[bold red]Errors[/bold red]")
            for error in report.errors:
                console.print(f"  ❌ {error}")
            console.print()

        if report.warnings:
            console.print("[bold yellow]Warnings[/bold yellow]")
            for warning in report.warnings:
                console.print(f"  ⚠️  {warning}")
            console.print()

        return output.getvalue()

    def format_services(self, service_map: ServiceGroupMap) -> str:
        """Format a service map as a table."""
        output = StringIO()
        console = self._console(output)

        if not any(service_map.values()):
            console.print("[dim]No service functions found.[/dim]")
            return output.getvalue()

        table = Table(title="Service Functions", show_header=True, header_style="bold")
        table.add_column("Group", style="cyan")
        table.add_column("Function", style="yellow")
        table.add_column("Method")
        table.add_column("URL", style="green")

        total = 0
        for group, functions in service_map.items():
            for name, descriptor in functions.items():
                style = self._method_style(descriptor.method)
                method = f"[{style}]{descriptor.method}[/{style}]" if style else descriptor.method
                table.add_row(group, name, method, descriptor.url)
                total += 1

        console.print(table)
        console.print(f"\nTotal: {total} functions in {len(service_map)} groups")

        return output.getvalue()
