"""Output formatters for scan results."""

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from .. import __version__
from .models import ManifestFinding, ScanResult


class TextReporter:
    """Human-readable output using rich library."""

    def __init__(self, console: Console | None = None):
        """Initialize text reporter with optional console."""
        self.console = console or Console()

    def report(self, result: ScanResult) -> None:
        """
        Generate and print text report.

        Args:
            result: Scan result to report
        """
        # Header
        self.console.print(f"🔍 Lifecycle Audit v{__version__}", style="bold")
        self.console.print(f"Scanning: {escape(str(result.target_path))}")
        self.console.print(f"Manifests: {result.manifests_scanned}\n")

        if not result.findings:
            self.console.print("✅ No lifecycle scripts found", style="green bold")
        else:
            self.console.print(Rule())
            for finding in result.findings:
                self._print_finding(finding)
            self.console.print(Rule())

        if result.manifests_failed:
            self.console.print(
                f"⚠️  {result.manifests_failed} manifest(s) could not be parsed",
                style="yellow",
            )

        # Summary
        summary = result.summary
        hook_parts = [
            f"{count} {name}"
            for name, count in summary.items()
            if name != "total" and count > 0
        ]

        if hook_parts:
            summary_text = f"Summary: {', '.join(hook_parts)} | {summary['total']} package(s) in {result.scan_duration_seconds}s"
        else:
            summary_text = f"Summary: 0 packages in {result.scan_duration_seconds}s"

        self.console.print(summary_text)

    def _print_finding(self, finding: ManifestFinding) -> None:
        """Print single finding."""
        name = finding.name or "<unnamed>"
        version = finding.version or "<no version>"

        self.console.print(f"📦 {escape(name)}@{escape(version)}", style="bold yellow")
        self.console.print(f"   File: {escape(str(finding.path))}", style="yellow")

        for hook, command in finding.scripts.items():
            # Truncate long commands
            if len(command) > 100:
                command = command[:100] + "..."
            self.console.print(f'   {hook}: "{escape(command)}"')

        self.console.print()


class JsonReporter:
    """JSON output for programmatic consumption."""

    def report(self, result: ScanResult) -> str:
        """
        Generate JSON report.

        Args:
            result: Scan result to report

        Returns:
            JSON string
        """
        return result.model_dump_json(indent=2)
