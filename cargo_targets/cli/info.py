"""Target listing"""

from rich.console import Console
from rich.table import Table

from ..targets import DEFAULT_TARGET

console = Console()


def print_target_table(targets, config, out=None):
    """Print every target with its dependencies and rendered commands"""
    out = out or console

    table = Table(
        title="🎯 Targets",
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Target", style="cyan")
    table.add_column("Depends on", style="dim")
    table.add_column("Commands")
    table.add_column("Default", justify="center")

    for name, target in targets.items():
        commands = "\n".join(cmd.describe(config) for cmd in target.commands) or "[dim]-[/dim]"
        deps = ", ".join(sorted(target.dependencies)) or "-"
        is_default = "⭐" if name == DEFAULT_TARGET else ""
        table.add_row(name, deps, commands, is_default)

    out.print(table)
    out.print(f"\n[dim]Tool:[/dim] {config.tool}")
    out.print(f"[dim]Build directory:[/dim] {config.build_dir}\n")
