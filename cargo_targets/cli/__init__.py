"""Command-line interface for cargo-targets"""

import click
from rich.console import Console
from rich.markup import escape

from ..config import load_config
from ..dispatch import Dispatcher
from ..errors import DispatchError
from ..targets import DEFAULT_TARGET, TARGETS
from .info import print_target_table

console = Console(stderr=True)


@click.command()
@click.argument('target', default=DEFAULT_TARGET)
@click.option('--list', 'list_targets', is_flag=True, help='Show available targets and exit')
@click.version_option(package_name='cargo-targets')
@click.pass_context
def main(ctx, target, list_targets):
    """🦀 Run a build target: all, check, test, clean or force

    \b
    Examples:

    \b
    cargo-targets            # same as: cargo-targets all
    cargo-targets check
    cargo-targets test
    cargo-targets clean
    """
    try:
        config = load_config()
        if list_targets:
            print_target_table(TARGETS, config)
            return
        Dispatcher(config, console=console).run(target)
    except DispatchError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {escape(str(e))}", highlight=False)
        ctx.exit(e.exit_code)

    console.print(f"[bold green]✓[/bold green] {target} finished", highlight=False)


if __name__ == '__main__':
    main()
