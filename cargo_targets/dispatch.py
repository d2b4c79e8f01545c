"""Target dispatcher: run a target's commands in order, stop at first failure"""

import shutil
import subprocess

from rich.console import Console
from rich.markup import escape

from .errors import (
    CleanError,
    CommandFailedError,
    TargetCycleError,
    ToolNotFoundError,
    UnknownTargetError,
)
from .targets import TARGETS, RemoveTree, ToolCommand


class Dispatcher:
    """Executes targets from a static table against one configuration

    Nothing is remembered between calls to `run`: every request re-runs the
    target's dependencies and commands.
    """

    def __init__(self, config, targets=TARGETS, console=None, runner=subprocess.run):
        self.config = config
        self.targets = targets
        self.console = console or Console(stderr=True)
        self.runner = runner

    def resolve(self, name):
        """Return the target called `name`

        Raises:
            UnknownTargetError: If the table has no such target
        """
        try:
            return self.targets[name]
        except KeyError:
            raise UnknownTargetError(name, list(self.targets)) from None

    def plan(self, name):
        """Flatten `name` and its dependencies into an ordered command list

        Dependencies come first, depth first, in sorted order.
        """
        steps = []
        self._collect(self.resolve(name), steps, ())
        return steps

    def _collect(self, target, steps, stack):
        if target.name in stack:
            raise TargetCycleError((*stack, target.name))
        for dep in sorted(target.dependencies):
            self._collect(self.resolve(dep), steps, (*stack, target.name))
        steps.extend(target.commands)

    def run(self, name):
        """Run target `name`

        Raises:
            UnknownTargetError: Before anything is spawned
            ToolNotFoundError: Before anything is spawned
            CommandFailedError: On the first failing command
            CleanError: If the build directory can't be removed
        """
        steps = self.plan(name)

        if any(isinstance(step, ToolCommand) for step in steps):
            self.check_tool()

        for step in steps:
            if isinstance(step, RemoveTree):
                self.remove_build_dir()
            else:
                self.execute(step)

    def check_tool(self):
        if shutil.which(self.config.tool) is None:
            raise ToolNotFoundError(self.config.tool)

    def execute(self, command):
        argv = command.argv(self.config.tool)
        line = command.describe(self.config)
        self.console.print(f"[green]executing {escape(line)}[/green]", highlight=False)
        try:
            proc = self.runner(argv, check=False)
        except (FileNotFoundError, PermissionError) as e:
            raise ToolNotFoundError(self.config.tool) from e
        if proc.returncode != 0:
            raise CommandFailedError(line, proc.returncode)

    def remove_build_dir(self):
        build_dir = self.config.build_dir
        if not build_dir.exists() and not build_dir.is_symlink():
            self.console.print(f"[dim]nothing to clean at {escape(str(build_dir))}[/dim]", highlight=False)
            return

        self.console.print(f"[green]removing {escape(str(build_dir))}[/green]", highlight=False)
        try:
            if build_dir.is_dir() and not build_dir.is_symlink():
                shutil.rmtree(build_dir)
            else:
                build_dir.unlink()
        except FileNotFoundError:
            # removed concurrently; the end state is the same
            pass
        except OSError as e:
            raise CleanError(f"Failed to remove {build_dir}: {e.strerror or e}") from e
