"""Static target table"""

from dataclasses import dataclass, field
from types import MappingProxyType


FORCE = 'force'
DEFAULT_TARGET = 'all'


@dataclass(frozen=True)
class ToolCommand:
    """Invocation of the external tool with a fixed argument list"""
    args: tuple

    def argv(self, tool):
        return [tool, *self.args]

    def describe(self, config):
        return ' '.join(self.argv(config.tool))


@dataclass(frozen=True)
class RemoveTree:
    """Recursive removal of the configured build-output directory"""

    def describe(self, config):
        return f'rm -rf {config.build_dir}'


@dataclass(frozen=True)
class Target:
    name: str
    commands: tuple = ()
    dependencies: frozenset = field(default_factory=frozenset)


def _target(name, *commands):
    return Target(name, tuple(commands), frozenset({FORCE}))


TARGETS = MappingProxyType({
    'all': _target(
        'all',
        ToolCommand(('build', '--all-features')),
        ToolCommand(('test', '--all', '--all-features', '--no-run')),
    ),
    'check': _target(
        'check',
        ToolCommand(('check', '--all-features')),
    ),
    'test': _target(
        'test',
        ToolCommand(('test', '--all', '--all-features', '--', '--nocapture')),
    ),
    'clean': _target(
        'clean',
        RemoveTree(),
    ),
    FORCE: Target(FORCE),
})
