"""Dispatcher error types

Every error carries the process exit status the CLI terminates with.
"""

import signal

__all__ = [
    'DispatchError',
    'ConfigError',
    'UnknownTargetError',
    'ToolNotFoundError',
    'CleanError',
    'TargetCycleError',
    'CommandFailedError',
    'status_from_returncode',
]


EXIT_UNKNOWN_TARGET = 64
EXIT_SOFTWARE = 70
EXIT_CLEAN_FAILED = 74
EXIT_CONFIG = 78
EXIT_TOOL_NOT_FOUND = 127


class DispatchError(Exception):
    exit_code = 1

    def __init__(self, message, exit_code=None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(DispatchError):
    exit_code = EXIT_CONFIG


class UnknownTargetError(DispatchError):
    exit_code = EXIT_UNKNOWN_TARGET

    def __init__(self, name, known):
        super().__init__(
            f"Unknown target '{name}'\n"
            f"Available targets: {', '.join(known)}"
        )
        self.name = name


class ToolNotFoundError(DispatchError):
    exit_code = EXIT_TOOL_NOT_FOUND

    def __init__(self, tool):
        super().__init__(f"Build tool not found on PATH: {tool}")
        self.tool = tool


class TargetCycleError(DispatchError):
    exit_code = EXIT_SOFTWARE

    def __init__(self, path):
        super().__init__(f"Dependency cycle in target table: {' -> '.join(path)}")
        self.path = tuple(path)


class CleanError(DispatchError):
    exit_code = EXIT_CLEAN_FAILED


def status_from_returncode(returncode):
    """Map a subprocess return code to a process exit status

    A negative return code means the child was killed by a signal; the shell
    reports that as 128 + signal number.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class CommandFailedError(DispatchError):

    def __init__(self, command, returncode):
        self.command = command
        self.returncode = returncode
        if returncode < 0:
            try:
                reason = f"killed by {signal.Signals(-returncode).name}"
            except ValueError:
                reason = f"killed by signal {-returncode}"
        else:
            reason = f"returned {returncode}"
        super().__init__(
            f'Command "{command}" failed, {reason}',
            status_from_returncode(returncode),
        )
