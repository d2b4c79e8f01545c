"""Shared fixtures: a stub build tool and a quiet console"""

import io
import json
import stat
import sys
from types import SimpleNamespace

import pytest
from rich.console import Console

from cargo_targets.config import Config

STUB_SOURCE = '''#!{python}
import json
import os
import signal
import sys

with open(os.environ['STUB_LOG'], 'a') as f:
    f.write(json.dumps(sys.argv[1:]) + '\\n')

if sys.argv[1:2] == [os.environ.get('STUB_KILL')]:
    os.kill(os.getpid(), signal.SIGTERM)

fail = os.environ.get('STUB_FAIL', '')
if fail:
    subcommand, _, code = fail.partition(':')
    if sys.argv[1:2] == [subcommand]:
        sys.exit(int(code))
'''


class StubTool:
    """Executable that records each argv it receives, one JSON list per line"""

    def __init__(self, path, log):
        self.path = path
        self.log = log

    def calls(self):
        if not self.log.exists():
            return []
        return [json.loads(line) for line in self.log.read_text().splitlines()]


@pytest.fixture
def stub_tool(tmp_path, monkeypatch):
    bin_dir = tmp_path / 'bin'
    bin_dir.mkdir()
    path = bin_dir / 'stub-cargo'
    path.write_text(STUB_SOURCE.format(python=sys.executable))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log = tmp_path / 'calls.log'
    monkeypatch.setenv('STUB_LOG', str(log))
    monkeypatch.delenv('STUB_FAIL', raising=False)
    monkeypatch.delenv('STUB_KILL', raising=False)
    return StubTool(path, log)


@pytest.fixture
def quiet_console():
    return Console(file=io.StringIO(), width=400)


@pytest.fixture
def config(tmp_path, stub_tool):
    return Config(tool=str(stub_tool.path), build_dir=tmp_path / 'target')


class RecordingRunner:
    """Stand-in for subprocess.run returning preset return codes"""

    def __init__(self, returncodes=None):
        self.returncodes = dict(returncodes or {})
        self.calls = []

    def __call__(self, argv, check=False):
        self.calls.append(list(argv))
        return SimpleNamespace(returncode=self.returncodes.get(argv[1], 0), args=argv)


@pytest.fixture
def recording_runner():
    return RecordingRunner


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    for name in ('CARGO_TARGETS_CONFIG', 'CARGO_TARGETS_TOOL', 'CARGO_TARGET_DIR'):
        monkeypatch.delenv(name, raising=False)
