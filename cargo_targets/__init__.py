"""cargo-targets - build target dispatcher for a cargo workspace"""

__version__ = "0.1.0"

from .config import Config, load_config
from .dispatch import Dispatcher
from .errors import *
from .targets import TARGETS, RemoveTree, Target, ToolCommand
from .cli import main as cli
