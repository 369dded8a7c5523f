"""cmdengine: a command registry and dispatcher with authorization levels.

Commands are registered on an Engine under a name, a help string and a
minimum user level. Dispatch takes either an argument vector or a raw
line, which is split with shell-like quoting rules first.
"""

from .commands import CommandGroup, command
from .engine import CommandEntry, Engine, Handler
from .exceptions import (
    CommandAlreadyRegisteredError,
    CommandEngineError,
    CommandLookupError,
    CommandNotFoundError,
    CommandNotRegisteredError,
    ConfigurationError,
    EmptyCommandError,
    InsufficientPrivilegeError,
    TokenizeSyntaxError,
)
from .tokenizer import Tokenizer, split_command

__version__ = "0.1.0"

__all__ = [
    "CommandAlreadyRegisteredError",
    "CommandEngineError",
    "CommandEntry",
    "CommandGroup",
    "CommandLookupError",
    "CommandNotFoundError",
    "CommandNotRegisteredError",
    "ConfigurationError",
    "EmptyCommandError",
    "Engine",
    "Handler",
    "InsufficientPrivilegeError",
    "TokenizeSyntaxError",
    "Tokenizer",
    "command",
    "split_command",
]
