"""Exception hierarchy for cmdengine.

Every error the engine raises derives from CommandEngineError, so hosts
can catch engine failures broadly while still telling registration,
lookup, authorization and parsing problems apart. Exceptions raised by
command handlers are never wrapped and do not appear here.
"""

from typing import Any, Optional


class CommandEngineError(Exception):
    """Base exception for all cmdengine errors.

    Attributes:
        message: Human-readable error description.
        module: Originating module name (e.g. "engine").
        context: Arbitrary key-value pairs for structured logging.
    """

    def __init__(
        self,
        message: str = "",
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.module = module
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        return self.message or self.__class__.__name__

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        return f"{cls}({self.message!r}, module={self.module!r})"


# ---------------------------------------------------------------------------
# Registry exceptions
# ---------------------------------------------------------------------------

class CommandLookupError(CommandEngineError):
    """A command name did not resolve the way the caller needed.

    Attributes:
        command: The command name involved.
    """

    def __init__(
        self,
        message: str = "",
        *,
        command: str = "",
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command = command
        super().__init__(message, module=module or "engine", **context)


class CommandAlreadyRegisteredError(CommandEngineError):
    """add_command() was called with a name that is already registered."""

    def __init__(
        self,
        command: str,
        *,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.command = command
        super().__init__(
            f'command "{command}" already registered',
            module=module or "engine",
            **context,
        )


class CommandNotRegisteredError(CommandLookupError):
    """remove_command() or help_for() was called with an unknown name."""

    def __init__(self, command: str, **context: Any) -> None:
        super().__init__(
            f'command "{command}" not registered', command=command, **context
        )


class CommandNotFoundError(CommandLookupError):
    """The first token of a dispatched vector is not a registered command."""

    def __init__(self, command: str, **context: Any) -> None:
        super().__init__(
            f'command "{command}" not found', command=command, **context
        )


# ---------------------------------------------------------------------------
# Dispatch exceptions
# ---------------------------------------------------------------------------

class EmptyCommandError(CommandEngineError):
    """exec() was given an empty argument vector."""

    def __init__(self, message: str = "command args need to be > 0", **context: Any) -> None:
        super().__init__(message, module="engine", **context)


class InsufficientPrivilegeError(CommandEngineError):
    """The caller's level is below the command's minimum level.

    Attributes:
        command: The command that was refused.
        user_level: Level supplied by the caller.
        required_level: Minimum level configured for the command.
    """

    def __init__(
        self,
        command: str,
        user_level: int,
        required_level: int,
        **context: Any,
    ) -> None:
        self.command = command
        self.user_level = user_level
        self.required_level = required_level
        super().__init__(
            f"user level {user_level} not >= {required_level}",
            module="engine",
            **context,
        )


class TokenizeSyntaxError(CommandEngineError):
    """A raw command line has malformed quoting or escaping.

    Attributes:
        line: The line that failed to tokenize.
    """

    def __init__(self, message: str = "", *, line: str = "", **context: Any) -> None:
        self.line = line
        super().__init__(message, module="tokenizer", **context)


# ---------------------------------------------------------------------------
# Configuration exceptions
# ---------------------------------------------------------------------------

class ConfigurationError(CommandEngineError):
    """Invalid configuration value.

    Attributes:
        setting_name: The offending setting key (if known).
    """

    def __init__(
        self,
        message: str = "",
        *,
        setting_name: Optional[str] = None,
        module: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.setting_name = setting_name
        super().__init__(message, module=module or "config", **context)
