"""Command registry and dispatcher.

The Engine maps command names to CommandEntry records and executes
argument vectors against them. A command runs only when the caller's
level meets or exceeds the entry's minimum level; the handler then
receives the caller's context untouched and the trailing arguments.

Key classes:
    CommandEntry: Immutable record of one registered command.
    Engine: Registry plus dispatcher, generic over the context type.

Errors raised here are returned to the caller as-is and are not
logged; handler exceptions propagate without wrapping.
"""

from __future__ import annotations

import threading
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Sequence,
    TypeVar,
)

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import (
    CommandAlreadyRegisteredError,
    CommandNotFoundError,
    CommandNotRegisteredError,
    EmptyCommandError,
    InsufficientPrivilegeError,
)
from .tokenizer import Tokenizer

if TYPE_CHECKING:
    from .commands import CommandGroup

logger = structlog.get_logger("cmdengine.engine")

ContextT = TypeVar("ContextT")

# Handler signature: (context, args) -> Any. Errors are raised, not returned.
Handler = Callable[[ContextT, List[str]], Any]


class CommandEntry(BaseModel):
    """A registered command.

    Attributes:
        name: Lookup key; case-sensitive, non-empty.
        handler: Callable invoked as handler(context, args).
        min_level: Lowest caller level allowed to run the command.
        help: Display text, stored verbatim and never interpreted.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    handler: Callable[..., Any]
    min_level: int = 0
    help: str = ""


class Engine(Generic[ContextT]):
    """Command interpreter: registry, authorization and dispatch.

    Every engine owns its registry and tokenizer, so independent engines
    can live side by side in one process. A single lock serializes
    lookup, insert and delete; handlers run outside it and may therefore
    add or remove commands themselves.
    """

    def __init__(self) -> None:
        self._commands: Dict[str, CommandEntry] = {}
        self._tokenizer = Tokenizer()
        self._lock = threading.Lock()

    # --- Registration ---

    def add_command(
        self,
        name: str,
        help: str,
        handler: Handler[ContextT],
        min_level: int = 0,
    ) -> CommandEntry:
        """Register a new command.

        Args:
            name: Command name matched against the first token.
            help: Help text, stored as given.
            handler: Callable taking (context, args).
            min_level: Minimum caller level required to run it.

        Returns:
            The stored CommandEntry.

        Raises:
            CommandAlreadyRegisteredError: ``name`` is already taken; the
                existing entry is left untouched.
            ValueError: ``name`` is empty or ``handler`` is not callable.
        """
        entry = CommandEntry(name=name, handler=handler, min_level=min_level, help=help)
        with self._lock:
            if name in self._commands:
                raise CommandAlreadyRegisteredError(name)
            self._commands[name] = entry
        logger.debug("command_registered", command=name, min_level=entry.min_level)
        return entry

    def register(self, group: "CommandGroup") -> None:
        """Register every command of a CommandGroup, all or nothing.

        Raises:
            CommandAlreadyRegisteredError: A name is already registered or
                appears twice in the group. Nothing is registered.
        """
        entries = group.get_commands()
        with self._lock:
            seen = set()
            for entry in entries:
                if entry.name in self._commands or entry.name in seen:
                    raise CommandAlreadyRegisteredError(
                        entry.name, group=type(group).__name__
                    )
                seen.add(entry.name)
            for entry in entries:
                self._commands[entry.name] = entry
        logger.debug(
            "command_group_registered",
            group=type(group).__name__,
            commands=[entry.name for entry in entries],
        )

    def remove_command(self, name: str) -> None:
        """Remove a registered command.

        Raises:
            CommandNotRegisteredError: ``name`` is not registered.
        """
        with self._lock:
            if name not in self._commands:
                raise CommandNotRegisteredError(name)
            del self._commands[name]
        logger.debug("command_removed", command=name)

    # --- Introspection ---

    def get(self, name: str) -> Optional[CommandEntry]:
        """Look up the entry for a command name."""
        with self._lock:
            return self._commands.get(name)

    def help_for(self, name: str) -> str:
        """Return the raw help text stored for ``name``.

        Raises:
            CommandNotRegisteredError: ``name`` is not registered.
        """
        entry = self.get(name)
        if entry is None:
            raise CommandNotRegisteredError(name)
        return entry.help

    @property
    def command_names(self) -> frozenset:
        """All registered command names."""
        with self._lock:
            return frozenset(self._commands)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._commands

    def __len__(self) -> int:
        with self._lock:
            return len(self._commands)

    # --- Dispatch ---

    def exec(self, ctx: ContextT, user_level: int, args: Sequence[str]) -> Any:
        """Execute an already tokenized command.

        ``args[0]`` names the command; ``args[1:]`` are passed to the
        handler as a new list. The handler's return value is returned
        and anything it raises propagates unchanged.

        Raises:
            EmptyCommandError: ``args`` is empty.
            CommandNotFoundError: ``args[0]`` is not registered.
            InsufficientPrivilegeError: ``user_level`` is below the
                command's minimum level. The handler is not called.
        """
        if len(args) < 1:
            raise EmptyCommandError()

        name = args[0]
        with self._lock:
            entry = self._commands.get(name)
        if entry is None:
            raise CommandNotFoundError(name)

        if entry.min_level > user_level:
            raise InsufficientPrivilegeError(name, user_level, entry.min_level)

        handler_args = list(args[1:])
        logger.debug("command_dispatched", command=name, args=handler_args)
        return entry.handler(ctx, handler_args)

    def exec_string(self, ctx: ContextT, user_level: int, command_string: str) -> Any:
        """Tokenize ``command_string`` and execute the result.

        Raises:
            TokenizeSyntaxError: The line has malformed quoting.
            EmptyCommandError: The line holds no tokens.
            Anything exec() raises.
        """
        args = self._tokenizer.split(command_string)
        return self.exec(ctx, user_level, args)
