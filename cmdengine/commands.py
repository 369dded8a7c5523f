"""Command groups for bulk registration.

Related handlers are grouped into classes that extend CommandGroup and
then handed to Engine.register(), which installs the whole group or
nothing at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List

from .engine import CommandEntry


def command(
    name: str, handler: Callable[..., Any], min_level: int = 0, help: str = ""
) -> CommandEntry:
    """Build a CommandEntry for use in CommandGroup.get_commands()."""
    return CommandEntry(name=name, handler=handler, min_level=min_level, help=help)


class CommandGroup(ABC):
    """Abstract base class for a group of related commands.

    Subclasses implement get_commands() to return the entries they
    provide. Each handler receives (context, args) and may return a
    value for the caller.
    """

    @abstractmethod
    def get_commands(self) -> List[CommandEntry]:
        """Return the CommandEntry list this group registers."""
        ...
