"""Interactive command shell for cmdengine.

Hosts an Engine as a line-oriented console: every input line goes
through Engine.exec_string() at the configured user level. Handler
results are printed; engine errors are reported and the loop goes on.

Key classes:
    ShellSession: Per-session context handed to every handler.
    ShellCommands: Built-in commands (echo, whoami, exit, quit).

Key functions:
    run_shell: Read-eval-print loop over arbitrary text streams.
    run: Entry point for the ``cmdengine`` console script.
"""

import sys
from dataclasses import dataclass
from typing import List, Optional, TextIO

import structlog

from .commands import CommandGroup, command
from .engine import Engine
from .exceptions import CommandEngineError
from .logging_config import setup_logging


@dataclass
class ShellSession:
    """Context passed to shell command handlers.

    Attributes:
        user_level: Authorization level used for every dispatched line.
        running: Cleared by exit/quit to stop the loop.
    """
    user_level: int = 0
    running: bool = True


class ShellCommands(CommandGroup):
    """Built-in shell commands. Handlers return text to print, or None."""

    def get_commands(self):
        return [
            command("echo", self.handle_echo, help="echo [ARGS...]: print arguments"),
            command("whoami", self.handle_whoami, help="whoami: show your user level"),
            command("exit", self.handle_exit, help="exit: leave the shell"),
            command("quit", self.handle_exit, help="quit: leave the shell"),
        ]

    def handle_echo(self, session: ShellSession, args: List[str]) -> str:
        return " ".join(args)

    def handle_whoami(self, session: ShellSession, args: List[str]) -> str:
        return f"user level {session.user_level}"

    def handle_exit(self, session: ShellSession, args: List[str]) -> None:
        session.running = False


def build_engine() -> Engine[ShellSession]:
    """Create an engine preloaded with the built-in shell commands."""
    engine: Engine[ShellSession] = Engine()
    engine.register(ShellCommands())
    return engine


def run_shell(
    engine: Engine[ShellSession],
    session: ShellSession,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    prompt: str = "",
) -> None:
    """Execute lines from ``stdin`` until end of input or exit.

    Blank lines are skipped. Engine errors are printed as
    ``error: <message>``; exceptions raised by handlers propagate.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    logger = structlog.get_logger("cmdengine.shell")

    while session.running:
        if prompt:
            stdout.write(prompt)
            stdout.flush()
        line = stdin.readline()
        if not line:
            break
        if not line.strip():
            continue

        try:
            result = engine.exec_string(session, session.user_level, line)
        except CommandEngineError as e:
            logger.info("command_rejected", error_type=type(e).__name__)
            print(f"error: {e}", file=stdout)
            continue

        if result is not None:
            print(result, file=stdout)


def run():
    """Synchronous entry point for the ``cmdengine`` console script."""
    setup_logging()

    from .config import get_config

    try:
        config = get_config()
        config.validate()
    except CommandEngineError as e:
        print(f"configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(config)
    logger = structlog.get_logger("cmdengine")
    logger.info("shell_starting", user_level=config.user_level)

    session = ShellSession(user_level=config.user_level)
    prompt = config.prompt if sys.stdin.isatty() else ""
    try:
        run_shell(build_engine(), session, prompt=prompt)
    except KeyboardInterrupt:
        pass
    logger.info("shell_stopped")


if __name__ == "__main__":
    run()
