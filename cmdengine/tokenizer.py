"""Shell-like command line tokenizer.

Splits a raw line into an argument vector with POSIX shell rules:
whitespace separates words, single and double quotes group words and
are stripped, and a backslash escapes the next character except inside
single quotes. Comments are not recognised, so ``#`` is an ordinary
character.
"""

from __future__ import annotations

import shlex
from typing import List

from .exceptions import TokenizeSyntaxError


def split_command(line: str) -> List[str]:
    """Split a command line into argv tokens using shlex rules.

    Raises:
        TokenizeSyntaxError: On an unterminated quote or a trailing
            escape character. No partial result is returned.
    """
    if not line:
        return []
    try:
        return shlex.split(line, comments=False, posix=True)
    except ValueError as exc:
        raise TokenizeSyntaxError(str(exc), line=line) from exc


class Tokenizer:
    """Reusable tokenizer owned by an Engine.

    Holds no per-call state: each split() builds a fresh lexer, so one
    instance may be shared between threads.
    """

    def split(self, line: str) -> List[str]:
        return split_command(line)
