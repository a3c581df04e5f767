import json
from collections.abc import Sequence
from enum import Enum
from typing import ClassVar

from attrs import define, field

__all__ = [
    "CommandNotFoundError",
    "DanglingNamedArgumentError",
    "ErrorKind",
    "ExpectedNamedArgumentError",
    "NoCommandGivenError",
    "ParseError",
]


class ErrorKind(Enum):
    """Stable identifiers for every way parsing can fail."""

    NO_COMMAND_GIVEN = "no command given"
    COMMAND_NOT_FOUND = "command given doesn't exist"
    EXPECTED_NAMED_ARGUMENT = "expected to be named"
    DANGLING_NAMED_ARGUMENT = "last arg cannot be named"


def _dump_tokens(tokens: Sequence[str]) -> str:
    return json.dumps(list(tokens), indent=2, ensure_ascii=False)


@define(kw_only=True)
class ParseError(Exception):
    """Root exception for parsing errors.

    Every subclass pins a single :class:`ErrorKind`, so callers may either catch
    a specific subclass or inspect :attr:`kind`.
    """

    kind: ClassVar[ErrorKind]

    group: ClassVar[str] = "cannot parse"
    """Coarse classification shared by all kinds."""

    root_input_tokens: list[str] | None = None
    """
    The CLI tokens that were initially fed into the parser.
    """

    @property
    def id(self) -> str:
        return self.kind.value

    @property
    def message(self) -> str:
        """Human-readable, possibly multi-line, description of the failure."""
        return str(self)

    def __str__(self):
        return self.group


@define(kw_only=True)
class NoCommandGivenError(ParseError):
    """A command was required but no tokens were given."""

    kind = ErrorKind.NO_COMMAND_GIVEN

    def __str__(self):
        return "you must pass a command as your first argument"


@define(kw_only=True)
class CommandNotFoundError(ParseError):
    """The first token is not one of the allowed commands."""

    kind = ErrorKind.COMMAND_NOT_FOUND

    token: str
    """The offending first token."""

    commands: tuple[str, ...] = field(converter=tuple)
    """All allowed commands."""

    def __str__(self):
        return f"the command you passed '{self.token}' doesn't exist\ncommands: {', '.join(self.commands)}"


@define(kw_only=True)
class ExpectedNamedArgumentError(ParseError):
    """A token in name position does not begin with ``--``."""

    kind = ErrorKind.EXPECTED_NAMED_ARGUMENT

    token: str
    tokens: list[str] = field(converter=list)
    """All tokens passed to the parser."""

    def __str__(self):
        return (
            f"the following argument was expected to be named: '{self.token}'\n"
            "(i.e. it should begin with --)\n"
            "\n"
            f"here are all the arguments passed: {_dump_tokens(self.tokens)}"
        )


@define(kw_only=True)
class DanglingNamedArgumentError(ParseError):
    """The final token is a name with no value following it."""

    kind = ErrorKind.DANGLING_NAMED_ARGUMENT

    token: str
    tokens: list[str] = field(converter=list)
    """All tokens passed to the parser."""

    def __str__(self):
        return (
            "The last argument cannot be named because all named parameters must have values\n"
            "\n"
            f"last argument: {self.token}\n"
            "\n"
            f"here are all the arguments passed: {_dump_tokens(self.tokens)}"
        )
