import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING

from attrs import define, field

from strictopts.exceptions import (
    CommandNotFoundError,
    DanglingNamedArgumentError,
    ExpectedNamedArgumentError,
    ParseError,
)
from strictopts.utils import camel_case, normalize_tokens, to_tuple_converter

if TYPE_CHECKING:
    from rich.console import Console
    from rich.panel import Panel

__all__ = [
    "HELP_OR_VERSION",
    "Parser",
    "Result",
    "parse",
]

HELP_OR_VERSION = frozenset({"--help", "--version"})

Result = dict[str, str | list[str] | bool]


def _extract_command(tokens: list[str], commands: tuple[str, ...], result: Result) -> list[str]:
    """Returns the tokens remaining after the leading command is consumed."""
    if not commands or not tokens or tokens[0] in HELP_OR_VERSION:
        return tokens

    command = tokens[0]
    if command not in commands:
        raise CommandNotFoundError(token=command, commands=commands)

    result["_command"] = command
    return tokens[1:]


def _store(result: Result, key: str, value: str) -> None:
    existing = result.get(key)
    if isinstance(existing, list):
        existing.append(value)
    elif existing is None:
        result[key] = value
    else:
        # Repeated flag that wasn't declared as allowing multiple values.
        result[key] = [existing, value]  # pyright: ignore[reportArgumentType]


def parse(
    tokens: None | str | Iterable[str] = None,
    *,
    allow_multiple: None | str | Iterable[str] = None,
    commands: None | str | Iterable[str] = None,
) -> Result:
    """Parse strictly-named CLI tokens into a dictionary.

    Only ``--name value`` pairs are accepted. Keys are the camelCased flag names
    and values are the raw strings.

    .. code-block:: python

        >>> parse(["deploy", "--env", "prod"], commands=["deploy", "build"])
        {'_command': 'deploy', 'env': 'prod'}

    Parameters
    ----------
    tokens: None | str | Iterable[str]
        Either a string, or a list of strings to parse.
        If a string is supplied, it will be split into a list of strings using :func:`shlex.split`.
        If :obj:`None`, defaults to ``sys.argv[1:]``.
    allow_multiple: None | str | Iterable[str]
        Flags (e.g. ``"--name"``) whose value is always a list, even if supplied zero or one times.
    commands: None | str | Iterable[str]
        If non-empty, the first token must be one of these (unless it is ``--help`` or ``--version``).
        The matched command is stored under ``"_command"``.

    Raises
    ------
    CommandNotFoundError
        The first token is not one of ``commands``.
    ExpectedNamedArgumentError
        A token in name position does not start with ``--``.
    DanglingNamedArgumentError
        The last token is a name without a value.

    Returns
    -------
    dict
        Mapping of camelCased flag names to raw values.
        ``help``/``version`` map to :obj:`True` when requested.
    """
    all_tokens = normalize_tokens(tokens)
    allow_multiple = to_tuple_converter(allow_multiple)
    commands = to_tuple_converter(commands)

    result: Result = {}
    remaining = _extract_command(all_tokens, commands, result)

    if remaining and remaining[0] == "--help":
        result["help"] = True
        return result
    if remaining and remaining[0] == "--version":
        result["version"] = True
        return result

    for flag in allow_multiple:
        result[camel_case(flag)] = []

    for i in range(0, len(remaining), 2):
        name = remaining[i]
        if not name.startswith("--"):
            raise ExpectedNamedArgumentError(token=name, tokens=all_tokens)
        if i == len(remaining) - 1:
            raise DanglingNamedArgumentError(token=name, tokens=all_tokens)
        _store(result, camel_case(name), remaining[i + 1])

    return result


def _validate_flag_names(instance, attribute, value: tuple):
    for name in value:
        if not isinstance(name, str):
            raise TypeError(f"{attribute.name} must only contain strings; got {name!r}.")


@define
class Parser:
    """Reusable parser configuration with user-facing error handling.

    .. code-block:: python

        parser = Parser(commands=["deploy", "build"], allow_multiple=["--tag"])
        args = parser()  # parses sys.argv[1:]
    """

    allow_multiple: tuple[str, ...] = field(
        default=(),
        converter=to_tuple_converter,
        validator=_validate_flag_names,
    )
    """Flags whose value is always a list."""

    commands: tuple[str, ...] = field(
        default=(),
        converter=to_tuple_converter,
        validator=_validate_flag_names,
    )
    """Allowed values for the leading positional command."""

    console: "Console | None" = field(default=None, kw_only=True)
    """Console that ``error_console`` inherits its settings from."""

    _error_console: "Console | None" = field(default=None, alias="error_console", kw_only=True)

    print_error: bool = field(default=True, kw_only=True)
    """Print a rich-formatted error on a :class:`ParseError`."""

    exit_on_error: bool = field(default=True, kw_only=True)
    """Call ``sys.exit(1)`` on a :class:`ParseError`."""

    @property
    def error_console(self) -> "Console":
        """:class:`~rich.console.Console` that parse errors are printed to."""
        if self._error_console is not None:
            return self._error_console
        from rich.console import Console

        if self.console is None:
            return Console(stderr=True)
        # Same look as the user's console, but on stderr.
        return Console(
            stderr=True,
            width=self.console._width,
            color_system=self.console.color_system or "auto",  # type: ignore[arg-type]
            force_terminal=getattr(self.console, "_force_terminal", None),
            highlight=getattr(self.console, "_highlight", True),
            no_color=self.console.no_color,
        )

    @error_console.setter
    def error_console(self, value: "Console | None"):
        self._error_console = value

    def error_panel(self, error: ParseError) -> "Panel":
        """Rounded red :class:`~rich.panel.Panel` titled "Error" holding the error message."""
        from rich import box
        from rich.panel import Panel
        from rich.text import Text

        return Panel(Text(error.message, "default"), title="Error", style="red", box=box.ROUNDED, title_align="left")

    def parse(self, tokens: None | str | Iterable[str] = None) -> Result:
        """Parse ``tokens`` with this configuration; errors propagate unchanged."""
        return parse(tokens, allow_multiple=self.allow_multiple, commands=self.commands)

    def parse_args(
        self,
        tokens: None | str | Iterable[str] = None,
        *,
        print_error: bool | None = None,
        exit_on_error: bool | None = None,
    ) -> Result:
        """Interpret arguments, presenting errors to the end user.

        Parameters
        ----------
        tokens: None | str | Iterable[str]
            Either a string, or a list of strings to parse.
            If a string is supplied, it will be split into a list of strings using :func:`shlex.split`.
            If :obj:`None`, defaults to ``sys.argv[1:]``.
        print_error: bool | None
            Print a rich-formatted error on error.
            If :obj:`None`, inherits from :attr:`Parser.print_error`.
        exit_on_error: bool | None
            If there is an error parsing the CLI tokens, invoke ``sys.exit(1)``.
            Otherwise, continue to raise the exception.
            If :obj:`None`, inherits from :attr:`Parser.exit_on_error`.

        Returns
        -------
        dict
            Same as :func:`strictopts.parse`.
        """
        tokens = normalize_tokens(tokens)
        try:
            return self.parse(tokens)
        except ParseError as e:
            e.root_input_tokens = tokens
            if print_error if print_error is not None else self.print_error:
                self.error_console.print(self.error_panel(e))
            if exit_on_error if exit_on_error is not None else self.exit_on_error:
                sys.exit(1)
            raise

    __call__ = parse_args
