import pytest
from rich.console import Console

from strictopts import Parser


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def parser(console):
    return Parser(
        commands=["deploy", "build"],
        allow_multiple=["--tag"],
        error_console=console,
    )
