__version__ = "0.1.0"

__all__ = [
    "CommandNotFoundError",
    "DanglingNamedArgumentError",
    "ErrorKind",
    "ExpectedNamedArgumentError",
    "NoCommandGivenError",
    "ParseError",
    "Parser",
    "camel_case",
    "parse",
]

from strictopts.exceptions import (
    CommandNotFoundError,
    DanglingNamedArgumentError,
    ErrorKind,
    ExpectedNamedArgumentError,
    NoCommandGivenError,
    ParseError,
)
from strictopts.parser import Parser, parse
from strictopts.utils import camel_case
