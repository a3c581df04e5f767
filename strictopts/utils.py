"""To prevent circular dependencies, this module should never import anything else from strictopts."""

import re
import shlex
import sys
from collections.abc import Iterable
from typing import Any

_SEPARATORS = re.compile(r"[\s_.\-]+")
_HUMP = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def is_iterable(obj) -> bool:
    if isinstance(obj, (str, bytes)):
        return False
    return isinstance(obj, Iterable)


def to_tuple_converter(value: None | Any | Iterable[Any]) -> tuple[Any, ...]:
    """Convert a single element or an iterable of elements into a tuple.

    Intended to be used in an ``attrs.Field``. If :obj:`None` is provided, returns an empty tuple.
    If a single element is provided, returns a tuple containing just that element.
    If an iterable is provided, converts it into a tuple.

    Parameters
    ----------
    value: Any | Iterable[Any] | None
        An element, an iterable of elements, or None.

    Returns
    -------
    tuple[Any, ...]: A tuple containing the elements.
    """
    if value is None:
        return ()
    elif is_iterable(value):
        return tuple(value)
    else:
        return (value,)


def normalize_tokens(tokens: None | str | Iterable[str]) -> list[str]:
    if tokens is None:
        tokens = sys.argv[1:]  # Remove the executable
    elif isinstance(tokens, str):
        tokens = shlex.split(tokens)
    else:
        tokens = list(tokens)
    return tokens


def camel_case(s: str) -> str:
    """Converts a CLI flag into a python-friendly mapping key.

    Performs the following operations (in order):

    1. Strip any leading/trailing ``-``, ``_``, ``.`` and whitespace.
    2. If the remainder is entirely uppercase, lowercase it.
    3. Split into words on separators and on existing camelCase humps.
    4. Lowercase the first word, capitalize every following word, and join.

    Parameters
    ----------
    s: str
        Input CLI flag, e.g. ``"--allow-multiple"``.

    Returns
    -------
    str
        Transformed name, e.g. ``"allowMultiple"``.
    """
    s = _SEPARATORS.sub("-", s).strip("-")
    if s.isupper():
        s = s.lower()

    words = [word.lower() for chunk in s.split("-") for word in _HUMP.split(chunk) if word]
    if not words:
        return ""
    return words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])

