from textwrap import dedent

import pytest

from strictopts import (
    CommandNotFoundError,
    DanglingNamedArgumentError,
    ErrorKind,
    ExpectedNamedArgumentError,
    NoCommandGivenError,
    ParseError,
    parse,
)


@pytest.mark.parametrize(
    "tokens, kwargs, error_type, kind",
    [
        (["frobnicate"], {"commands": ["deploy"]}, CommandNotFoundError, ErrorKind.COMMAND_NOT_FOUND),
        (["oops", "x"], {}, ExpectedNamedArgumentError, ErrorKind.EXPECTED_NAMED_ARGUMENT),
        (["--no-val"], {}, DanglingNamedArgumentError, ErrorKind.DANGLING_NAMED_ARGUMENT),
    ],
)
def test_exceptions_kind(tokens, kwargs, error_type, kind):
    with pytest.raises(ParseError) as e:
        parse(tokens, **kwargs)

    assert type(e.value) is error_type
    assert e.value.kind is kind
    assert e.value.id == kind.value
    assert e.value.group == "cannot parse"


def test_exceptions_command_not_found_message():
    with pytest.raises(CommandNotFoundError) as e:
        parse(["frobnicate"], commands=["deploy", "build"])

    expected = dedent(
        """\
        the command you passed 'frobnicate' doesn't exist
        commands: deploy, build"""
    )
    assert str(e.value) == expected
    assert e.value.message == expected


def test_exceptions_expected_named_message():
    with pytest.raises(ExpectedNamedArgumentError) as e:
        parse(["--name", "phil", "oops", "x"])

    expected = dedent(
        """\
        the following argument was expected to be named: 'oops'
        (i.e. it should begin with --)

        here are all the arguments passed: [
          "--name",
          "phil",
          "oops",
          "x"
        ]"""
    )
    assert str(e.value) == expected


def test_exceptions_dangling_message():
    with pytest.raises(DanglingNamedArgumentError) as e:
        parse(["--no-val"])

    expected = dedent(
        """\
        The last argument cannot be named because all named parameters must have values

        last argument: --no-val

        here are all the arguments passed: [
          "--no-val"
        ]"""
    )
    assert str(e.value) == expected


def test_exceptions_no_command_given():
    e = NoCommandGivenError()
    assert e.kind is ErrorKind.NO_COMMAND_GIVEN
    assert e.group == "cannot parse"
    assert str(e) == "you must pass a command as your first argument"


def test_exceptions_root_input_tokens_default():
    with pytest.raises(ParseError) as e:
        parse(["--no-val"])
    assert e.value.root_input_tokens is None


def test_exceptions_kinds_are_closed():
    assert {kind.value for kind in ErrorKind} == {
        "no command given",
        "command given doesn't exist",
        "expected to be named",
        "last arg cannot be named",
    }


@pytest.mark.parametrize(
    "tokens, error_type",
    [
        (["café"], ExpectedNamedArgumentError),
        (["--name", "café", "--straße"], DanglingNamedArgumentError),
    ],
)
def test_exceptions_non_ascii_tokens_are_not_escaped(tokens, error_type):
    with pytest.raises(error_type) as e:
        parse(tokens)

    assert '"café"' in e.value.message
    assert "\\u" not in e.value.message
