# topmark:header:start
#
#   project      : DocSieve
#   file         : test_resolver.py
#   file_relpath : tests/parser/test_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for `HandlerResolver`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from docsieve.handlers import register_all_handlers
from docsieve.handlers.registry import HandlerRegistry
from docsieve.lexer.statements import Statement, StatementList
from docsieve.parser.resolver import HandlerResolver
from tests.conftest import parametrize, register_recording

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from docsieve.lexer.tokens import Token


def _stmt(source: str) -> Statement:
    return StatementList(source)[0]


def _first_is(text: str) -> Callable[[Sequence[Token]], bool]:
    def predicate(tokens: Sequence[Token]) -> bool:
        return tokens[0].text == text

    return predicate


def test_returns_all_matches_in_registration_order() -> None:
    registry = HandlerRegistry()
    register_recording(registry, "third", predicate=_first_is("x"))
    register_recording(registry, "never", predicate=_first_is("y"))
    register_recording(registry, "first", predicate=_first_is("x"))
    resolver = HandlerResolver(registry)
    assert [d.name for d in resolver.resolve(_stmt("x = 1"))] == ["third", "first"]
    assert resolver.resolve(_stmt("z")) == ()


def test_sees_handlers_registered_after_construction() -> None:
    registry = HandlerRegistry()
    resolver = HandlerResolver(registry)
    assert resolver.resolve(_stmt("x")) == ()
    register_recording(registry, "late")
    assert [d.name for d in resolver.resolve(_stmt("x"))] == ["late"]


def test_disabled_handlers_are_skipped() -> None:
    registry = HandlerRegistry()
    register_recording(registry, "a")
    register_recording(registry, "b")
    resolver = HandlerResolver(registry, disabled=["a"])
    assert [d.name for d in resolver.resolve(_stmt("x"))] == ["b"]


def test_unknown_disabled_handler_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    HandlerResolver(HandlerRegistry(), disabled=["ghost"])
    assert "Disabled handler(s) not registered: ghost" in caplog.text


def test_raising_predicate_does_not_match(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)

    def broken(tokens: Sequence[Token]) -> bool:
        raise IndexError("no such token")

    registry = HandlerRegistry()
    register_recording(registry, "broken", predicate=broken)
    register_recording(registry, "ok")
    assert [d.name for d in HandlerResolver(registry).resolve(_stmt("x"))] == ["ok"]
    assert "Handler 'broken' failed to test line 1" in caplog.text


@parametrize(
    "source, expected",
    [
        ("class Foo < Bar", ["class"]),
        ("class << self", ["singleton_class"]),
        ("module Foo", ["module"]),
        ("def foo(a)", ["method"]),
        ("private", ["visibility"]),
        ("private_class_method :x", ["visibility"]),
        ("attr_reader :a, :b", ["attribute"]),
        ("include Enumerable", ["mixin"]),
        ("MAX = 3", ["constant"]),
        ("Foo::MAX = 3", ["constant"]),
        ("puts 'hello'", []),
        ("max = 3", []),
        ("attr_reader", []),
    ],
)
def test_builtin_resolution(source: str, expected: list[str]) -> None:
    resolver = HandlerResolver(register_all_handlers())
    assert [d.name for d in resolver.resolve(_stmt(source))] == expected
