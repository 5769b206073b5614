# topmark:header:start
#
#   project      : DocSieve
#   file         : test_source_parser.py
#   file_relpath : tests/parser/test_source_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the dispatch driver (`SourceParser`).

These tests use private registries with recording handlers so the dispatch
rules are observed independently of the built-in handlers.
"""

from __future__ import annotations

import io
import logging
from typing import TYPE_CHECKING

import pytest

import docsieve

from docsieve.core.enums import Scope, Visibility
from docsieve.core.errors import InvalidInputError, UndocumentableError
from docsieve.diagnostic import DiagnosticLevel, SourceLocation
from docsieve.handlers.registry import HandlerRegistry
from docsieve.lexer.statements import StatementList
from docsieve.lexer.tokens import TokenList
from docsieve.objects.base import ClassObject
from docsieve.parser.context import ContextSnapshot
from tests.conftest import make_config, make_parser, mark_pipeline, parametrize, register_recording

if TYPE_CHECKING:
    from pathlib import Path

    from docsieve.lexer.statements import Statement
    from docsieve.objects.store import DocumentStore
    from docsieve.parser.source_parser import SourceParser


def _defaults(parser: SourceParser) -> ContextSnapshot:
    root = parser.store.root
    return ContextSnapshot(root, root, Visibility.PUBLIC, Scope.INSTANCE)


def _undocumentable(parser: SourceParser, stmt: Statement) -> None:
    raise UndocumentableError("anonymous entity")


def _fault(parser: SourceParser, stmt: Statement) -> None:
    raise RuntimeError("handler exploded")


def _make_private(parser: SourceParser, stmt: Statement) -> None:
    parser.context.visibility = Visibility.PRIVATE


@mark_pipeline
def test_empty_input() -> None:
    parser = make_parser(registry=HandlerRegistry())
    parser.parse(StatementList(""))
    assert parser.statements_processed == 0
    assert len(parser.diagnostics) == 0
    assert parser.context.snapshot() == _defaults(parser)


@mark_pipeline
def test_statement_without_handlers_is_skipped() -> None:
    calls: list[tuple[str, int]] = []
    registry = HandlerRegistry()
    register_recording(registry, "never", predicate=lambda tokens: False, calls=calls)
    parser = make_parser(registry=registry).parse_string("puts 1")
    assert parser.statements_processed == 1
    assert calls == []
    assert len(parser.diagnostics) == 0
    assert parser.context.snapshot() == _defaults(parser)


@mark_pipeline
def test_undocumentable_becomes_one_warning(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING)
    registry = HandlerRegistry()
    register_recording(registry, "anon", action=_undocumentable)
    parser = make_parser(registry=registry).parse_string("\n\nfoo = bar", file="x.rb")

    assert parser.diagnostics.stats().n_warning == 1
    assert parser.diagnostics.stats().n_error == 0
    (diag,) = list(parser.diagnostics)
    assert diag.level is DiagnosticLevel.WARNING
    assert "anonymous entity" in diag.message
    assert diag.location == SourceLocation("x.rb", 3)
    assert diag.handler == "anon"
    assert diag.context == "\t3: foo = bar"
    assert parser.context.snapshot() == _defaults(parser)
    assert "in anon: Undocumentable anonymous entity" in caplog.text
    assert "in file 'x.rb':3" in caplog.text


@mark_pipeline
def test_fault_then_visibility_change(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.ERROR)
    registry = HandlerRegistry()
    register_recording(registry, "faulty", action=_fault)
    register_recording(registry, "private", action=_make_private)
    parser = make_parser(registry=registry).parse_string("private")

    stats = parser.diagnostics.stats()
    assert stats.n_error == 1
    assert stats.n_warning == 0
    (diag,) = list(parser.diagnostics)
    assert diag.handler == "faulty"
    assert diag.message == "RuntimeError: handler exploded"
    assert diag.trace and "_fault" in diag.trace
    assert parser.context.visibility is Visibility.PRIVATE
    assert "Unhandled exception in faulty:" in caplog.text


@mark_pipeline
def test_all_matching_handlers_run_despite_failures() -> None:
    calls: list[tuple[str, int]] = []
    registry = HandlerRegistry()
    register_recording(registry, "a", action=_undocumentable, calls=calls)
    register_recording(registry, "b", action=_fault, calls=calls)
    register_recording(registry, "c", calls=calls)
    parser = make_parser(registry=registry).parse_string("x\ny")
    assert calls == [("a", 1), ("b", 1), ("c", 1), ("a", 2), ("b", 2), ("c", 2)]
    assert parser.diagnostics.stats().n_warning == 2
    assert parser.diagnostics.stats().n_error == 2


@mark_pipeline
def test_context_changes_are_seen_only_by_later_statements() -> None:
    seen: list[tuple[int, Visibility]] = []

    def observe(parser: SourceParser, stmt: Statement) -> None:
        seen.append((stmt.line, parser.context.visibility))
        if stmt.first.text == "private":
            parser.context.visibility = Visibility.PRIVATE

    registry = HandlerRegistry()
    register_recording(registry, "observe", action=observe)
    make_parser(registry=registry).parse_string("a\nprivate\nb")
    assert seen == [
        (1, Visibility.PUBLIC),
        (2, Visibility.PUBLIC),
        (3, Visibility.PRIVATE),
    ]


@mark_pipeline
def test_handler_registered_mid_run_applies_to_next_statement() -> None:
    calls: list[tuple[str, int]] = []
    registry = HandlerRegistry()

    def add_late(parser: SourceParser, stmt: Statement) -> None:
        if "late" not in registry:
            register_recording(registry, "late", calls=calls)

    register_recording(registry, "bootstrap", action=add_late)
    make_parser(registry=registry).parse_string("a\nb")
    assert calls == [("late", 2)]


@mark_pipeline
def test_nested_bodies_are_counted_and_isolated(store: DocumentStore) -> None:
    calls: list[tuple[str, int]] = []

    def enter(parser: SourceParser, stmt: Statement) -> None:
        klass = parser.store.register(ClassObject(parser.context.namespace, "Foo"))
        assert stmt.block is not None
        with parser.context.scoped(namespace=klass, visibility=Visibility.PUBLIC):
            parser.process(stmt.block)

    def fail_inner(parser: SourceParser, stmt: Statement) -> None:
        raise RuntimeError("inner")

    registry = HandlerRegistry()
    register_recording(registry, "enter", predicate=lambda t: t[0].text == "class", action=enter)
    register_recording(registry, "inner", predicate=lambda t: t[0].text == "x", action=fail_inner)
    register_recording(registry, "all", calls=calls)
    parser = make_parser(store=store, registry=registry).parse_string(
        "class Foo\n  x\n  y\nend\nz"
    )
    assert parser.statements_processed == 4
    assert calls == [("all", 2), ("all", 3), ("all", 1), ("all", 5)]
    assert parser.diagnostics.stats().n_error == 1
    assert parser.context.namespace is store.root


@mark_pipeline
def test_disabled_handlers_do_not_run() -> None:
    calls: list[tuple[str, int]] = []
    registry = HandlerRegistry()
    register_recording(registry, "a", calls=calls)
    register_recording(registry, "b", calls=calls)
    make_parser(registry=registry, config=make_config(disabled_handlers={"a"})).parse_string("x")
    assert calls == [("b", 1)]


@parametrize("bad", [42, None, 3.5, ["x = 1"], object()])
def test_invalid_input_fails_fast(bad: object) -> None:
    calls: list[tuple[str, int]] = []
    registry = HandlerRegistry()
    register_recording(registry, "any", calls=calls)
    parser = make_parser(registry=registry)
    with pytest.raises(InvalidInputError):
        parser.parse(bad)
    assert parser.statements_processed == 0
    assert calls == []


def test_invalid_input_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        make_parser(registry=HandlerRegistry()).parse(42)


def test_readable_returning_non_text_is_invalid() -> None:
    class Weird:
        def read(self) -> int:
            return 7

    with pytest.raises(InvalidInputError):
        make_parser(registry=HandlerRegistry()).parse(Weird())


@parametrize(
    "content",
    [
        "path",
        TokenList("a\nb"),
        StatementList("a\nb"),
        io.StringIO("a\nb"),
        io.BytesIO(b"a\nb"),
    ],
)
def test_accepted_input_forms(content: object, tmp_path: Path) -> None:
    if content == "path":
        source: Path = tmp_path / "src.rb"
        source.write_text("a\nb\n", encoding="utf-8")
        content = str(source)
    calls: list[tuple[str, int]] = []
    registry = HandlerRegistry()
    register_recording(registry, "any", calls=calls)
    parser = make_parser(registry=registry).parse(content)
    assert parser.statements_processed == 2
    assert calls == [("any", 1), ("any", 2)]


def test_path_input_sets_file_label(tmp_path: Path) -> None:
    source: Path = tmp_path / "lib.rb"
    source.write_text("foo\n", encoding="utf-8")
    parser = make_parser(registry=HandlerRegistry()).parse(source)
    assert parser.file == str(source)


def test_stdin_label_by_default() -> None:
    parser = make_parser(registry=HandlerRegistry()).parse_string("x")
    assert parser.file == "<STDIN>"


def test_missing_path_raises_os_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        make_parser(registry=HandlerRegistry()).parse(tmp_path / "nope.rb")


def test_each_run_resets_state() -> None:
    registry = HandlerRegistry()
    register_recording(registry, "fault", action=_fault)
    register_recording(registry, "private", action=_make_private)
    parser = make_parser(registry=registry)
    parser.parse_string("a\nb")
    assert parser.statements_processed == 2
    assert parser.diagnostics.stats().n_error == 2

    parser.parse(StatementList(""))
    assert parser.statements_processed == 0
    assert len(parser.diagnostics) == 0
    assert parser.context.visibility is Visibility.PUBLIC


@mark_pipeline
def test_module_level_helpers(store: DocumentStore) -> None:
    parser: SourceParser = docsieve.parse_string(
        "class Foo; def bar; end; end", file="inline.rb", store=store
    )
    assert parser.file == "inline.rb"
    assert store.paths() == ("Foo", "Foo#bar")

    again: SourceParser = docsieve.parse(StatementList("module M\nend\n"), store=store)
    assert again.store is store
    assert "M" in store
