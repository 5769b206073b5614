# topmark:header:start
#
#   project      : DocSieve
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the DocSieve test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should not depend on process-wide state:

    - Pass an explicit `docsieve.objects.store.DocumentStore` to every parser
      (the default store is shared by the whole process).
    - Build a private `docsieve.handlers.registry.HandlerRegistry` when a test
      needs handlers of its own; never register test handlers in the
      process-wide registry.
    - Build configs using `docsieve.config.MutableConfig`, then `freeze()`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from docsieve.config import MutableConfig, logging
from docsieve.handlers.registry import HandlerRegistry
from docsieve.objects.store import DocumentStore
from docsieve.parser.source_parser import SourceParser

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.config import Config
    from docsieve.lexer.tokens import Token

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_docsieve_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure DocSieve's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("DOCSIEVE_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def store() -> DocumentStore:
    """Return a fresh, test-local document store."""
    return DocumentStore()


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Keyword overrides applied to the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot for use in tests.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


def make_parser(
    *,
    store: DocumentStore | None = None,
    registry: HandlerRegistry | None = None,
    config: Config | None = None,
) -> SourceParser:
    """Return a parser with a private store (and the built-in handlers by default)."""
    return SourceParser(
        store=store if store is not None else DocumentStore(),
        registry=registry,
        config=config,
    )


def parse_source(text: str, *, store: DocumentStore | None = None, **kwargs: Any) -> SourceParser:
    """Parse ``text`` with the built-in handlers into ``store`` (a fresh one by default)."""
    return make_parser(store=store, **kwargs).parse_string(text, file="test.rb")


class RecordingHandler:
    """Configurable test handler: records calls and then behaves as instructed.

    Args:
        parser (SourceParser): The parser driving the run.
        statement: The statement being handled.
        action (Callable[[SourceParser, Any], None] | None): What ``process()`` does.
        calls (list[tuple[str, int]] | None): Shared call log (``(tag, line)`` entries).
        tag (str): Label written into the call log.
    """

    def __init__(
        self,
        parser: SourceParser,
        statement: Any,
        *,
        action: Callable[[SourceParser, Any], None] | None = None,
        calls: list[tuple[str, int]] | None = None,
        tag: str = "",
    ) -> None:
        self.parser = parser
        self.statement = statement
        self.action = action
        self.calls = calls
        self.tag = tag

    def process(self) -> None:
        if self.calls is not None:
            self.calls.append((self.tag, self.statement.line))
        if self.action is not None:
            self.action(self.parser, self.statement)


def register_recording(
    registry: HandlerRegistry,
    name: str,
    *,
    predicate: Callable[[Sequence[Token]], bool] = lambda tokens: True,
    action: Callable[[SourceParser, Any], None] | None = None,
    calls: list[tuple[str, int]] | None = None,
) -> None:
    """Register a `RecordingHandler` called ``name`` in ``registry``."""
    registry.register(
        name,
        predicate,
        lambda parser, statement: RecordingHandler(
            parser, statement, action=action, calls=calls, tag=name
        ),
    )
