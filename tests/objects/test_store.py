# topmark:header:start
#
#   project      : DocSieve
#   file         : test_store.py
#   file_relpath : tests/objects/test_store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for documentation objects and the `DocumentStore`."""

from __future__ import annotations

import pytest

from docsieve.core.enums import Scope
from docsieve.objects.base import ClassObject, ConstantObject, MethodObject, ModuleObject
from docsieve.objects.store import DocumentStore, get_default_store


def _tree(store: DocumentStore) -> tuple[ModuleObject, ClassObject]:
    foo: ModuleObject = store.register(ModuleObject(store.root, "Foo"))
    bar: ClassObject = store.register(ClassObject(foo, "Bar"))
    return foo, bar


def test_paths(store: DocumentStore) -> None:
    foo, bar = _tree(store)
    assert store.root.path == ""
    assert foo.path == "Foo"
    assert bar.path == "Foo::Bar"
    assert MethodObject(bar, "baz").path == "Foo::Bar#baz"
    assert MethodObject(bar, "baz", Scope.CLASS).path == "Foo::Bar.baz"
    assert ConstantObject(foo, "MAX", "3").path == "Foo::MAX"


def test_register_attaches_children(store: DocumentStore) -> None:
    foo, bar = _tree(store)
    assert store.root.children == [foo]
    assert foo.children == [bar]
    assert store.paths() == ("Foo", "Foo::Bar")
    assert "Foo::Bar" in store
    assert len(store) == 2


def test_register_same_kind_returns_existing(store: DocumentStore) -> None:
    foo, _ = _tree(store)
    again: ModuleObject = store.register(ModuleObject(store.root, "Foo"))
    assert again is foo
    assert len(store) == 2


def test_register_conflicting_kind_raises(store: DocumentStore) -> None:
    _tree(store)
    with pytest.raises(ValueError, match="already defined as a module"):
        store.register(ClassObject(store.root, "Foo"))


def test_resolve_walks_outwards(store: DocumentStore) -> None:
    foo, bar = _tree(store)
    assert store.resolve(bar, "Foo") is foo
    assert store.resolve(foo, "Bar") is bar
    assert store.resolve(store.root, "Bar") is None
    assert store.resolve(bar, "::Foo") is foo


def test_at_and_all(store: DocumentStore) -> None:
    foo, bar = _tree(store)
    assert store.at("") is store.root
    assert store.at("Foo::Bar") is bar
    assert store.at("Nope") is None
    assert store.all() == [foo, bar]
    assert store.all(ClassObject) == [bar]


def test_namespace_methods_by_scope(store: DocumentStore) -> None:
    _, bar = _tree(store)
    inst: MethodObject = store.register(MethodObject(bar, "a"))
    klass: MethodObject = store.register(MethodObject(bar, "b", Scope.CLASS))
    assert bar.methods() == [inst, klass]
    assert bar.methods(Scope.INSTANCE) == [inst]
    assert bar.methods(Scope.CLASS) == [klass]


def test_instance_and_class_method_of_same_name_coexist(store: DocumentStore) -> None:
    _, bar = _tree(store)
    store.register(MethodObject(bar, "new"))
    store.register(MethodObject(bar, "new", Scope.CLASS))
    assert store.paths()[-2:] == ("Foo::Bar#new", "Foo::Bar.new")


def test_add_file_ignores_duplicates(store: DocumentStore) -> None:
    foo, _ = _tree(store)
    foo.add_file("a.rb", 1)
    foo.add_file("a.rb", 1)
    foo.add_file("b.rb", 3)
    assert foo.files == [("a.rb", 1), ("b.rb", 3)]


def test_to_dict(store: DocumentStore) -> None:
    _, bar = _tree(store)
    bar.superclass = "Base"
    data = bar.to_dict()
    assert data["kind"] == "class"
    assert data["path"] == "Foo::Bar"
    assert data["superclass"] == "Base"
    assert data["visibility"] == "public"
    assert data["mixins"] == {"instance": [], "class": []}


def test_clear(store: DocumentStore) -> None:
    _tree(store)
    old_root = store.root
    store.clear()
    assert len(store) == 0
    assert store.root is not old_root


def test_default_store_is_shared() -> None:
    assert get_default_store() is get_default_store()
