# File: src/accessor_emulate/test_synthesizer.py
"""
Tests for accessor_emulate.synthesizer.

Classes are created inside each test so generated methods never leak between
tests.
"""

from __future__ import annotations

from typing import Any

import pytest

from accessor_emulate.base import config
from accessor_emulate.errors import AccessDeniedError, HostFrameworkError, InstallationError
from accessor_emulate.host import HostObject, declared_fields
from accessor_emulate.installer import defines_method
from accessor_emulate.naming import follow_best_practice
from accessor_emulate.synthesizer import (
    AccessorMode,
    FieldSpec,
    field_specs,
    make_accessor,
    make_ro_accessor,
    make_wo_accessor,
    mk_accessors,
    mk_ro_accessors,
    mk_wo_accessors,
    private_reader_name,
    private_writer_name,
)
from accessor_emulate.xlogging.logger_constants import TRACE


# ----------------------------------------------------------------------
# Read-write fields
# ----------------------------------------------------------------------


@pytest.mark.parametrize("value", [0, "", None, "x", [1, 2], {"k": "v"}])
def test_read_write_round_trip(value: Any) -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    w = Widget()
    w.foo(value)  # type: ignore[attr-defined]
    assert w.foo() == value  # type: ignore[attr-defined]


def test_writer_returns_instance() -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo", "bar")
    w = Widget()
    assert w.foo(1).bar(2) is w  # type: ignore[attr-defined]
    assert (w.foo(), w.bar()) == (1, 2)  # type: ignore[attr-defined]


def test_many_values_are_stored_as_list() -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    w = Widget()
    w.foo(1, 2, 3)  # type: ignore[attr-defined]
    assert w.foo() == [1, 2, 3]  # type: ignore[attr-defined]
    assert w.get_raw("foo") == [1, 2, 3]


def test_unset_field_reads_none() -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    assert Widget().foo() is None  # type: ignore[attr-defined]


def test_constructor_populates_field_and_keeps_extra_keys() -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    w = Widget(foo=1, bar=2)
    assert w.foo() == 1  # type: ignore[attr-defined]
    assert w.get_raw("bar") == 2


def test_private_delegates_are_installed() -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    w = Widget()
    assert getattr(w, private_writer_name("foo"))(4, 5) is w
    assert getattr(w, private_reader_name("foo"))() == [4, 5]
    # Bare call on the private writer reads
    assert getattr(w, private_writer_name("foo"))() == [4, 5]


def test_field_is_declared_once_per_hierarchy() -> None:
    class Parent(HostObject):
        pass

    class Child(Parent):
        pass

    mk_accessors(Parent, "foo")
    mk_accessors(Child, "foo")

    assert "foo" not in vars(Child).get("__host_fields__", {})
    assert "foo" in declared_fields(Child)
    c = Child(foo=3)
    c.foo(1, 2)  # type: ignore[attr-defined]
    assert c.foo() == [1, 2]  # type: ignore[attr-defined]


# ----------------------------------------------------------------------
# Read-only and write-only fields
# ----------------------------------------------------------------------


def test_read_only_field_has_no_writer() -> None:
    class Record(HostObject):
        pass

    follow_best_practice(Record)
    mk_ro_accessors(Record, "id")

    r = Record(id=7)
    assert r.get_id() == 7  # type: ignore[attr-defined]
    assert not hasattr(Record, "set_id")
    assert not hasattr(Record, "id")


def test_read_only_reader_rejects_arguments() -> None:
    class Record(HostObject):
        pass

    mk_ro_accessors(Record, "id")
    with pytest.raises(TypeError):
        Record(id=1).id(2)  # type: ignore[attr-defined]


def test_read_only_value_still_writable_through_private_writer() -> None:
    class Record(HostObject):
        pass

    mk_ro_accessors(Record, "id")
    r = Record()
    getattr(r, private_writer_name("id"))(9)
    assert r.id() == 9  # type: ignore[attr-defined]


def test_write_only_field_has_no_reader() -> None:
    class Login(HostObject):
        pass

    follow_best_practice(Login)
    mk_wo_accessors(Login, "password")

    login = Login()
    assert login.set_password("hunter2") is login  # type: ignore[attr-defined]
    assert not hasattr(Login, "get_password")
    assert login.get_raw("password") == "hunter2"


def test_write_only_private_reader_denies() -> None:
    class Login(HostObject):
        pass

    mk_wo_accessors(Login, "password")
    login = Login(password="x")
    with pytest.raises(AccessDeniedError) as excinfo:
        getattr(login, private_reader_name("password"))()
    assert excinfo.value.field == "password"
    assert "Login.password" in str(excinfo.value)
    assert isinstance(excinfo.value, AttributeError)


def test_write_only_public_writer_with_identity_naming() -> None:
    class Login(HostObject):
        pass

    mk_wo_accessors(Login, "password")
    login = Login()
    login.password("a", "b")  # type: ignore[attr-defined]
    assert login.get_raw("password") == ["a", "b"]
    with pytest.raises(AccessDeniedError):
        login.password()  # type: ignore[attr-defined]


def test_write_only_after_read_write_keeps_readable_slot() -> None:
    """A slot declared earlier as read-write does not become unreadable."""

    class Parent(HostObject):
        pass

    class Child(Parent):
        pass

    mk_accessors(Parent, "token")
    follow_best_practice(Child)
    mk_wo_accessors(Child, "token")

    c = Child()
    c.set_token("t")  # type: ignore[attr-defined]
    assert getattr(c, private_reader_name("token"))() == "t"
    assert not hasattr(Child, "get_token")


# ----------------------------------------------------------------------
# Naming and non-overwrite
# ----------------------------------------------------------------------


def test_best_practice_names() -> None:
    class Car(HostObject):
        pass

    follow_best_practice(Car)
    mk_accessors(Car, "foo")

    assert defines_method(Car, "get_foo")
    assert defines_method(Car, "set_foo")
    assert not hasattr(Car, "foo")

    car = Car()
    assert car.set_foo(1, 2).get_foo() == [1, 2]  # type: ignore[attr-defined]


def test_policy_switch_does_not_rename_existing_methods() -> None:
    class Car(HostObject):
        pass

    mk_accessors(Car, "make")
    follow_best_practice(Car)
    mk_accessors(Car, "model")

    assert defines_method(Car, "make")
    assert not hasattr(Car, "get_make")
    assert defines_method(Car, "get_model")


def test_hand_written_method_is_not_overwritten() -> None:
    class Widget(HostObject):
        def foo(self) -> str:
            return "hand-written"

    original = vars(Widget)["foo"]
    mk_accessors(Widget, "foo")

    assert vars(Widget)["foo"] is original
    w = Widget(foo=5)
    assert w.foo() == "hand-written"
    assert w.get_raw("foo") == 5


def test_hand_written_reader_keeps_generated_writer() -> None:
    class Car(HostObject):
        def get_make(self) -> str:
            return "always Volvo"

    follow_best_practice(Car)
    mk_accessors(Car, "make")

    car = Car()
    car.set_make("Saab")  # type: ignore[attr-defined]
    assert car.get_make() == "always Volvo"
    assert car.get_raw("make") == "Saab"


def test_repeated_calls_are_harmless() -> None:
    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    mk_accessors(Widget, "foo")
    w = Widget()
    w.foo(1, 2)  # type: ignore[attr-defined]
    assert w.foo() == [1, 2]  # type: ignore[attr-defined]


# ----------------------------------------------------------------------
# Standalone accessors
# ----------------------------------------------------------------------


def test_make_accessor_returns_uninstalled_closure() -> None:
    class Widget(HostObject):
        pass

    accessor = make_accessor(Widget, "size")
    w = Widget()
    assert accessor(w, 3) is w
    assert accessor(w) == 3
    assert accessor.__name__ == "size"
    assert w.size() == 3  # type: ignore[attr-defined]


def test_make_ro_accessor_rejects_writes() -> None:
    class Widget(HostObject):
        pass

    accessor = make_ro_accessor(Widget, "serial")
    w = Widget(serial="A1")
    assert accessor(w) == "A1"
    with pytest.raises(AccessDeniedError) as excinfo:
        accessor(w, "B2")
    assert excinfo.value.operation == "write"
    assert "read-only" in str(excinfo.value)


def test_make_wo_accessor_rejects_reads() -> None:
    class Widget(HostObject):
        pass

    accessor = make_wo_accessor(Widget, "pin")
    w = Widget()
    accessor(w, 1234)
    assert w.get_raw("pin") == 1234
    with pytest.raises(AccessDeniedError):
        accessor(w)


# ----------------------------------------------------------------------
# Errors and introspection
# ----------------------------------------------------------------------


def test_non_host_class_raises() -> None:
    class Plain:
        pass

    with pytest.raises(HostFrameworkError):
        mk_accessors(Plain, "foo")
    assert not hasattr(Plain, "foo")


@pytest.mark.parametrize("field", ["", "has space", "9lives"])
def test_invalid_field_name_raises(field: str) -> None:
    class Widget(HostObject):
        pass

    with pytest.raises(HostFrameworkError):
        mk_accessors(Widget, field)


def test_field_specs_record_modes() -> None:
    class Parent(HostObject):
        pass

    class Child(Parent):
        pass

    mk_accessors(Parent, "a", "b")
    mk_ro_accessors(Child, "b")
    mk_wo_accessors(Child, "c")

    assert field_specs(Parent) == {
        name: FieldSpec(
            name, AccessorMode.READ_WRITE, private_reader_name(name), private_writer_name(name)
        )
        for name in ("a", "b")
    }
    specs = field_specs(Child)
    assert specs["b"].mode is AccessorMode.READ_ONLY
    assert specs["c"].mode is AccessorMode.WRITE_ONLY


def test_private_prefix_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(config.ENV_PRIVATE_PREFIX, "mine")
    monkeypatch.setattr(config, "_settings", None)

    class Widget(HostObject):
        pass

    mk_accessors(Widget, "foo")
    assert private_reader_name("foo") == "_mine_get_foo"
    assert defines_method(Widget, "_mine_set_foo")
    assert Widget(foo=1).foo() == 1  # type: ignore[attr-defined]


def test_synthesis_is_traced(caplog: pytest.LogCaptureFixture) -> None:
    class Widget(HostObject):
        pass

    caplog.set_level(TRACE, logger="accessor_emulate.synthesizer")
    mk_ro_accessors(Widget, "foo")

    messages = [r.getMessage() for r in caplog.records if r.name == "accessor_emulate.synthesizer"]
    assert any("Widget.foo > " in m for m in messages)
    assert any("mode=ro" in m and "writer=None" in m for m in messages)


# ----------------------------------------------------------------------
# Resolved names and private prefix changes
# ----------------------------------------------------------------------


@pytest.mark.parametrize("bad_name", ["read-foo", "1foo", 42])
def test_invalid_resolved_name_leaves_class_untouched(bad_name: Any) -> None:
    """Nothing is declared, wrapped or installed when a resolver returns a bad name."""

    class Odd(HostObject):
        @classmethod
        def accessor_name_for(cls, field: str) -> Any:
            return bad_name

    before = dict(vars(Odd))
    with pytest.raises(InstallationError):
        mk_accessors(Odd, "foo")

    assert dict(vars(Odd)) == before
    assert "foo" not in declared_fields(Odd)
    assert "foo" not in field_specs(Odd)
    assert not Odd(extra=1).has_raw("extra")


def test_invalid_writer_name_ignored_for_read_only_field() -> None:
    class Odd(HostObject):
        @classmethod
        def mutator_name_for(cls, field: str) -> str:
            return "not valid"

    mk_ro_accessors(Odd, "foo")
    assert Odd(foo=1).foo() == 1  # type: ignore[attr-defined]


@pytest.mark.parametrize("empty", [None, ""])
def test_empty_resolved_name_installs_no_method(empty: str | None) -> None:
    class Sealed(HostObject):
        @classmethod
        def mutator_name_for(cls, field: str) -> str | None:
            return empty

    mk_accessors(Sealed, "foo")

    assert "None" not in vars(Sealed)
    assert "" not in vars(Sealed)
    sealed = Sealed(foo=1)
    assert sealed.foo() == 1  # type: ignore[attr-defined]
    with pytest.raises(TypeError):
        sealed.foo(2)  # type: ignore[attr-defined]


def test_prefix_change_keeps_declared_slot(monkeypatch: pytest.MonkeyPatch) -> None:
    class Parent(HostObject):
        pass

    mk_accessors(Parent, "foo")
    old_reader = private_reader_name("foo")

    monkeypatch.setenv(config.ENV_PRIVATE_PREFIX, "other")
    monkeypatch.setattr(config, "_settings", None)

    class Child(Parent):
        pass

    mk_ro_accessors(Child, "foo")
    mk_accessors(Parent, "foo")

    assert private_reader_name("foo") == "_other_get_foo"
    assert not hasattr(Parent, "_other_get_foo")
    assert field_specs(Child)["foo"].private_reader == old_reader
    assert list(declared_fields(Child)) == ["foo"]
    assert Child(foo=4).foo() == 4  # type: ignore[attr-defined]

    # New slots pick up the new prefix
    mk_accessors(Parent, "bar")
    assert defines_method(Parent, "_other_get_bar")
