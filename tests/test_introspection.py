import functools
from dataclasses import dataclass
from typing import Annotated

import pytest

from pluto.domain import Dependency
from pluto.errors import DependencyError
from pluto.introspection import dependencies_of


def test_function_without_parameters_has_no_dependencies():
    def make_foo():
        pass

    assert dependencies_of(make_foo) == []


def test_parameter_names_are_dependencies_in_declared_order():
    def make_greeter(greeting, name, punctuation):
        pass

    assert [d.component_name for d in dependencies_of(make_greeter)] == [
        "greeting",
        "name",
        "punctuation",
    ]


def test_lambda_parameters_are_dependencies():
    assert dependencies_of(lambda greeting: greeting) == [
        Dependency("greeting", None, "greeting")
    ]


def test_annotated_type_is_recorded():
    def make_greeter(greeting: str):
        pass

    assert dependencies_of(make_greeter) == [Dependency("greeting", str, "greeting")]


def test_annotated_qualifier_names_the_dependency():
    def make_greeter(name: Annotated[str, "user_name"]):
        pass

    assert dependencies_of(make_greeter) == [Dependency("name", str, "user_name")]


def test_constructor_parameters_exclude_self():
    class Greeter:
        def __init__(self, greeting, name):
            self.greeting = greeting
            self.name = name

    assert [d.parameter_name for d in dependencies_of(Greeter)] == [
        "greeting",
        "name",
    ]


def test_dataclass_fields_are_dependencies():
    @dataclass
    class Service:
        db: dict
        printer: object

    assert dependencies_of(Service) == [
        Dependency("db", dict, "db"),
        Dependency("printer", object, "printer"),
    ]


def test_class_without_init_has_no_dependencies():
    class Injected:
        pass

    assert dependencies_of(Injected) == []


def test_variadic_parameters_are_ignored():
    def make_foo(bar, *args, **kwargs):
        pass

    assert dependencies_of(make_foo) == [Dependency("bar", None, "bar")]


def test_keyword_only_and_default_parameters_are_flagged():
    def make_foo(bar, baz="default", *, qux):
        pass

    assert dependencies_of(make_foo) == [
        Dependency("bar", None, "bar"),
        Dependency("baz", None, "baz", keyword_only=False, has_default=True),
        Dependency("qux", None, "qux", keyword_only=True, has_default=False),
    ]

def make_welcome(prefix, name: Annotated[str, "user_name"]):
    return f"{prefix}{name}"


def test_partial_keeps_annotated_qualifier():
    welcome = functools.partial(make_welcome, "Hi ")

    assert dependencies_of(welcome) == [Dependency("name", str, "user_name")]


def test_callable_instance_keeps_annotated_qualifier():
    class Welcome:
        def __call__(self, name: Annotated[str, "user_name"]):
            return f"Welcome, {name}!"

    assert dependencies_of(Welcome()) == [Dependency("name", str, "user_name")]


def test_string_annotation_is_evaluated():
    def make_foo(name: "Annotated[str, 'user_name']"):
        pass

    assert dependencies_of(make_foo) == [Dependency("name", str, "user_name")]


def test_string_annotation_on_partial_is_evaluated():
    def make_foo(prefix, name: "Annotated[str, 'user_name']"):
        pass

    assert dependencies_of(functools.partial(make_foo, "Hi ")) == [
        Dependency("name", str, "user_name")
    ]


def test_unresolvable_string_annotation_raises():
    def make_foo(name: "Missing"):  # noqa: F821
        pass

    with pytest.raises(DependencyError, match="cannot be evaluated"):
        dependencies_of(make_foo)
