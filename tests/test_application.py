import asyncio

import pytest

from pluto.application import Application
from pluto.container import Container, create_container
from pluto.errors import UnmappedNameError


def greeter_factory(greeting, name):
    def greet():
        return f"{greeting}, {name}!"

    return greet


@pytest.fixture
def container() -> Container:
    def setup(bind):
        bind("greeting").to_instance("Hello")
        bind("name").to_instance(asyncio.sleep(0, result="World"))
        bind("greet").to_factory(greeter_factory)

    return create_container(setup)


@pytest.mark.asyncio
async def test_eager_load_serves_values_synchronously(container):
    app = await container.eagerly_load_all()

    assert app["greet"]() == "Hello, World!"
    assert app.get("name") == "World"
    assert app.get("missing") is None


@pytest.mark.asyncio
async def test_eager_load_contains_every_bound_name(container):
    app = await container.eagerly_load_all()

    assert set(app) == set(container.names())
    assert len(app) == 6
    assert app["pluto_binder"] is container
    assert app["pluto_app"] is app
    assert app["pluto_graph"] is container.graph


@pytest.mark.asyncio
async def test_eager_load_invokes_each_target_once():
    invocations = []

    class Counted:
        def __init__(self, greeting):
            invocations.append("constructor")
            self.greeting = greeting

    def make_greeting():
        invocations.append("factory")
        return "Hello"

    container = Container(self_bindings=False)
    container("greeting").to_factory(make_greeting)
    container("counted").to_constructor(Counted)

    app = await container.eagerly_load_all()

    assert sorted(invocations) == ["constructor", "factory"]
    assert app["counted"] is await container.get("counted")
    assert sorted(invocations) == ["constructor", "factory"]


@pytest.mark.asyncio
async def test_eager_load_fails_if_any_binding_fails():
    container = Container(self_bindings=False)
    container("greet").to_factory(greeter_factory)

    with pytest.raises(UnmappedNameError, match="nothing is mapped"):
        await container.eagerly_load_all()


@pytest.mark.asyncio
async def test_eager_load_picks_up_later_bindings(container):
    await container.eagerly_load_all()
    container("farewell").to_instance("Goodbye")

    app = await container.eagerly_load_all()

    assert app["farewell"] == "Goodbye"


@pytest.mark.asyncio
async def test_application_is_injectable_and_filled_by_eager_load(container):
    container("holder").to_factory(lambda pluto_app: pluto_app)

    app = await container.eagerly_load_all()

    assert app["holder"] is app
    assert app["holder"]["greeting"] == "Hello"


def test_application_is_read_only():
    app = Application()

    with pytest.raises(TypeError):
        app["greeting"] = "Hello"
    with pytest.raises(KeyError):
        app["greeting"]
    assert len(app) == 0
