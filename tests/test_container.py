from herald.container import Container

import pytest


class Mailer:
    pass


def test_container_singleton():
    container = Container()
    container.register(dict, lambda: {"ok": True})
    a = container.get(dict)
    b = container.get(dict)
    assert a is b
    assert a["ok"]


def test_register_singleton_instance():
    container = Container()
    mailer = Mailer()
    container.register_singleton(Mailer, mailer)
    assert container.has(Mailer)
    assert container.get(Mailer) is mailer


def test_get_unregistered_raises():
    with pytest.raises(ValueError):
        Container().get(Mailer)


def test_make_unregistered_builds_fresh_instances():
    container = Container()
    first = container.make(Mailer)
    second = container.make(Mailer)
    assert isinstance(first, Mailer)
    assert first is not second
    assert not container.has(Mailer)


def test_make_registered_uses_factory():
    container = Container()
    container.register(Mailer, Mailer)
    assert container.make(Mailer) is container.make(Mailer)


def test_reset_clears_singletons():
    container = Container()
    container.register(Mailer, Mailer)
    first = container.get(Mailer)
    container.reset()
    assert container.get(Mailer) is not first
