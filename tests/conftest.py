"""Shared fixtures: fresh gates, registries and target classes per test."""

import sys
import textwrap

import pytest

import submonkey
from submonkey.main import (
    create_extender,
    create_gate,
    create_monkey,
    create_registry,
    reset_default_state,
)

submonkey.load_builtins()

QUIET = {"strict": False, "log_level": "WARNING"}


@pytest.fixture(autouse=True)
def _fresh_default_state(monkeypatch, tmp_path):
    monkeypatch.delenv("SUBMONKEY_STRICT", raising=False)
    monkeypatch.delenv("SUBMONKEY_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    reset_default_state()


@pytest.fixture
def gate():
    return create_gate()


@pytest.fixture
def registry():
    return create_registry()


@pytest.fixture
def extender():
    return create_extender()


@pytest.fixture
def monkey(gate, registry):
    return create_monkey(gate=gate, registry=registry, config=QUIET)


@pytest.fixture
def sample_cls():
    class Sample:
        def __init__(self):
            self.events = []

        def greet(self, name):
            self.events.append("greet")
            return "Hello, " + name

        def farewell(self, name):
            self.events.append("farewell")
            return "Bye, " + name

        @staticmethod
        def shout(text):
            return text.upper()

        @classmethod
        def kind(cls):
            return cls.__name__

    return Sample


@pytest.fixture
def child_cls(sample_cls):
    class Child(sample_cls):
        pass

    return Child


@pytest.fixture
def sample(monkey, sample_cls):
    """An authorized Sample class."""
    monkey.gate.authorize(sample_cls)
    return sample_cls


TARGET_MODULE = "submonkey_test_targets"


@pytest.fixture
def target_module(tmp_path, monkeypatch):
    """An importable module on disk holding target classes."""
    source = textwrap.dedent(
        """\
        class Greeter:
            def greet(self, name):
                return "Hello, " + name

        class Outer:
            class Inner:
                def ping(self):
                    return "pong"

        not_a_class = 42
        """
    )
    pkg_dir = tmp_path / "modules"
    pkg_dir.mkdir()
    (pkg_dir / f"{TARGET_MODULE}.py").write_text(source)
    monkeypatch.syspath_prepend(str(pkg_dir))
    yield TARGET_MODULE
    sys.modules.pop(TARGET_MODULE, None)
