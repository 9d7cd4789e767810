import io

import pytest
from rich.console import Console

import phonebook
from contact_store import ContactStore


@pytest.fixture
def store():
    s = ContactStore()
    yield s
    s.teardown()


@pytest.fixture
def single_bucket_store():
    """Every name collides in a one-bucket table."""
    s = ContactStore(size=1)
    yield s
    s.teardown()


class ScriptedConsole:
    """Swaps ``phonebook.console`` for a recording console fed from a list of answers."""

    def __init__(self, monkeypatch):
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, width=120, color_system=None)
        self._answers = iter(())
        monkeypatch.setattr(self.console, "input", self._input)
        monkeypatch.setattr(phonebook, "console", self.console)

    def feed(self, *answers):
        self._answers = iter(answers)

    def _input(self, prompt="", **kwargs):
        self.console.print(prompt, end="")
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError

    @property
    def output(self):
        return self.buffer.getvalue()


@pytest.fixture
def scripted(monkeypatch):
    return ScriptedConsole(monkeypatch)
