"""Shared fixtures for project board tests."""

import pytest

from pkg.board.app import ProjectBoard
from pkg.board.config import BoardConfig
from pkg.board.markup import DEFAULT_MARKUP
from pkg.board.store import ProjectStore
from pkg.board.surface import Document


@pytest.fixture
def store():
    return ProjectStore()


@pytest.fixture
def document():
    return Document.from_markup(DEFAULT_MARKUP)


@pytest.fixture
def board():
    return ProjectBoard(BoardConfig())


@pytest.fixture
def recorder():
    """Listener that records every snapshot it receives."""
    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, snapshot):
            self.calls.append(snapshot)

    return Recorder()
