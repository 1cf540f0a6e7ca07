"""Shared fixtures for topic-news tests."""

import threading

import pytest
from fakes import FakeGenerator, RecordingClipboard


@pytest.fixture()
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()


@pytest.fixture()
def gate() -> threading.Event:
    return threading.Event()
