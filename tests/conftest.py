"""
Shared fixtures for the Inclusive Jobs test suite.
"""

import io

import pytest

from inclusive_jobs.accessibility.bridge import AccessibilityBridge
from inclusive_jobs.accessibility.dom import Document
from inclusive_jobs.config import AppConfig
from inclusive_jobs.monitoring import logging as structured_logging
from inclusive_jobs.storage import MemoryStorage
from inclusive_jobs.testing import MockSpeechBackend


@pytest.fixture(autouse=True)
def quiet_structured_logger():
    """Route structured events into a buffer instead of stderr."""
    buffer = io.StringIO()
    structured_logging.configure_logging("debug", output=buffer, json_format=True)
    yield buffer
    structured_logging._global_logger = None


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def document():
    return Document()


@pytest.fixture
def mock_backend():
    return MockSpeechBackend()


@pytest.fixture
def config(tmp_path):
    return AppConfig(data_dir=tmp_path)


@pytest.fixture
def bridge(config, storage, document, mock_backend):
    b = AccessibilityBridge(config, storage, document, mock_backend)
    yield b
    b.teardown()
