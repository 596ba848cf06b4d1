"""
Shared pytest fixtures and configuration for LearnStyle tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import sys
from pathlib import Path

import pytest
from loguru import logger

# Make the project root importable so tests can use `src.` imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def answers_for(styles):
    """Map a list of option ids onto q1..qN in bank order."""
    return {f"q{i}": style for i, style in enumerate(styles, start=1)}


@pytest.fixture(autouse=True)
def memory_persistence(monkeypatch):
    """
    Auto-fixture keeping default-built stores in memory.

    Tests that need files build a JsonFileBackend on tmp_path explicitly.
    """
    from src.config import config

    monkeypatch.setattr(config.classification, "persistence_backend", "memory")
    monkeypatch.setattr(config.classification, "default_age_band", "primary")


@pytest.fixture
def log_messages():
    """
    Capture loguru output for assertions.

    Returns:
        list: Formatted log messages emitted during the test
    """
    messages = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def memory_store():
    """Store backed by process memory."""
    from src.utils.persistence import ClassificationStore, InMemoryBackend

    return ClassificationStore(InMemoryBackend())


@pytest.fixture
def file_store(tmp_path):
    """Store backed by a JSON file under tmp_path."""
    from src.utils.persistence import ClassificationStore, JsonFileBackend

    return ClassificationStore(JsonFileBackend("learner-test", tmp_path / "classifications"))


@pytest.fixture
def five_item_bank():
    """
    Five-item bank with the reference option ids.

    Returns:
        tuple: QuestionnaireItem objects q1..q5
    """
    from src.models.questionnaire import REFERENCE_ITEM_BANK

    return REFERENCE_ITEM_BANK


@pytest.fixture
def answers():
    """Helper building a q1..qN response mapping from option ids."""
    return answers_for


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
