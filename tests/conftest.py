"""Pytest configuration and shared fixtures for the qbank test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import SAMPLE_NUMBERING, DocxTestGenerator, cleanup_test_dir, create_test_temp_dir, sample_bank_document

from qbank.ast.nodes import RawQuestionBank

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def sample_raw() -> RawQuestionBank:
    """Provide the raw pair of the synthetic sample bank."""
    return RawQuestionBank(sample_bank_document(), SAMPLE_NUMBERING)


@pytest.fixture
def sample_docx_bytes() -> bytes:
    """Provide a python-docx generated question bank package."""
    return DocxTestGenerator.to_bytes(DocxTestGenerator.create_question_bank_document())


@pytest.fixture(autouse=True)
def reset_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers changed by CLI tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
