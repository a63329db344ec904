"""
Shared pytest fixtures and utilities for testing drilleval.

This module provides:
- Utilities for testing Pydantic validation
- Engine settings and lexicon fixtures
- Seeded random sources for blank selection
"""

import random

import pytest
from typing import Any, Type
from pydantic import BaseModel, ValidationError

from drilleval.core.config import Settings, get_settings
from drilleval.text.lexicon import default_lexicon


@pytest.fixture
def assert_validation_error():
    """Helper to assert that a ValidationError is raised with expected details."""
    def _assert_validation(
        model_class: Type[BaseModel],
        data: dict[str, Any],
        expected_field: str | None = None,
        expected_type: str | None = None,
    ) -> ValidationError:
        """
        Assert that creating a model raises ValidationError.

        Args:
            model_class: The Pydantic model class
            data: Invalid data to pass to model
            expected_field: Expected field name in error (optional)
            expected_type: Expected error type (optional)

        Returns:
            The ValidationError that was raised
        """
        with pytest.raises(ValidationError) as exc_info:
            model_class(**data)

        error = exc_info.value
        if expected_field:
            field_errors = [e for e in error.errors() if e['loc'] and e['loc'][0] == expected_field]
            assert len(field_errors) > 0, f"Expected error for field '{expected_field}' not found"

        if expected_type:
            assert any(
                expected_type in str(e['type']).lower() for e in error.errors()
            ), f"Expected error type containing '{expected_type}' not found"

        return error

    return _assert_validation


@pytest.fixture
def settings() -> Settings:
    """Settings built from defaults only (no environment or .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def lexicon():
    """The packaged Arabic lexicon."""
    return default_lexicon()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for repeatable blank selection."""
    return random.Random(1234)


@pytest.fixture(autouse=True)
def _fresh_settings_cache():
    """Drop cached settings so environment overrides never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


pytestmark = [
    pytest.mark.filterwarnings("ignore::DeprecationWarning"),
]
