"""Pytest configuration for the grammatch test suite.

Hypothesis profiles:
- dev: local development (200 examples)
- ci: CI=true in the environment (50 examples, derandomized)

Override manually: HYPOTHESIS_PROFILE=ci pytest tests/
"""

import io
import os

import pytest
from hypothesis import settings

settings.register_profile("dev", max_examples=200)
settings.register_profile("ci", max_examples=50, derandomize=True, print_blob=True)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit:
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


@pytest.fixture
def log() -> io.StringIO:
    return io.StringIO()
