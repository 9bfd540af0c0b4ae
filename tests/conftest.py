# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- write_input: factory writing a delimited input file under tmp_path
- diagnostics: CollectingDiagnostics capturing skipped rows
- reset_logging: restores structlog and root logger state after each test

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from csv2json.plugins.diagnostics import CollectingDiagnostics

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an input file and returning its path.

    Usage:
        path = write_input("name,age\\nAlice,30\\n")
        path = write_input("a;b\\n1;2\\n", name="semi.csv")
    """

    def _write(content: str, name: str = "input.csv", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        # newline="" keeps the caller's line endings byte-for-byte
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)
        return path

    return _write


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    """Diagnostics sink that records every skipped row."""
    return CollectingDiagnostics()


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Undo configure_logging() so handlers never outlive captured streams."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    structlog.reset_defaults()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
