"""Pytest configuration and shared fixtures for the mdnormalize test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import logging
from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
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
def restore_root_logging() -> Generator[None, None, None]:
    """Restore root logger handlers and level after a test that configures logging."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


@pytest.fixture
def sample_text() -> str:
    """Provide sample Markdown in a non-canonical style.

    Returns
    -------
    str
        Document mixing ``*`` bullets, ``_`` emphasis, ``***`` rules and a
        Setext heading.

    """
    return """Sample Document
===============

This is a **sample document** with _italic text_ and some `inline code`.

## Section 2

Here is a list:
* Item 1
* Item 2
* Item 3

***

And a numbered list:
1. First item
2. Second item
3. Third item

### Code Block

```python
def hello_world():
    print("Hello, World!")
```

#### Table Example

| Header 1 | Header 2 | Header 3 |
|----------|----------|----------|
| Row 1    | Data 1   | Value 1  |
| Row 2    | Data 2   | Value 2  |
"""


@pytest.fixture
def canonical_sample_text() -> str:
    """Provide the normalized form of ``sample_text``.

    Returns
    -------
    str
        Expected output of normalizing ``sample_text``.

    """
    return """# Sample Document

This is a **sample document** with *italic text* and some `inline code`.

## Section 2

Here is a list:

- Item 1
- Item 2
- Item 3

---

And a numbered list:

1. First item
2. Second item
3. Third item

### Code Block

```python
def hello_world():
    print("Hello, World!")
```

#### Table Example

| Header 1 | Header 2 | Header 3 |
| --- | --- | --- |
| Row 1 | Data 1 | Value 1 |
| Row 2 | Data 2 | Value 2 |
"""
