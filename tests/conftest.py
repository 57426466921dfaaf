"""Pytest configuration and shared fixtures for the mdprint test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path
from typing import Generator

import pytest
from utils import cleanup_test_dir, create_test_temp_dir, make_jpeg, make_png

from mdprint.options import LayoutOptions


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "pdf: Tests that render PDF output")


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
def image_dir(tmp_path) -> Path:
    """Provide a directory holding a few small images.

    - ``chart.png``: 300x200 at 150 DPI
    - ``plain.png``: 64x32 without a pHYs chunk
    - ``photo.jpg``: 768x1024 JFIF at 72 DPI

    """
    (tmp_path / "chart.png").write_bytes(make_png(300, 200, dpi=150))
    (tmp_path / "plain.png").write_bytes(make_png(64, 32))
    (tmp_path / "photo.jpg").write_bytes(make_jpeg(768, 1024, jfif=(1, 72, 72)))
    return tmp_path


@pytest.fixture
def layout(image_dir) -> LayoutOptions:
    """Provide layout options resolving images against ``image_dir``."""
    return LayoutOptions(base_path=image_dir)


@pytest.fixture
def no_env_config(monkeypatch, tmp_path):
    """Isolate a test from MDPRINT_* variables and discovered config files."""
    for name in ("MDPRINT_SIZE", "MDPRINT_MARGINS", "MDPRINT_IMGSIZE", "MDPRINT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def sample_markdown() -> str:
    """Provide a Markdown document touching every supported construct.

    Returns
    -------
    str
        Markdown text

    """
    return """# Sample Document

This is a **sample document** with _italic text_, some `inline code`
and a [link](https://example.com).

> **Warning** the output file is overwritten.

> A plain quotation.

- Item 1
- Item 2

1. First item
2. Second item

```python
def hello_world():
    print("Hello, <World>!")
```

| Name | Count |
|:-----|------:|
| a    | 1     |
| b    | 2     |

---

![A chart](chart.png)
"""
