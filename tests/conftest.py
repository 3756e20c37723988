"""Pytest configuration and shared fixtures for framecut tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: tests that drive the CLI or REST API end to end"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared job fixtures
# =============================================================================


@pytest.fixture
def bar_job() -> dict[str, Any]:
    """Moulding job: four cuts from 300 cm bars."""
    return {
        "schema_version": "1.0",
        "stock": {"kind": "bar", "length": 300, "name": "Oak moulding", "code": "M-12"},
        "pieces": [
            {"width": 200, "label": "Top"},
            {"width": 150, "label": "Side"},
            {"width": 100, "label": "Bottom"},
            {"width": 50, "label": "Spacer"},
        ],
    }


@pytest.fixture
def sheet_job() -> dict[str, Any]:
    """Glass job: two 60x60 panes from 100x100 sheets."""
    return {
        "schema_version": "1.0",
        "stock": {"kind": "sheet", "width": 100, "height": 100, "name": "Float glass"},
        "pieces": [{"width": 60, "height": 60, "quantity": 2, "label": "Glass"}],
    }


@pytest.fixture
def write_job(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes a job dict to a JSON file in tmp_path."""

    def _write(data: dict[str, Any], name: str = "job.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data))
        return path

    return _write
