"""Shared pytest fixtures for contentmodel tests."""

import json
from pathlib import Path
from typing import Any

import pytest

from contentmodel.core.config import CodecConfig


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


def _load(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def role_payload(fixtures_dir: Path) -> dict[str, Any]:
    """A role as returned by the service, with sys metadata."""
    return _load(fixtures_dir / "SampleRole.json")


@pytest.fixture
def content_type_payload(fixtures_dir: Path) -> dict[str, Any]:
    """A content type exercising every field validation kind."""
    return _load(fixtures_dir / "ContentType.json")


@pytest.fixture
def editor_interface_payload(fixtures_dir: Path) -> dict[str, Any]:
    """An editor interface with seven controls; the last three carry typed settings."""
    return _load(fixtures_dir / "EditorInterface.json")


@pytest.fixture
def strict_config() -> CodecConfig:
    return CodecConfig(strict_control_settings=True, preserve_unknown_validators=False)
