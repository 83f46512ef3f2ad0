"""Shared fixtures for traversal-fixer tests."""

from pathlib import Path

import pytest

from samples import CLEAN_CODE, TRAVERSAL_ONLY, VULNERABLE_HANDLER


@pytest.fixture
def vulnerable_file(tmp_path: Path) -> Path:
    path = tmp_path / "main.go"
    path.write_text(VULNERABLE_HANDLER, encoding="utf-8")
    return path


@pytest.fixture
def traversal_file(tmp_path: Path) -> Path:
    path = tmp_path / "paths.go"
    path.write_text(TRAVERSAL_ONLY, encoding="utf-8")
    return path


@pytest.fixture
def clean_file(tmp_path: Path) -> Path:
    path = tmp_path / "clean.go"
    path.write_text(CLEAN_CODE, encoding="utf-8")
    return path
