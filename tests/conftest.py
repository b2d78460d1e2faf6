"""
Pytest configuration and fixtures for skillver tests.
"""

import os
import tempfile
from collections.abc import Generator
from datetime import date
from pathlib import Path

import pytest
from typer.testing import CliRunner

from skillver.config.schema import Config

FIXED_DAY = date(2026, 3, 14)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, temp_dir: Path) -> None:
    """Keep tests away from the real home and project configuration."""
    monkeypatch.setenv("SKILLVER_HOME", str(temp_dir / ".skillver-home"))
    monkeypatch.delenv("CLAUDE_PROJECT_DIR", raising=False)
    for key in list(os.environ):
        if key.startswith("SKILLVER_") and key != "SKILLVER_HOME":
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Provide a project root with a managed skills directory."""
    project = temp_dir / "project"
    (project / ".claude" / "skills").mkdir(parents=True)
    return project


@pytest.fixture
def config(project_dir: Path) -> Config:
    """Provide a configuration rooted at the test project."""
    return Config(project_dir=str(project_dir))


@pytest.fixture
def fixed_clock():
    """Provide a clock that always returns the same day."""
    return lambda: FIXED_DAY


@pytest.fixture
def sample_skill_md() -> str:
    """Provide sample versioned SKILL.md content."""
    return """---
name: demo
description: A demo skill for unit tests
---

# Demo Skill

**Version**: 1.2.0
**Last Updated**: 2020-01-01

## Instructions

1. Do something
2. Do something else
"""


@pytest.fixture
def skill_file(project_dir: Path, sample_skill_md: str) -> Path:
    """Provide a versioned SKILL.md inside the managed skills directory."""
    skill_dir = project_dir / ".claude" / "skills" / "demo"
    skill_dir.mkdir(parents=True)
    path = skill_dir / "SKILL.md"
    path.write_text(sample_skill_md, encoding="utf-8")
    return path
