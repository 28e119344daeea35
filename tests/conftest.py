"""Shared test fixtures for sdiff."""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

OLD_CONFIG_JSON = """\
{
  "name": "api",
  "version": "1.0",
  "replicas": 2,
  "ports": [80, 443],
  "metadata": {"owner": "ops", "updated": "2024-01-01"}
}
"""

NEW_CONFIG_YAML = """\
name: api
version: "1.1"
replicas: 2.0
ports:
  - 80
  - 443
  - 8080
metadata:
  owner: ops
  updated: "2024-02-01"
"""


@pytest.fixture
def config_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write an old JSON and a new YAML config with known differences.

    Differences:
        version            "1.0" -> "1.1"                (modified)
        ports[2]           8080                          (added)
        metadata.updated   "2024-01-01" -> "2024-02-01"  (modified)

    ``replicas`` is 2 on one side and 2.0 on the other, which is equal.
    """
    old = tmp_path / "old.json"
    new = tmp_path / "new.yaml"
    old.write_text(OLD_CONFIG_JSON)
    new.write_text(NEW_CONFIG_YAML)
    return old, new


@pytest.fixture
def equal_files(tmp_path: Path) -> tuple[Path, Path]:
    """Write a JSON and a TOML file holding the same data in different key order."""
    old = tmp_path / "same.json"
    new = tmp_path / "same.toml"
    old.write_text('{"b": 1, "a": {"x": true, "y": "text"}}\n')
    new.write_text('b = 1\n\n[a]\ny = "text"\nx = true\n')
    return old, new


def _run_git(repo: Path, *args: str) -> None:
    """Run a git command inside the given repo."""
    subprocess.run(
        ["git", *args],
        cwd=str(repo),
        check=True,
        capture_output=True,
    )


@pytest.fixture
def isolated_git_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point git's global configuration at a throwaway file.

    Returns the path of the global config file (it may not exist yet).
    """
    home = tmp_path / "home"
    home.mkdir()
    config = home / ".gitconfig"
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(config))
    return config


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository holding a config file in two commits.

    Layout after setup:

    main branch, first commit (tag ``v1``):
        config.json     -> {"name": "api", "replicas": 2}
        settings.yaml   -> "debug: false\\n"

    main branch, second commit (HEAD):
        config.json     -> {"name": "api", "replicas": 3}   (modified)
        settings.yaml   -> unchanged

    Returns the repo root path.
    """
    repo = tmp_path / "repo"
    repo.mkdir()

    _run_git(repo, "init", "--initial-branch=main")
    _run_git(repo, "config", "user.email", "test@test.com")
    _run_git(repo, "config", "user.name", "Test")

    (repo / "config.json").write_text('{"name": "api", "replicas": 2}\n')
    (repo / "settings.yaml").write_text("debug: false\n")
    _run_git(repo, "add", ".")
    _run_git(repo, "commit", "-m", "initial")
    _run_git(repo, "tag", "v1")

    (repo / "config.json").write_text('{"name": "api", "replicas": 3}\n')
    _run_git(repo, "add", ".")
    _run_git(repo, "commit", "-m", "scale up")

    return repo
