"""Tests for sdiff.git.install."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sdiff.git.commands import get_config
from sdiff.git.install import (
    CONFIG_KEYS,
    DIFF_COMMAND,
    DIFFTOOL_CMD,
    DIFFTOOL_PROMPT,
    executable_path,
    install,
    status,
    uninstall,
)

if TYPE_CHECKING:
    from pathlib import Path

EXE = "/opt/bin/sdiff"


class TestInstall:
    """Verify that install writes every key."""

    def test_writes_config(self, isolated_git_config: Path) -> None:
        install(EXE)
        assert get_config(DIFFTOOL_CMD) == f'{EXE} "$LOCAL" "$REMOTE"'
        assert get_config(DIFF_COMMAND) == EXE
        assert get_config(DIFFTOOL_PROMPT) == "false"

    def test_report_mentions_usage(self, isolated_git_config: Path) -> None:
        lines = install(EXE)
        assert lines[0] == "Successfully installed sdiff as git difftool."
        assert "  *.json diff=sdiff" in lines

    def test_quotes_executable_with_spaces(self, isolated_git_config: Path) -> None:
        install("/opt/my tools/sdiff")
        assert get_config(DIFFTOOL_CMD) == "'/opt/my tools/sdiff' \"$LOCAL\" \"$REMOTE\""
        assert get_config(DIFF_COMMAND) == "'/opt/my tools/sdiff'"

    def test_reinstall_overwrites(self, isolated_git_config: Path) -> None:
        install("/old/sdiff")
        install(EXE)
        assert get_config(DIFF_COMMAND) == EXE


class TestUninstall:
    """Verify that uninstall removes every key."""

    def test_removes_config(self, isolated_git_config: Path) -> None:
        install(EXE)
        lines = uninstall()
        assert all(get_config(key) is None for key in CONFIG_KEYS)
        assert lines == ["Successfully uninstalled sdiff from git configuration."]

    def test_uninstall_when_not_installed(self, isolated_git_config: Path) -> None:
        uninstall()
        assert all(get_config(key) is None for key in CONFIG_KEYS)


class TestStatus:
    """Verify the status report."""

    def test_not_configured(self, isolated_git_config: Path) -> None:
        lines = status()
        assert f"  {DIFFTOOL_CMD}: (not configured)" in lines
        assert lines[-1] == "sdiff is not configured. Run 'sdiff --git-install' to set up."

    def test_configured(self, isolated_git_config: Path) -> None:
        install(EXE)
        lines = status()
        assert f"  {DIFF_COMMAND}: {EXE}" in lines
        assert f"  {DIFFTOOL_PROMPT}: false" in lines
        assert "sdiff is configured as a git difftool." in lines


class TestExecutablePath:
    """Verify executable discovery."""

    def test_returns_non_empty_path(self) -> None:
        assert executable_path()
