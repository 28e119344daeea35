"""Registering sdiff as a git difftool and external diff driver.

Each operation returns the lines it wants shown to the user; printing is
left to the caller.
"""

from __future__ import annotations

import shlex
import shutil
import sys
from pathlib import Path

from sdiff.git.commands import get_config, set_config, unset_config

DIFFTOOL_CMD = "difftool.sdiff.cmd"
DIFFTOOL_PROMPT = "difftool.sdiff.prompt"
DIFF_COMMAND = "diff.sdiff.command"

CONFIG_KEYS = (DIFFTOOL_CMD, DIFFTOOL_PROMPT, DIFF_COMMAND)

_NOT_CONFIGURED = "(not configured)"

_USAGE = [
    "Usage:",
    "  git difftool -t sdiff HEAD~1 -- file.json",
    "  git difftool -t sdiff branch1 branch2 -- config.yaml",
]

_ATTRIBUTES_HINT = [
    "To use automatically for specific files, add to .gitattributes:",
    "  *.json diff=sdiff",
    "  *.yaml diff=sdiff",
    "  *.toml diff=sdiff",
]


def executable_path() -> str:
    """Return the command git should run to invoke sdiff.

    Prefers the installed ``sdiff`` script on PATH, falling back to the
    script that started this process.
    """
    found = shutil.which("sdiff")
    if found:
        return found
    return str(Path(sys.argv[0]).resolve())


def install(executable: str | None = None) -> list[str]:
    """Write the global git configuration that routes diffs through sdiff.

    Args:
        executable: Command to register. Defaults to :func:`executable_path`.

    Raises:
        GitError: If git refuses a configuration write.
    """
    # git runs both commands through the shell
    exe = shlex.quote(executable or executable_path())
    set_config(DIFFTOOL_CMD, f'{exe} "$LOCAL" "$REMOTE"')
    set_config(DIFF_COMMAND, exe)
    set_config(DIFFTOOL_PROMPT, "false")
    return [
        "Successfully installed sdiff as git difftool.",
        "",
        *_USAGE,
        "",
        *_ATTRIBUTES_HINT,
    ]


def uninstall() -> list[str]:
    """Remove every sdiff key from the global git configuration."""
    for key in CONFIG_KEYS:
        unset_config(key)
    return ["Successfully uninstalled sdiff from git configuration."]


def status() -> list[str]:
    """Describe the current global git configuration for sdiff."""
    values = {key: get_config(key) for key in CONFIG_KEYS}
    lines = ["Git sdiff configuration status:", ""]
    lines.extend(f"  {key}: {value or _NOT_CONFIGURED}" for key, value in values.items())
    lines.append("")

    if values[DIFFTOOL_CMD] or values[DIFF_COMMAND]:
        lines.extend(["sdiff is configured as a git difftool.", "", *_USAGE[:2]])
    else:
        lines.append("sdiff is not configured. Run 'sdiff --git-install' to set up.")
    return lines
