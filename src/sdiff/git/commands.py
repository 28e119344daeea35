"""Low-level git subprocess wrappers.

Security notes
--------------
Every subprocess call passes list-form arguments with ``shell=False``, so
nothing is ever interpreted by a shell.

Refs and paths supplied by the user go through ``_reject_option_like``
before they reach git. A value such as ``--output=/tmp/x`` is refused
instead of being read as a git flag.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from sdiff.errors import SdiffError

_log = logging.getLogger(__name__)

# ``git config --unset`` exits with 5 when the key does not exist.
_CONFIG_KEY_MISSING = 5


class GitError(SdiffError):
    """Raised when a git operation fails or the environment is invalid."""


def _reject_option_like(value: str, *, label: str) -> None:
    """Raise ``GitError`` if *value* would be parsed by git as an option."""
    if value.startswith("-"):
        msg = f"{label} must not start with '-': {value!r}"
        raise GitError(msg)


def _run_git(
    args: list[str],
    *,
    cwd: Path | None = None,
    text: bool = True,
) -> subprocess.CompletedProcess:
    """Run ``git <args>`` and return the completed process.

    Raises:
        GitError: If the git executable cannot be started.
    """
    cmd = ["git", *args]
    _log.debug("Running %s", " ".join(cmd))
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=text,
            cwd=str(cwd) if cwd is not None else None,
            shell=False,
            check=False,
        )
    except FileNotFoundError as exc:
        msg = "Git is not installed or not in PATH"
        raise GitError(msg) from exc


def find_repo_root(cwd: Path | None = None) -> Path:
    """Return the absolute path to the enclosing repository root.

    Args:
        cwd: Working directory to search from. Defaults to process cwd.

    Raises:
        GitError: If not inside a git repository.
    """
    result = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    if result.returncode != 0:
        msg = "Not inside a git repository"
        if cwd is not None:
            msg = f"{msg}: {cwd}"
        raise GitError(msg)
    return Path(result.stdout.strip())


def validate_ref(ref: str, *, repo_root: Path) -> str:
    """Resolve a ref (branch, tag, ``HEAD~2``...) to its full commit SHA.

    Raises:
        GitError: If the ref is option-like or cannot be resolved.
    """
    _reject_option_like(ref, label="Git ref")
    result = _run_git(["rev-parse", "--verify", f"{ref}^{{commit}}"], cwd=repo_root)
    if result.returncode != 0:
        stderr = result.stderr.strip()
        msg = f"Invalid git ref '{ref}'"
        if stderr:
            msg = f"{msg}: {stderr}"
        raise GitError(msg)
    return result.stdout.strip()


def extract_file(ref: str, path_in_repo: str, *, repo_root: Path) -> bytes:
    """Return the raw bytes of a file as it exists at *ref*.

    Args:
        ref: Validated git ref.
        path_in_repo: POSIX path of the file relative to the repo root.
        repo_root: Absolute path to the git repo root.

    Raises:
        GitError: If the path does not exist at that ref.
    """
    _reject_option_like(ref, label="Git ref")
    _reject_option_like(path_in_repo, label="Path")
    result = _run_git(["show", f"{ref}:{path_in_repo}"], cwd=repo_root, text=False)
    if result.returncode != 0:
        stderr = result.stderr.decode(errors="replace").strip()
        msg = f"Path '{path_in_repo}' does not exist at ref '{ref}'"
        if stderr:
            msg = f"{msg}: {stderr}"
        raise GitError(msg)
    return result.stdout


def get_config(key: str) -> str | None:
    """Return a global git config value, or None when the key is unset."""
    result = _run_git(["config", "--global", "--get", key])
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def set_config(key: str, value: str) -> None:
    """Set a global git config value.

    Raises:
        GitError: If git rejects the write.
    """
    result = _run_git(["config", "--global", key, value])
    if result.returncode != 0:
        msg = f"Failed to set git config '{key}': {result.stderr.strip()}"
        raise GitError(msg)


def unset_config(key: str) -> None:
    """Remove a global git config value; a key that is already absent is fine.

    Raises:
        GitError: If git fails for any other reason.
    """
    result = _run_git(["config", "--global", "--unset", key])
    if result.returncode not in (0, _CONFIG_KEY_MISSING):
        msg = f"Failed to unset git config '{key}': {result.stderr.strip()}"
        raise GitError(msg)
