"""GitResolver: reads ``git:<ref>:<path>`` arguments from repository history."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sdiff.git.commands import GitError, extract_file, find_repo_root, validate_ref

if TYPE_CHECKING:
    from pathlib import Path

_GIT_PREFIX = "git:"


def is_git_ref(value: str) -> bool:
    """Return True if the value uses the git: prefix."""
    return value.startswith(_GIT_PREFIX)


def split_git_ref(value: str) -> tuple[str, str]:
    """Split ``git:<ref>:<path>`` into ``(ref, path)``.

    The ref ends at the first colon after the prefix; the path may itself
    contain colons.

    Raises:
        GitError: If the ref or the path is missing.
    """
    ref, sep, path = value[len(_GIT_PREFIX) :].partition(":")
    if not sep or not ref or not path:
        msg = f"Expected git:<ref>:<path>, got {value!r}"
        raise GitError(msg)
    return ref, path


class GitResolver:
    """Reads file contents for ``git:<ref>:<path>`` arguments.

    The repository root is discovered lazily from *cwd* on first use and
    cached for later reads.

    Usage::

        resolver = GitResolver(cwd=Path("."))
        content, name = resolver.read("git:HEAD~1:config.yaml")
    """

    def __init__(self, *, cwd: Path | None = None) -> None:
        self._cwd = cwd
        self._repo_root: Path | None = None

    def read(self, value: str) -> tuple[bytes, str]:
        """Return the file bytes and a display name for a git argument.

        Raises:
            GitError: If the argument is malformed or git cannot provide
                the file.
        """
        ref, path = split_git_ref(value)
        repo_root = self._get_repo_root()
        sha = validate_ref(ref, repo_root=repo_root)
        content = extract_file(sha, path, repo_root=repo_root)
        return content, f"{ref}:{path}"

    def _get_repo_root(self) -> Path:
        """Lazily discover and cache the repo root."""
        if self._repo_root is None:
            self._repo_root = find_repo_root(self._cwd)
        return self._repo_root
